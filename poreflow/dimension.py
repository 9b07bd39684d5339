"""Geometry of the diamond-lattice tube network."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence


@dataclass
class Tube:
    """A tube attached to a node, and the node at its far end."""

    row: int
    col: int
    linear_node: int
    active: bool = True

    def __str__(self) -> str:
        return (
            f"Tube a={int(self.active)}, (r={self.row}, c={self.col}), "
            f"ln={self.linear_node}"
        )


@dataclass(frozen=True)
class Dimension:
    """Size of a network of ``rows`` x ``cols`` tubes."""

    rows: int = 0
    cols: int = 0

    @classmethod
    def from_table(cls, table: Sequence[Sequence[Any]]) -> "Dimension":
        """Dimension of a table given as a list of rows."""
        return cls(len(table), len(table[0]) if table else 0)

    def node_rows(self) -> int:
        return self.rows + 1

    def node_cols(self, row: int) -> int:
        return self.cols // 2 - (row % 2) + 1

    def total_nodes(self) -> int:
        """Number of nodes plus one extra unknown for the injection pressure."""
        return 1 + ((self.rows + 1) * (self.cols + 1) + 1) // 2

    def linear_node_from_coordinate(self, row: int, col: int) -> int:
        return (row * (self.cols + 1) + (row % 2)) // 2 + col

    def linear_node_at_ends_of_tube(self, row: int, col: int) -> tuple[int, int]:
        """Linear indices of the lower-row and upper-row nodes of a tube."""
        first = self.linear_node_from_coordinate(
            row, col // 2 + (col % 2) * ((row + 1) % 2)
        )
        second = self.linear_node_from_coordinate(
            row + 1, col // 2 + (col % 2) * (row % 2)
        )
        return first, second

    def tubes_connected_to_node(self, row: int, col: int) -> list[Tube]:
        """The four tubes around a node, in direction order 0..3."""
        linear = self.linear_node_from_coordinate(row, col)
        half = self.cols // 2
        shift = row % 2
        tubes = [
            Tube(row - 1, 2 * col - 1 + shift, linear - half - 1),
            Tube(row - 1, 2 * col + shift, linear - half),
            Tube(row, 2 * col + shift, linear + half + 1),
            Tube(row, 2 * col - 1 + shift, linear + half),
        ]
        if shift:
            return tubes

        inactive: set[int] = set()
        if row == 0:
            inactive |= {0, 1}
        if col == 0:
            inactive |= {0, 3}
        if 2 * col == self.cols:
            inactive |= {1, 2}
        if row == self.rows:
            inactive |= {2, 3}
        for direction in inactive:
            tubes[direction].active = False
        return tubes

    def empty_table(self, value: Any = 0.0) -> list[list[Any]]:
        """A rows x cols table filled with value, or with value() if callable."""
        if callable(value):
            return [[value() for _ in range(self.cols)] for _ in range(self.rows)]
        return [[value] * self.cols for _ in range(self.rows)]

    def empty_aug_matrix(self) -> list[list[float]]:
        """Zero augmented matrix for the node pressure equations."""
        n = self.total_nodes()
        return [[0.0] * (n + 1) for _ in range(n)]

    def is_open_node(self, row: int, col: int) -> bool:
        """True for the outlet nodes on the right edge."""
        if row % 2:
            return False
        return col == self.node_cols(row) - 1

    def is_injector_plate_node(self, row: int, col: int) -> bool:
        """True for the inlet nodes on the left edge."""
        if row % 2:
            return False
        return col == 0

    def is_any_open_node(self, row: int, col: int) -> bool:
        return self.is_open_node(row, col) or self.is_injector_plate_node(row, col)