"""Per-tube volumes and the capillary correction table."""

from __future__ import annotations

from typing import Sequence

from poreflow.config import PI
from poreflow.dimension import Dimension
from poreflow.meniscus import Meniscus


def capillary_contribution(direction: int) -> int:
    """Capillary pressure contribution of a tube seen from ``direction``."""
    return -1 if direction > 1 else 1


def determine_volume(
    radius: Sequence[Sequence[float]],
    velocity: Sequence[Sequence[float]],
    time_step: float,
    dimension: Dimension,
) -> list[list[float]]:
    """Volume that moves through each tube during ``time_step``."""
    return [
        [
            abs(velocity[row][col]) * PI * radius[row][col] ** 2 * time_step
            for col in range(dimension.cols)
        ]
        for row in range(dimension.rows)
    ]


def gen_add_mns(
    mns: Sequence[Sequence[Meniscus]], dimension: Dimension
) -> list[list[int]]:
    """Extra capillary signs for grey tube ends that meet blue fluid at a node."""
    add_mns: list[list[int]] = dimension.empty_table(0)
    for row in range(dimension.node_rows()):
        for col in range(dimension.node_cols(row)):
            grey_ends = []
            blue_present = False
            tubes = dimension.tubes_connected_to_node(row, col)
            for direction, tube in enumerate(tubes):
                if not tube.active:
                    continue
                if mns[tube.row][tube.col].fluid_near_node(direction):
                    grey_ends.append((direction, tube))
                else:
                    blue_present = True
            if not blue_present:
                continue
            for direction, tube in grey_ends:
                add_mns[tube.row][tube.col] += capillary_contribution(direction)
    return add_mns