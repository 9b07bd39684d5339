"""Fluid arrangement inside a single tube, described by its menisci."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import accumulate
from typing import Sequence

from poreflow.config import PI, PhysicalParameters

TRIMMER_PRECISION = PhysicalParameters().trimmer_precision

Compartments = list[tuple[int, float]]


def centre_of_mass(l1: float, l2: float, l3: float, l4: float) -> list[float]:
    """Merge the segments [l1, l2] and [l3, l4] into one segment of the same
    total length, centred on their common centre of mass."""
    d1 = l2 - l1
    d2 = l4 - l3
    d = d1 + d2
    c1 = (l1 + l2) / 2
    c2 = (l3 + l4) / 2
    centre = (c1 * d1 + c2 * d2) / d
    start = centre - d / 2
    return [start, start + d]


def _fmt(value: float) -> str:
    return f"{value:g}"


@dataclass
class Meniscus:
    """Up to two menisci in a tube.

    ``n`` is the number of menisci, ``fluid`` the fluid at the start of the
    tube (0 is the invading blue fluid, 1 the defending grey fluid) and
    ``pos`` the normalised meniscus positions; only the first ``n`` count.
    """

    n: int = 0
    fluid: int = 1
    pos: list[float] = field(default_factory=lambda: [0.0, 0.0])

    def __post_init__(self) -> None:
        self.fluid = int(bool(self.fluid))
        positions = [float(p) for p in self.pos]
        self.pos = (positions + [0.0, 0.0])[:2]

    def __str__(self) -> str:
        return f"[n={self.n}, t={self.fluid}, pos={_fmt(self.pos[0])}, {_fmt(self.pos[1])}]"

    @classmethod
    def from_tokens(cls, tokens: Sequence[str]) -> "Meniscus":
        """Build from the four fields ``n fluid pos1 pos2``."""
        if len(tokens) != 4:
            raise ValueError(f"a meniscus needs 4 fields, got {len(tokens)}")
        n_text, fluid_text, p1, p2 = tokens
        n = int(n_text)
        fluid = int(fluid_text)
        if fluid not in (0, 1):
            raise ValueError(f"fluid must be 0 or 1, got {fluid_text!r}")
        return cls(n, fluid, [float(p1), float(p2)])

    def to_text(self) -> str:
        """The four fields ``n fluid pos1 pos2`` separated by spaces."""
        return f"{self.n} {self.fluid} {_fmt(self.pos[0])} {_fmt(self.pos[1])}"

    def pos_long(self) -> list[float]:
        """Positions framed by the tube ends: [0, ..., 1]."""
        return [0.0, *self.pos[: self.n], 1.0]

    def pos_long_reversed(self) -> list[float]:
        """Long positions as seen from the other end of the tube."""
        return [1.0 - x for x in reversed(self.pos_long())]

    def fluid_reversed(self) -> int:
        """Fluid at the far end of the tube."""
        return (self.n + self.fluid) % 2

    def capillary_sign(self, direction: int) -> int:
        """Sign of the capillary pressure seen from a node in ``direction``.

        Zero when the number of menisci is even.
        """
        direction_sign = -1 if direction > 1 else 1
        fluid_sign = -1 if self.fluid else 1
        return direction_sign * fluid_sign * (self.n % 2)

    def mu(self, mu1: float, mu2: float) -> float:
        """Length-weighted viscosity of the fluids in the tube."""
        viscosities = (mu1, mu2)
        pos = self.pos_long()
        return sum(
            viscosities[(i + self.fluid) % 2] * (end - start)
            for i, (start, end) in enumerate(zip(pos, pos[1:]))
        )

    @staticmethod
    def flows_into_node(direction: int, velocity: float) -> bool:
        """True when fluid moves out of the tube into the node."""
        return (direction < 2) != (velocity >= 0)

    def _fluid_from_direction(self, direction: int) -> int:
        return self.fluid_reversed() if direction > 1 else self.fluid

    def _pos_from_direction(self, direction: int) -> list[float]:
        return self.pos_long_reversed() if direction > 1 else self.pos_long()

    def _fluid_from_vel(self, vel: float) -> int:
        return self.fluid_reversed() if vel < 0 else self.fluid

    def _pos_from_vel(self, vel: float) -> list[float]:
        return self.pos_long_reversed() if vel < 0 else self.pos_long()

    def _pos_fluid_into_nodes(self, direction: int, pos_length: float) -> list[float]:
        pos = self._pos_from_direction(direction)
        start_fluid = self._fluid_from_direction(direction)
        amounts = [0.0, 0.0]
        for i, (start, end) in enumerate(zip(pos, pos[1:])):
            if start >= pos_length:
                break
            amounts[(start_fluid + i) % 2] += min(pos_length, end) - start
        return amounts

    def vol_fluid_into_nodes(
        self,
        radius: float,
        direction: int,
        velocity: float,
        time_step: float,
        length_tube: float,
    ) -> list[float]:
        """Volumes [blue, grey] leaving the tube towards the node in one step."""
        length_pos = abs(velocity) * time_step / length_tube
        area = PI * radius**2
        return [
            x * length_tube * area
            for x in self._pos_fluid_into_nodes(direction, length_pos)
        ]

    def _existing_compartments(self, vel: float, displacement: float) -> Compartments:
        pos = self._pos_from_vel(vel)
        start_fluid = self._fluid_from_vel(vel)
        limit = 1.0 - displacement
        compartments: Compartments = []
        for i, (start, end) in enumerate(zip(pos, pos[1:])):
            if start >= limit:
                break
            length = min(limit, end) - start
            if length < TRIMMER_PRECISION:
                continue
            compartments.append(((start_fluid + i) % 2, length))
        return compartments

    @staticmethod
    def _addition_compartments(l1: float, l2: float) -> Compartments:
        compartments: Compartments = []
        if l1 > TRIMMER_PRECISION:
            compartments.append((0, l1))
        if l2 > TRIMMER_PRECISION:
            compartments.append((1, l2))
        return compartments

    @staticmethod
    def _merge_equal_neighbours(compartments: Compartments) -> Compartments:
        merged: Compartments = []
        for fluid, length in compartments:
            if merged and merged[-1][0] == fluid:
                merged[-1] = (fluid, merged[-1][1] + length)
            else:
                merged.append((fluid, length))
        return merged

    @staticmethod
    def _recombine(start_fluid: int, pos_new: list[float]) -> tuple[int, list[float]]:
        if len(pos_new) < 3:
            return start_fluid, pos_new
        if len(pos_new) == 3:
            if start_fluid:
                return start_fluid, centre_of_mass(*pos_new, 1.0)
            return 1 - start_fluid, centre_of_mass(0.0, *pos_new)
        if len(pos_new) == 4:
            return start_fluid, centre_of_mass(*pos_new)
        raise ValueError(f"too many menisci to recombine: {len(pos_new)}")

    def update(
        self,
        vel: float,
        rad: float,
        add: Sequence[float],
        tube_length_const: float,
    ) -> None:
        """Push the volumes ``add`` = [blue, grey] into the tube and rearrange."""
        if vel == 0.0:
            return
        pseudo_length = tube_length_const / (rad * rad)
        area = PI * rad**2
        l1 = add[0] / area / pseudo_length
        l2 = add[-1] / area / pseudo_length

        merged = self._addition_compartments(l1, l2) + self._existing_compartments(
            vel, l1 + l2
        )
        if vel < 0:
            merged.reverse()
        compartments = self._merge_equal_neighbours(merged)
        if not compartments:
            raise ValueError("tube left without any fluid")

        positions = list(accumulate(length for _, length in compartments))[:-1]
        fluid, positions = self._recombine(compartments[0][0], positions)

        self.n = len(positions)
        self.fluid = fluid
        self.pos[: self.n] = positions

    def sum_first_fluid(self) -> float:
        """Fraction of the tube filled with the blue fluid."""
        pos = self.pos_long()
        return sum(pos[i] - pos[i - 1] for i in range(1 + self.fluid, len(pos), 2))

    def printable(self) -> float:
        """Percentage of the dominant fluid, negative when grey dominates."""
        blue = self.sum_first_fluid()
        grey = 1.0 - blue
        if blue > grey:
            return blue * 100
        return -grey * 100

    def fluid_near_node(self, direction: int) -> int:
        """Fluid at the tube end touching the node in ``direction``."""
        if direction > 1:
            return (self.n + self.fluid) % 2
        return self.fluid