"""Moving fluid through the nodes and into the tubes for one time step."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from poreflow.config import PhysicalParameters
from poreflow.dimension import Dimension
from poreflow.meniscus import Meniscus


@dataclass
class Fluid:
    """Volumes of blue and grey fluid."""

    blue: float = 0.0
    grey: float = 0.0


@dataclass
class Tank:
    """Fluid collected at a node, poured out blue first."""

    fluid: Fluid = field(default_factory=Fluid)
    blue_present: bool = False
    grey_present: bool = False

    def add_fluid(self, add: Sequence[float]) -> None:
        """Add the volumes ``add`` = [blue, grey]; non-positive ones are ignored."""
        if add[0] > 0.0:
            self.fluid.blue += add[0]
            self.blue_present = True
        if add[-1] > 0.0:
            self.fluid.grey += add[-1]
            self.grey_present = True

    def pour_out(self, vol: float) -> Fluid:
        """Take out ``vol`` of fluid, blue before grey."""
        if not self.blue_present and not self.grey_present:
            return Fluid()
        if not self.grey_present:
            self.fluid.blue = max(0.0, self.fluid.blue - vol)
            return Fluid(blue=vol)
        if not self.blue_present:
            self.fluid.grey = max(0.0, self.fluid.grey - vol)
            return Fluid(grey=vol)
        if vol < self.fluid.blue:
            self.fluid.blue -= vol
            return Fluid(blue=vol)
        result = Fluid(blue=self.fluid.blue, grey=vol - self.fluid.blue)
        self.fluid.blue = 0.0
        self.fluid.grey = max(0.0, self.fluid.grey - result.grey)
        return result


@dataclass
class FluidTableResult:
    """Fluid entering each tube, plus injection and expulsion at open nodes."""

    fluid_table: list[list[Fluid]]
    injection: list[float]
    expulsion: list[float]


@dataclass
class IntegrationResult:
    """New meniscus table and the volumes injected and expelled."""

    new_mns: list[list[Meniscus]]
    fluid_injected: list[float]
    fluid_expelled: list[float]


def calculate_fluid_table(
    radius: Sequence[Sequence[float]],
    mns: Sequence[Sequence[Meniscus]],
    velocity: Sequence[Sequence[float]],
    volume: Sequence[Sequence[float]],
    dimension: Dimension,
    time_step: float,
    params: PhysicalParameters,
) -> FluidTableResult:
    """Collect fluid at every node and share it among the outgoing tubes."""
    table: list[list[Fluid]] = dimension.empty_table(Fluid)
    injection: list[float] = []
    expulsion: list[float] = []

    for row in range(dimension.node_rows()):
        for col in range(dimension.node_cols(row)):
            tank = Tank()
            outgoing: list[tuple[float, int, int]] = []
            incoming_vol = 0.0
            outgoing_vol = 0.0

            tubes = dimension.tubes_connected_to_node(row, col)
            for direction, tube in enumerate(tubes):
                if not tube.active:
                    continue
                rad = radius[tube.row][tube.col]
                vel = velocity[tube.row][tube.col]
                vol = volume[tube.row][tube.col]
                if Meniscus.flows_into_node(direction, vel):
                    tube_length = params.tube_length_const / (rad * rad)
                    tank.add_fluid(
                        mns[tube.row][tube.col].vol_fluid_into_nodes(
                            rad, direction, vel, time_step, tube_length
                        )
                    )
                    incoming_vol += vol
                else:
                    outgoing.append((rad, tube.row, tube.col))
                    outgoing_vol += vol

            # Narrow tubes receive the wetting fluid first.
            outgoing.sort(key=lambda item: item[0])

            if dimension.is_any_open_node(row, col):
                if outgoing_vol > incoming_vol:
                    injected = outgoing_vol - incoming_vol
                    injection.append(injected)
                    expulsion.append(0.0)
                    if dimension.is_injector_plate_node(row, col):
                        tank.add_fluid([2 * injected, 0.0])
                    else:
                        tank.add_fluid([0.0, 2 * injected])
                else:
                    injection.append(0.0)
                    expulsion.append(incoming_vol - outgoing_vol)

            for _, tube_row, tube_col in outgoing:
                table[tube_row][tube_col] = tank.pour_out(volume[tube_row][tube_col])

    return FluidTableResult(table, injection, expulsion)


def combine_fluid_additions(
    radius: Sequence[Sequence[float]],
    mns: Sequence[Sequence[Meniscus]],
    velocity: Sequence[Sequence[float]],
    dimension: Dimension,
    fluid_table: Sequence[Sequence[Fluid]],
    params: PhysicalParameters,
) -> list[list[Meniscus]]:
    """A new meniscus table with the fluid additions pushed into each tube."""
    result = [
        [Meniscus(m.n, m.fluid, list(m.pos)) for m in row] for row in mns
    ]
    for row in range(dimension.rows):
        for col in range(dimension.cols):
            added = fluid_table[row][col]
            result[row][col].update(
                velocity[row][col],
                radius[row][col],
                [added.blue, added.grey],
                params.tube_length_const,
            )
    return result


def integrate(
    radius: Sequence[Sequence[float]],
    mns: Sequence[Sequence[Meniscus]],
    velocity: Sequence[Sequence[float]],
    volume: Sequence[Sequence[float]],
    dimension: Dimension,
    time_step: float,
    params: PhysicalParameters,
) -> IntegrationResult:
    """Advance the fluid distribution by one time step."""
    tables = calculate_fluid_table(
        radius, mns, velocity, volume, dimension, time_step, params
    )
    new_mns = combine_fluid_additions(
        radius, mns, velocity, dimension, tables.fluid_table, params
    )
    return IntegrationResult(new_mns, tables.injection, tables.expulsion)