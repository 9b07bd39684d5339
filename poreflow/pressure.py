"""Node pressures from flow conservation in the tube network."""

from __future__ import annotations

from typing import Sequence

from poreflow.config import PI, PhysicalParameters
from poreflow.dimension import Dimension
from poreflow.linear import gauss_elimination
from poreflow.meniscus import Meniscus


def combined_capillary_sign(internal: int, add_table: int, direction: int) -> int:
    """Meniscus sign plus the node correction, flipped for downward directions."""
    add = -add_table if direction > 1 else add_table
    return internal + add


def build_equations(
    radius: Sequence[Sequence[float]],
    mns: Sequence[Sequence[Meniscus]],
    add_mns: Sequence[Sequence[int]],
    dimension: Dimension,
    total_flow_rate: float,
    params: PhysicalParameters,
) -> list[list[float]]:
    """Augmented matrix of the node pressures plus the injection pressure."""
    equations = dimension.empty_aug_matrix()
    input_node = dimension.total_nodes() - 1

    for row in range(dimension.node_rows()):
        for col in range(dimension.node_cols(row)):
            linear = dimension.linear_node_from_coordinate(row, col)
            equation = equations[linear]

            if dimension.is_open_node(row, col):
                equation[linear] = 1.0
                equation[-1] = params.pressure_right
                continue
            if dimension.is_injector_plate_node(row, col):
                equation[linear] = 1.0
                equation[input_node] = -1.0
                continue

            tubes = dimension.tubes_connected_to_node(row, col)
            for direction, tube in enumerate(tubes):
                if not tube.active:
                    continue
                r = radius[tube.row][tube.col]
                meniscus = mns[tube.row][tube.col]
                tube_length = params.tube_length_const / (r * r)
                sign = combined_capillary_sign(
                    meniscus.capillary_sign(direction),
                    add_mns[tube.row][tube.col],
                    direction,
                )
                k = r**3 / meniscus.mu(params.mu1, params.mu2) / tube_length
                equation[linear] += r * k
                equation[tube.linear_node] -= r * k
                equation[-1] -= params.sigma * 2 * sign * k

    injection = equations[-1]
    for row in range(0, dimension.node_rows(), 2):
        tubes = dimension.tubes_connected_to_node(row, 0)
        for direction, tube in enumerate(tubes):
            if not tube.active:
                continue
            r = radius[tube.row][tube.col]
            meniscus = mns[tube.row][tube.col]
            tube_length = params.tube_length_const / (r * r)
            a = PI * r**4 / (8.0 * meniscus.mu(params.mu1, params.mu2) * tube_length)
            sign = combined_capillary_sign(
                meniscus.capillary_sign(direction),
                add_mns[tube.row][tube.col],
                direction,
            )
            injection[input_node] += a
            injection[tube.linear_node] -= a
            injection[-1] -= a * params.sigma * 2 * sign / r
    injection[-1] += total_flow_rate

    return equations


def calculate_pressure(
    radius: Sequence[Sequence[float]],
    mns: Sequence[Sequence[Meniscus]],
    add_mns: Sequence[Sequence[int]],
    dimension: Dimension,
    total_flow_rate: float,
    params: PhysicalParameters,
) -> list[float]:
    """Pressure at every node; the last entry is the injection pressure."""
    equations = build_equations(
        radius, mns, add_mns, dimension, total_flow_rate, params
    )
    return gauss_elimination(equations)