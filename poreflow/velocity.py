"""Flow velocity in every tube from the node pressures."""

from __future__ import annotations

from typing import Sequence

from poreflow.config import PhysicalParameters
from poreflow.dimension import Dimension
from poreflow.meniscus import Meniscus

IGNORE_VEL = PhysicalParameters().ignore_vel


def _refine(velocity: Sequence[Sequence[float]], ignore_vel: float) -> list[list[float]]:
    largest = max((abs(x) for row in velocity for x in row), default=-1.0)
    threshold = max(largest, -1.0) / ignore_vel
    return [[0.0 if abs(x) < threshold else x for x in row] for row in velocity]


def refine_velocity(velocity: Sequence[Sequence[float]]) -> list[list[float]]:
    """Zero the velocities far smaller than the largest one."""
    return _refine(velocity, IGNORE_VEL)


def calculate_velocity(
    radius: Sequence[Sequence[float]],
    mns: Sequence[Sequence[Meniscus]],
    add_mns: Sequence[Sequence[int]],
    pressure: Sequence[float],
    dimension: Dimension,
    params: PhysicalParameters,
) -> list[list[float]]:
    """Velocity along each tube; positive means towards the higher node row."""
    velocity = dimension.empty_table(0.0)
    for row in range(dimension.rows):
        for col in range(dimension.cols):
            lower, upper = dimension.linear_node_at_ends_of_tube(row, col)
            delp = pressure[upper] - pressure[lower]
            rad = radius[row][col]
            meniscus = mns[row][col]
            tube_length = params.tube_length_const / (rad * rad)
            mu = meniscus.mu(params.mu1, params.mu2)
            sign = meniscus.capillary_sign(0) + add_mns[row][col]
            velocity[row][col] = (
                rad / 8 / mu / tube_length * (delp * rad + sign * 2 * params.sigma)
            )
    return _refine(velocity, params.ignore_vel)