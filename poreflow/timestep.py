"""Choice of the integration time step."""

from __future__ import annotations

import math
from typing import Sequence

from poreflow.config import PhysicalParameters
from poreflow.dimension import Dimension

TIME_DIV = PhysicalParameters().time_div


def decide_time_step(
    radius: Sequence[Sequence[float]],
    velocity: Sequence[Sequence[float]],
    dimension: Dimension,
    tube_length_const: float,
) -> float:
    """A step in which no fluid moves more than 1/TIME_DIV of a tube length.

    Returns infinity when nothing moves.
    """
    max_vel = 0.0
    for row in range(dimension.rows):
        for col in range(dimension.cols):
            r = radius[row][col]
            length = tube_length_const / (r * r)
            max_vel = max(abs(velocity[row][col]) / length, max_vel)
    if max_vel == 0.0:
        return math.inf
    return 1.0 / max_vel / TIME_DIV