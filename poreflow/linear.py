"""Solving the node pressure equations."""

from __future__ import annotations

from typing import Sequence


def gauss_elimination(matrix: Sequence[Sequence[float]]) -> list[float]:
    """Solve an n x (n+1) augmented system by Gauss-Jordan elimination.

    No pivoting is done; a zero pivot raises ValueError. The input is not
    modified.
    """
    rows = [[float(x) for x in row] for row in matrix]
    n = len(rows)

    for i, pivot_row in enumerate(rows):
        divider = pivot_row[i]
        if divider == 0:
            raise ValueError(f"zero pivot in row {i}")
        pivot_row[i:] = [x / divider for x in pivot_row[i:]]
        for target in rows[i + 1 :]:
            coeff = target[i]
            if coeff == 0:
                continue
            target[i:] = [t - p * coeff for t, p in zip(target[i:], pivot_row[i:])]

    for i in range(n - 1, 0, -1):
        value = rows[i][-1]
        for target in rows[:i]:
            target[-1] -= target[i] * value
            target[i] = 0.0

    return [row[-1] for row in rows]