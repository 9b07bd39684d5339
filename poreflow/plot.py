"""Pictures of the fluid distribution in the network."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from poreflow.bmp import Bitmap
from poreflow.config import PhysicalParameters
from poreflow.meniscus import Meniscus

IMAGE_SIZE = PhysicalParameters().image_size


def render_without_radius(
    mns: Sequence[Sequence[Meniscus]], image_size: int = IMAGE_SIZE
) -> Bitmap:
    """Draw every tube as a strip of equal thickness."""
    table = list(reversed(mns))
    rows = len(table)
    cols = len(table[0])
    length = image_size // (max(rows, cols) + 2)
    thick = length // 10

    bitmap = Bitmap(image_size, image_size)
    y = length
    for row, line in enumerate(table):
        x = length + length * (row % 2)
        for col, meniscus in enumerate(line[:cols]):
            sign = -1 if (row % 2) ^ (col % 2) else 1
            bitmap.draw_strip(
                x, y, length, thick, sign, meniscus.pos_long(), meniscus.fluid
            )
            if sign > 0:
                x += 2 * length
        y += length
    return bitmap


def render_with_radius(
    mns: Sequence[Sequence[Meniscus]],
    radius: Sequence[Sequence[float]],
    image_size: int = IMAGE_SIZE,
) -> Bitmap:
    """Draw every tube with a thickness that grows with its radius."""
    rows = len(radius)
    cols = len(radius[0])
    table = list(reversed(mns))
    radii = list(reversed(radius))

    max_radius = max([-1.0, *(r for line in radii for r in line)])
    min_radius = min([1e12, *(r for line in radii for r in line)])

    effective_length = image_size // (max(len(table[0]), len(table)) + 2)
    max_thick = effective_length / 2.0
    min_thick = effective_length / 6.0

    bitmap = Bitmap(image_size, image_size)
    y = effective_length
    for row in range(rows):
        line = table[row]
        x = effective_length + effective_length * (row % 2)
        for col in range(cols):
            sign = (1 - 2 * (row % 2)) * (1 - 2 * (col % 2))
            thick = min_thick
            if max_radius != min_radius:
                thick += (radii[row][col] - min_radius) * (max_thick - min_thick) / (
                    max_radius - min_radius
                )
            meniscus = line[col]
            bitmap.draw_vector(
                x,
                y,
                effective_length,
                thick,
                sign,
                meniscus.n,
                meniscus.pos,
                meniscus.fluid,
            )
            if sign > 0:
                x += 2 * effective_length
        y += effective_length
    return bitmap


def plot_without_radius(
    mns: Sequence[Sequence[Meniscus]],
    count: int,
    folder: str | Path,
    image_size: int = IMAGE_SIZE,
) -> Path:
    """Save the strip picture as ``stp-<count>.bmp`` in folder."""
    path = Path(folder)
    path.mkdir(parents=True, exist_ok=True)
    target = path / f"stp-{count}.bmp"
    render_without_radius(mns, image_size).save(target)
    return target


def plot_with_radius(
    mns: Sequence[Sequence[Meniscus]],
    radius: Sequence[Sequence[float]],
    count: int,
    folder: str | Path,
    image_size: int = IMAGE_SIZE,
) -> Path:
    """Save the radius-scaled picture as ``pic-<count>.bmp`` in folder."""
    path = Path(folder)
    path.mkdir(parents=True, exist_ok=True)
    target = path / f"pic-{count}.bmp"
    render_with_radius(mns, radius, image_size).save(target)
    return target