"""Minimal 24-bit BMP canvas used to draw the tube network."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

SIZE_HEADER_BMP = 54
SIZE_DIB_HEADER_BMP = 40
PADDING_FACTOR_BMP = 4
COLOUR_BYTES = 3
PRINT_RESOLUTION = 2835  # pixels per metre

_HEADER = struct.Struct("<2sIIIIiiHHIIiiII")


@dataclass(frozen=True)
class Colour:
    """An RGB colour with 8-bit channels."""

    red: int = 0
    green: int = 0
    blue: int = 0

    def to_bytes(self) -> bytes:
        """Pixel bytes in BMP order: blue, green, red."""
        return bytes((self.blue & 0xFF, self.green & 0xFF, self.red & 0xFF))


BLACK = Colour(0, 0, 0)
GREY_DARK = Colour(64, 64, 64)
GREY = Colour(0, 0, 255)
GREY_LIGHT = Colour(255, 0, 0)
WHITE = Colour(255, 255, 255)
BROWN = Colour(128, 0, 0)
RED = Colour(255, 0, 0)
ORANGE = Colour(255, 165, 0)
YELLOW = Colour(255, 255, 0)
GREEN = Colour(0, 255, 0)
GREEN_DARK = Colour(0, 128, 0)
BLUE = Colour(0, 0, 255)
CYAN = Colour(0, 255, 255)
MAGENTA = Colour(255, 0, 255)
PURPLE = Colour(128, 0, 128)

PIPE_COLOURS = (GREY, GREY_LIGHT)


def _half(value: int) -> int:
    """Half of value, truncated towards zero."""
    return int(value / 2)


def colour_trim(val: float, height: float) -> int:
    """Clamp a channel value into [0, height]."""
    return max(0, min(int(val), int(height)))


def rainbow_scale(val: float, low: float, high: float) -> Colour:
    """Map val in [low, high] onto a blue-green-red scale."""
    height = 255.0
    val_dash = val - (high + low) / 2.0
    slope = 4.0 * height / (high - low)
    red = int(slope * val_dash)
    green = int(2.0 * height - slope * abs(val_dash))
    blue = -red
    return Colour(
        colour_trim(red, height),
        colour_trim(green, height),
        colour_trim(blue, height),
    )


class Bitmap:
    """A width x height canvas with a foreground colour for drawing.

    Pixels drawn outside the canvas are ignored.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.background = WHITE
        self.foreground = BLACK
        self._data = [[self.background] * width for _ in range(height)]

    @property
    def padding(self) -> int:
        row = COLOUR_BYTES * self.width
        padded = (row + PADDING_FACTOR_BMP - 1) // PADDING_FACTOR_BMP * PADDING_FACTOR_BMP
        return padded - row

    def _size_bitmap(self) -> int:
        return self.height * (self.width * COLOUR_BYTES + self.padding)

    def _set(self, x: int, y: int, colour: Colour) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self._data[y][x] = colour

    def pixel(self, x: int, y: int) -> Colour:
        """Colour at (x, y); raises IndexError outside the canvas."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        return self._data[y][x]

    def _header(self) -> bytes:
        size_bitmap = self._size_bitmap()
        return _HEADER.pack(
            b"BM",
            SIZE_HEADER_BMP + size_bitmap,
            0,
            SIZE_HEADER_BMP,
            SIZE_DIB_HEADER_BMP,
            self.width,
            self.height,
            1,
            24,
            0,
            size_bitmap,
            PRINT_RESOLUTION,
            PRINT_RESOLUTION,
            0,
            0,
        )

    def to_bytes(self) -> bytes:
        """The whole BMP file."""
        pad = bytes(self.padding)
        rows = (b"".join(c.to_bytes() for c in row) + pad for row in self._data)
        return self._header() + b"".join(rows)

    def save(self, path: str | Path) -> None:
        Path(path).write_bytes(self.to_bytes())

    def draw_rectangle(self, x1: int, y1: int, x2: int, y2: int) -> None:
        """Fill the rectangle between two corners, inclusive, with the foreground."""
        for x in range(min(x1, x2), max(x1, x2) + 1):
            for y in range(min(y1, y2), max(y1, y2) + 1):
                self._set(x, y, self.foreground)

    def draw_centre_rectangle(self, x: int, y: int, width: int, height: int) -> None:
        # The lower vertical edge is placed using the width, as it always was.
        self.draw_rectangle(
            x - _half(width), y - _half(width), x + _half(width), y + _half(height)
        )

    def draw_centre_square(self, x: int, y: int, dimension: int) -> None:
        self.draw_centre_rectangle(x, y, dimension, dimension)

    def draw_vector(
        self,
        x: int,
        y: int,
        effective_length: int,
        thick: float,
        sign: int,
        n_mns: int,
        pos: Sequence[float],
        fluid: int,
    ) -> None:
        """Draw a diagonal tube whose fluids alternate at the meniscus positions."""
        lateral = int(thick)
        coordinates = [0] + [int(p * effective_length) for p in pos[:n_mns]]
        coordinates.append(effective_length)
        current = int(fluid)
        for start, end in zip(coordinates, coordinates[1:]):
            colour = PIPE_COLOURS[current]
            for i in range(start, end + 1):
                j = _half(-lateral)
                while 2 * j <= lateral:
                    self._set(x + sign * i + j, y + i, colour)
                    j += 1
            current = (current + 1) % 2

    def draw_strip(
        self,
        x: int,
        y: int,
        length: int,
        thick: int,
        sign: int,
        pos_mns: Sequence[float],
        fluid: int,
    ) -> None:
        """Draw a thick diagonal strip from long meniscus positions [0, ..., 1]."""
        length -= thick
        scaled = [p * length for p in pos_mns]
        half_thick = _half(thick)
        for k in range(1, len(scaled)):
            colour = PIPE_COLOURS[(k + 1 + int(fluid)) % 2]
            for i in range(int(scaled[k - 1]), int(scaled[k]) + 1):
                j = _half(-thick)
                while 2 * j <= thick:
                    px = x + sign * (i + half_thick) + j
                    py = y + i + half_thick - sign * j
                    self._set(px, py, colour)
                    self._set(px + 1, py, colour)
                    j += 1