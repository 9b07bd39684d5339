"""Measurements of fluid volumes and capillary pressure in the network."""

from __future__ import annotations

import math
from typing import Sequence

from poreflow.dimension import Dimension
from poreflow.meniscus import Meniscus


def _ratio(num: float, den: float) -> float:
    """Floating division that gives inf or nan instead of raising."""
    if den == 0:
        return math.nan if num == 0 or math.isnan(num) else math.copysign(math.inf, num)
    return num / den


def is_inside(low: int, val: int, high: int) -> bool:
    return low <= val <= high


def wetting_fluid_proportion(
    radius: Sequence[Sequence[float]], mns: Sequence[Sequence[Meniscus]]
) -> float:
    """Share of blue fluid, weighted by the square of each tube radius."""
    total = 0.0
    blue = 0.0
    for radius_row, mns_row in zip(radius, mns):
        for r, meniscus in zip(radius_row, mns_row):
            rsq = r**2
            blue += meniscus.sum_first_fluid() * rsq
            total += rsq
    return _ratio(blue, total)


class FluidProportion:
    """Fluid volumes and capillary pressure inside and outside a region."""

    def __init__(self, time: float = -1.0) -> None:
        self.time = time
        self._vol_inner = 0.0
        self._vol_outer = 0.0
        self._vol_blue_inner = 0.0
        self._vol_blue_outer = 0.0
        self._cap_pressure_inner = 0.0
        self._cap_pressure_outer = 0.0
        self._area_inner = 0.0
        self._area_outer = 0.0

    def add_blue(self, rad: float, blue_ppr: float, inner: bool) -> None:
        """Count a tube of radius rad holding blue_ppr blue fluid."""
        vol = rad**2.0
        if inner:
            self._vol_inner += vol
            self._vol_blue_inner += vol * blue_ppr
        else:
            self._vol_outer += vol
            self._vol_blue_outer += vol * blue_ppr

    def add_capillary_pressure(self, sigma: float, rad: float, inner: bool) -> None:
        """Count the capillary pressure of a meniscus in a tube of radius rad."""
        area = rad**2.0
        local = 2.0 * sigma * rad
        if inner:
            self._cap_pressure_inner += local
            self._area_inner += area
        else:
            self._cap_pressure_outer += local
            self._area_outer += area

    def vol_tube_inner(self) -> float:
        return self._vol_inner

    def vol_tube_outer(self) -> float:
        return self._vol_outer

    def vol_tube_total(self) -> float:
        return self.vol_tube_inner() + self.vol_tube_outer()

    def vol_blue_inner(self) -> float:
        return self._vol_blue_inner

    def vol_blue_outer(self) -> float:
        return self._vol_blue_outer

    def vol_blue_total(self) -> float:
        return self.vol_blue_inner() + self.vol_blue_outer()

    def vol_grey_inner(self) -> float:
        return self.vol_tube_inner() - self.vol_blue_inner()

    def vol_grey_outer(self) -> float:
        return self.vol_tube_outer() - self.vol_blue_outer()

    def vol_grey_total(self) -> float:
        return self.vol_grey_inner() + self.vol_grey_outer()

    def ppr_blue_inner(self) -> float:
        return _ratio(self.vol_blue_inner(), self.vol_tube_inner())

    def ppr_blue_outer(self) -> float:
        return _ratio(self.vol_blue_outer(), self.vol_tube_outer())

    def ppr_blue_total(self) -> float:
        return _ratio(self.vol_blue_total(), self.vol_tube_total())

    def ppr_grey_inner(self) -> float:
        return _ratio(self.vol_grey_inner(), self.vol_tube_inner())

    def ppr_grey_outer(self) -> float:
        return _ratio(self.vol_grey_outer(), self.vol_tube_outer())

    def ppr_grey_total(self) -> float:
        return _ratio(self.vol_grey_total(), self.vol_tube_total())

    def average_capillary_pressure_inside(self) -> float:
        return _ratio(self._cap_pressure_inner, self._area_inner)

    def average_capillary_pressure_outside(self) -> float:
        return _ratio(self._cap_pressure_outer, self._area_outer)

    @staticmethod
    def header() -> list[str]:
        """Column names matching :meth:`values`."""
        return [
            "time",
            "vol_tube_outer",
            "vol_tube_inner",
            "vol_tube_total",
            "vol_blue_inner",
            "vol_blue_outer",
            "vol_blue_total",
            "vol_grey_inner",
            "vol_grey_outer",
            "vol_grey_total",
            "ppr_blue_inner",
            "ppr_blue_outer",
            "ppr_blue_total",
            "ppr_grey_inner",
            "ppr_grey_outer",
            "ppr_grey_total",
            "average_capillary_pressure_inside",
            "average_capillary_pressure_outside",
        ]

    def values(self) -> list[float]:
        """One row of measurements in the order of :meth:`header`."""
        return [
            self.time,
            self.vol_tube_outer(),
            self.vol_tube_inner(),
            self.vol_tube_total(),
            self.vol_blue_inner(),
            self.vol_blue_outer(),
            self.vol_blue_total(),
            self.vol_grey_inner(),
            self.vol_grey_outer(),
            self.vol_grey_total(),
            self.ppr_blue_inner(),
            self.ppr_blue_outer(),
            self.ppr_blue_total(),
            self.ppr_grey_inner(),
            self.ppr_grey_outer(),
            self.ppr_grey_total(),
            self.average_capillary_pressure_inside(),
            self.average_capillary_pressure_outside(),
        ]


def fluid_proportion(
    radius: Sequence[Sequence[float]],
    mns: Sequence[Sequence[Meniscus]],
    time: float,
    row_b: int,
    col_b: int,
    row_e: int,
    col_e: int,
    dimension: Dimension,
    sigma: float,
) -> FluidProportion:
    """Measure the region between two corner tubes against the rest."""
    result = FluidProportion(time)
    rmin, rmax = min(row_b, row_e), max(row_b, row_e)
    cmin, cmax = min(col_b, col_e), max(col_b, col_e)
    for row in range(dimension.rows):
        for col in range(dimension.cols):
            rad = radius[row][col]
            meniscus = mns[row][col]
            inside = is_inside(rmin, row, rmax) and is_inside(cmin, col, cmax)
            result.add_blue(rad, meniscus.sum_first_fluid(), inside)
            if meniscus.n % 2 == 0:
                continue
            result.add_capillary_pressure(sigma, rad, inside)
    return result