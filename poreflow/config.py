"""Configuration files, physical parameters and shared constants."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from enum import Enum

PI = math.acos(-1.0)
HUGE = sys.float_info.max

INPUT_FOLDER = "run/input/"
RADIUS_FILE = "tradius.txt"
LENGTH_FILE = "tlength.txt"
MNS_FILE = "tmns.txt"
SIMULATION_CONFIG_FILE = "simulation_config.txt"
INCONGEN_CONFIG_FILE = "incongen_config.txt"

OUTPUT_FOLDER = "run/output/"


class ConfigError(ValueError):
    """Raised when a configuration line cannot be understood."""


class RadiusMode(Enum):
    CONSTANT = "constant"
    IMBIBITION = "imbibition"
    FUNCTION = "function"


class LengthMode(Enum):
    CONSTANT = "constant"
    INVERSE_RADIUS = "inverse_radius"


class MnsMode(Enum):
    SATURATE_OIL = "saturate_oil"
    SATURATE_WATER = "saturate_water"
    IMBIBITION = "imbibition"


@dataclass(frozen=True)
class PhysicalParameters:
    """Physical and numerical constants used by the simulation steps."""

    sigma: float = 7.56e-2
    mu1: float = 1e-3
    mu2: float = 1e-3
    tube_length_const: float = 1.0
    pressure_right: float = 0.0
    trimmer_precision: float = 1e-6
    time_div: float = 10.0
    ignore_vel: float = 1e8
    image_size: int = 1000
    plot_each_n: int = 100
    total_flow_rate: float = 1000.0


def split_assignment(line: str) -> tuple[str, str]:
    """Split ``key=value`` at the first ``=``.

    Without an ``=`` both halves are the whole line.
    """
    key, sep, value = line.partition("=")
    if not sep:
        return line, line
    return key, value


def _parse_float(text: str) -> float:
    try:
        return float(text)
    except ValueError as exc:
        raise ConfigError(f"not a number: {text!r}") from exc


def _parse_int(text: str) -> int:
    try:
        return int(text)
    except ValueError as exc:
        raise ConfigError(f"not an integer: {text!r}") from exc


def constant_extraction(text: str) -> float | None:
    """Return the value of ``constant=<x>``, or None if text is not a constant."""
    prefix = "constant"
    if not text.startswith(prefix):
        return None
    return _parse_float(split_assignment(text)[1])


@dataclass
class IncongenConfig:
    """Settings for the initial-conditions generator."""

    nrows: int | None = None
    ncols: int | None = None
    tradius: tuple[RadiusMode, float | None] | None = None
    tlength: tuple[LengthMode, float | None] | None = None
    tmns: MnsMode | None = None

    def set(self, line: str) -> None:
        """Apply one ``category=value`` line."""
        category, value = split_assignment(line.strip())
        if category == "nrows":
            self.nrows = _parse_int(value)
        elif category == "ncols":
            self.ncols = _parse_int(value)
        elif category == "tradius":
            self.tradius = self._radius(value)
        elif category == "tlength":
            self.tlength = self._length(value)
        elif category == "tmns":
            self.tmns = self._mns(value)
        else:
            raise ConfigError(f"category not recognized: {category!r}")

    @staticmethod
    def _radius(value: str) -> tuple[RadiusMode, float | None]:
        constant = constant_extraction(value)
        if constant is not None:
            return RadiusMode.CONSTANT, constant
        if value == "imbibition":
            return RadiusMode.IMBIBITION, None
        if value == "function":
            return RadiusMode.FUNCTION, None
        raise ConfigError(f"tradius value not recognized: {value!r}")

    @staticmethod
    def _length(value: str) -> tuple[LengthMode, float | None]:
        constant = constant_extraction(value)
        if constant is not None:
            return LengthMode.CONSTANT, constant
        if value == "inverse_radius":
            return LengthMode.INVERSE_RADIUS, None
        raise ConfigError(f"tlength value not recognized: {value!r}")

    @staticmethod
    def _mns(value: str) -> MnsMode:
        try:
            return MnsMode(value)
        except ValueError as exc:
            raise ConfigError(f"tmns value not recognized: {value!r}") from exc

    def valid(self) -> bool:
        """True once every setting has been given."""
        return None not in (self.nrows, self.ncols, self.tradius, self.tlength, self.tmns)


@dataclass
class SimulationConfig:
    """Fluid properties and injection rate for a simulation run."""

    sigma: float | None = None
    mu_water: float | None = None
    mu_oil: float | None = None
    total_volumetric_flow_rate: float | None = None

    _CATEGORIES = ("sigma", "mu_water", "mu_oil", "total_volumetric_flow_rate")

    def set(self, line: str) -> None:
        """Apply one ``category=value`` line."""
        category, raw = split_assignment(line.strip())
        value = _parse_float(raw)
        if category not in self._CATEGORIES:
            raise ConfigError(f"unrecognized category: {category!r}")
        setattr(self, category, value)

    def valid(self) -> bool:
        """True once every setting has been given."""
        return None not in (
            self.sigma,
            self.mu_oil,
            self.mu_water,
            self.total_volumetric_flow_rate,
        )