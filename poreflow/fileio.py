"""Reading and writing the simulation input tables and reports."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import islice
from pathlib import Path
from typing import Any, Callable, Sequence, TypeVar

from poreflow.config import (
    INCONGEN_CONFIG_FILE,
    INPUT_FOLDER,
    LENGTH_FILE,
    MNS_FILE,
    RADIUS_FILE,
    SIMULATION_CONFIG_FILE,
    ConfigError,
    IncongenConfig,
    SimulationConfig,
)
from poreflow.dimension import Dimension
from poreflow.meniscus import Meniscus

T = TypeVar("T")
C = TypeVar("C")

MNS_FIELDS = 4


class InputError(ValueError):
    """Raised when an input file is missing, malformed or inconsistent."""


@dataclass
class SimulationInput:
    """Everything a simulation run reads from its input folder."""

    tradius: list[list[float]]
    tlength: list[list[float]]
    tmns: list[list[Meniscus]]
    dimension: Dimension
    simulation_config: SimulationConfig


def _float_cells(tokens: Sequence[str]) -> list[float]:
    return [float(token) for token in tokens]


def _mns_cells(tokens: Sequence[str]) -> list[Meniscus]:
    if len(tokens) % MNS_FIELDS:
        raise ValueError(f"meniscus data is not a multiple of {MNS_FIELDS} fields")
    fields = iter(tokens)
    return [Meniscus.from_tokens(group) for group in zip(*[fields] * MNS_FIELDS)]


def _read_text(path: Path) -> str:
    try:
        return path.read_text()
    except OSError as exc:
        raise InputError(
            f"{path} does not exist, create it with the generator or restore it"
        ) from exc


def read_table(
    path: str | Path, parse: Callable[[Sequence[str]], list[T]]
) -> list[list[T]]:
    """Read a ``rows cols`` header followed by rows*cols cells.

    ``parse`` turns the data tokens after the header into the list of cells.
    """
    path = Path(path)
    tokens = _read_text(path).split()
    if len(tokens) < 2:
        raise InputError(f"{path} has no 'rows cols' header")
    try:
        rows, cols = int(tokens[0]), int(tokens[1])
        cells = parse(tokens[2:])
    except ValueError as exc:
        raise InputError(f"{path} is corrupted: {exc}") from exc
    if rows < 0 or cols < 0 or len(cells) != rows * cols:
        raise InputError(
            f"in {path} rows, cols are declared differently than the actual data"
        )
    values = iter(cells)
    return [list(islice(values, cols)) for _ in range(rows)]


def read_radius(folder: str | Path = INPUT_FOLDER) -> list[list[float]]:
    return read_table(Path(folder) / RADIUS_FILE, _float_cells)


def read_length(folder: str | Path = INPUT_FOLDER) -> list[list[float]]:
    return read_table(Path(folder) / LENGTH_FILE, _float_cells)


def read_mns(folder: str | Path = INPUT_FOLDER) -> list[list[Meniscus]]:
    return read_table(Path(folder) / MNS_FILE, _mns_cells)


def read_config(path: str | Path, factory: Callable[[], C]) -> C:
    """Apply every whitespace-separated ``key=value`` token to a new config."""
    path = Path(path)
    config = factory()
    for token in _read_text(path).split():
        try:
            config.set(token)  # type: ignore[attr-defined]
        except ConfigError as exc:
            raise InputError(f"{path} is corrupted, failure reading {token!r}") from exc
    if not config.valid():  # type: ignore[attr-defined]
        raise InputError(f"{path} does not give every setting")
    return config


def read_incongen_config(
    path: str | Path = Path(INPUT_FOLDER) / INCONGEN_CONFIG_FILE,
) -> IncongenConfig:
    return read_config(path, IncongenConfig)


def read_simulation_config(
    path: str | Path = Path(INPUT_FOLDER) / SIMULATION_CONFIG_FILE,
) -> SimulationConfig:
    return read_config(path, SimulationConfig)


def read_simulation_input(folder: str | Path = INPUT_FOLDER) -> SimulationInput:
    """Read and cross-check the radius, meniscus, length and config files."""
    folder = Path(folder)
    tradius = read_radius(folder)
    tmns = read_mns(folder)
    tlength = read_length(folder)
    simulation_config = read_simulation_config(folder / SIMULATION_CONFIG_FILE)

    dimension = Dimension.from_table(tradius)
    if Dimension.from_table(tmns) != dimension:
        raise InputError(f"dimensions of {MNS_FILE} are not correct")
    if Dimension.from_table(tlength) != dimension:
        raise InputError(f"dimensions of {LENGTH_FILE} are not correct")
    return SimulationInput(tradius, tlength, tmns, dimension, simulation_config)


def _format_cell(cell: Any) -> str:
    if isinstance(cell, Meniscus):
        return cell.to_text()
    if isinstance(cell, float):
        return repr(cell)
    return str(cell)


def write_table(path: str | Path, table: Sequence[Sequence[Any]]) -> None:
    """Write a table with its ``rows cols`` header, one row per line."""
    cols = len(table[0]) if table else 0
    lines = [f"{len(table)} {cols}"]
    lines.extend("".join(_format_cell(cell) + " " for cell in row) for row in table)
    Path(path).write_text("\n".join(lines) + "\n")


def write_radius(folder: str | Path, table: Sequence[Sequence[float]]) -> None:
    write_table(Path(folder) / RADIUS_FILE, table)


def write_length(folder: str | Path, table: Sequence[Sequence[float]]) -> None:
    write_table(Path(folder) / LENGTH_FILE, table)


def write_mns(folder: str | Path, table: Sequence[Sequence[Meniscus]]) -> None:
    write_table(Path(folder) / MNS_FILE, table)


def write_fluid_ppr(
    path: str | Path, header: Sequence[str], table: Sequence[Sequence[float]]
) -> None:
    """Write a tab-separated report with a header line."""
    lines = ["".join(f"{head}\t" for head in header)]
    lines.extend("".join(f"{x:g}\t" for x in row) for row in table)
    Path(path).write_text("\n".join(lines) + "\n")