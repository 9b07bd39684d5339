"""Plain-text views of the network tables for the terminal."""

from __future__ import annotations

from typing import Any, Sequence

from poreflow.meniscus import Meniscus

RULE = "-" * 100


def _num(value: Any) -> str:
    if isinstance(value, float):
        return format(value, "g")
    return str(value)


def _banner(title: str) -> str:
    return f"\n{title}{RULE}\n"


def _indexed_grid(title: str, rows: Sequence[Sequence[float]]) -> str:
    if not rows:
        raise ValueError("cannot print an empty matrix")
    width = len(rows[0])
    parts = [_banner(title)]
    parts.append(f"{-1:>7} | " + "".join(f"{float(j):>7g} " for j in range(width)))
    parts.append("\n")
    for i, row in enumerate(rows):
        parts.append(f"{float(i):>7g} | " + "".join(f"{x:>7g} " for x in row[:width]))
        parts.append("\n")
    parts.append("\n")
    return "".join(parts)


def format_matrix(title: str, matrix: Sequence[Sequence[float]]) -> str:
    """A table of numbers with row and column indices."""
    return _indexed_grid(title, matrix)


def format_mns_matrix(title: str, mns: Sequence[Sequence[Meniscus]]) -> str:
    """A meniscus table with each tube shown as its dominant-fluid percentage."""
    return _indexed_grid(title, [[m.printable() for m in row] for row in mns])


def format_pressure_vector(title: str, values: Sequence[float], n: int, m: int) -> str:
    """Node pressures laid out in the staggered shape of the network nodes."""
    remaining = iter(values)
    parts = [_banner(title)]
    for i in range(n + 1):
        per_row = m // 2 - i % 2 + 1
        if i % 2:
            parts.append(" " * 8)
        for _ in range(per_row):
            try:
                value = next(remaining)
            except StopIteration:
                raise ValueError("too few values for the given network size") from None
            parts.append(f"{value:>12g} ")
        parts.append("\n")
    parts.append("THE END\n")
    return "".join(parts)


def format_mns_long(mns: Sequence[Sequence[Meniscus]]) -> str:
    """Every meniscus on its own line with its coordinates and raw fields."""
    parts = [_banner("mns LONG")]
    for i, row in enumerate(mns):
        for j, m in enumerate(row):
            parts.append(
                f"({i}, {j}): {m.n} {m.fluid} {{{m.pos[0]:g}, {m.pos[-1]:g}}}\n"
            )
        parts.append("\n")
    parts.append("\n")
    return "".join(parts)


def format_table(rows: Sequence[Sequence[Any]]) -> str:
    """Cells right-aligned in columns six characters wide."""
    return "".join(
        "".join(f"{_num(cell):>6} " for cell in row) + "\n" for row in rows
    )