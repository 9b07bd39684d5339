"""Command entry points: simulate, plot and radius distribution report."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from poreflow.config import INPUT_FOLDER, OUTPUT_FOLDER, PhysicalParameters
from poreflow.fileio import InputError, read_radius, read_simulation_input
from poreflow.plot import IMAGE_SIZE, plot_with_radius, plot_without_radius
from poreflow.simulation import simulate

RADIUS_BINS = (2.0, 3.0, 4.0, 5.0, 6.0)
BIN_HALF_WIDTH = 0.5


def radius_proportions(
    radius: Sequence[Sequence[float]], bins: Sequence[float] = RADIUS_BINS
) -> list[tuple[float, float]]:
    """Share of r^2-weighted volume falling into each radius bin.

    A tube belongs to the first bin b with r < b + 0.5.
    """
    amounts = [0.0] * len(bins)
    total = 0.0
    for row in radius:
        for r in row:
            for index, centre in enumerate(bins):
                if r < centre + BIN_HALF_WIDTH:
                    break
            else:
                raise ValueError(f"radius {r} lies beyond the last bin")
            vol = r * r
            amounts[index] += vol
            total += vol
    if total == 0:
        raise ValueError("no tube volume to divide into bins")
    return [(centre, amount / total) for centre, amount in zip(bins, amounts)]


def main_simulate(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run the pore network simulation.")
    parser.add_argument("--input", default=INPUT_FOLDER, help="folder with input files")
    parser.add_argument("--output", default=OUTPUT_FOLDER, help="folder for results")
    parser.add_argument("--image-size", type=int, default=IMAGE_SIZE)
    args = parser.parse_args(argv)
    try:
        data = read_simulation_input(args.input)
    except InputError as exc:
        print(f"-ERR- {exc}", file=sys.stderr)
        return 1
    cfg = data.simulation_config
    params = PhysicalParameters(
        sigma=cfg.sigma,
        mu1=cfg.mu_water,
        mu2=cfg.mu_oil,
        total_flow_rate=cfg.total_volumetric_flow_rate,
        image_size=args.image_size,
    )
    simulate(data.tradius, data.tmns, data.dimension, params, args.output)
    return 0


def main_plot(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Draw the initial fluid distribution.")
    parser.add_argument("--input", default=INPUT_FOLDER, help="folder with input files")
    parser.add_argument(
        "--output", default=str(Path(OUTPUT_FOLDER) / "plots"), help="folder for pictures"
    )
    parser.add_argument("--image-size", type=int, default=IMAGE_SIZE)
    args = parser.parse_args(argv)
    try:
        data = read_simulation_input(args.input)
    except InputError as exc:
        print(f"-ERR- {exc}", file=sys.stderr)
        return 1
    plot_with_radius(data.tmns, data.tradius, 1, args.output, args.image_size)
    plot_without_radius(data.tmns, 1, args.output, args.image_size)
    return 0


def main_radius_report(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Report the tube radius distribution.")
    parser.add_argument("--input", default=INPUT_FOLDER, help="folder with input files")
    args = parser.parse_args(argv)
    try:
        proportions = radius_proportions(read_radius(args.input))
    except (InputError, ValueError) as exc:
        print(f"-ERR- {exc}", file=sys.stderr)
        return 1
    print("radius\tproportion")
    for centre, share in proportions:
        print(f"{centre:g}\t{share:g}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main_simulate())