"""The time loop of the drainage/imbibition simulation and its reports."""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from poreflow.config import PI, PhysicalParameters
from poreflow.determine import determine_volume, gen_add_mns
from poreflow.dimension import Dimension
from poreflow.displacement import integrate
from poreflow.meniscus import Meniscus
from poreflow.plot import plot_with_radius, plot_without_radius
from poreflow.pressure import calculate_pressure
from poreflow.timestep import decide_time_step
from poreflow.velocity import calculate_velocity

IMAGE_SIZE = PhysicalParameters().image_size
PROPORTION_OF_INJECTION = 1.1
MOMENT_INTERVAL = 1000.0
FIRST_STEP_COUNT = 10000
FIRST_PLOT_COUNT = 1000

SATURATION_FILE = "sat-vs-x.txt"
PRESSURE_ROUGH_FILE = "p_vs_t_rough.txt"
PRESSURE_SMOOTH_FILE = "p_vs_t_smooth.txt"
PLOTS_FOLDER = "plots"


@dataclass
class MomentConfig:
    """State of the system at one moment of the simulation."""

    clock: float
    mns: list[list[Meniscus]]
    pressure_input: float
    volume_injected: float
    flow_rate_at_this_step: float
    volume_blue_in_system: float


def total_system_volume(dimension: Dimension, tube_length_const: float) -> float:
    """Pore volume of the network counted with unit cross-section factor."""
    return PI * tube_length_const * dimension.rows * dimension.cols


def blue_volume(
    mns: Sequence[Sequence[Meniscus]], dimension: Dimension, tube_length_const: float
) -> float:
    """Volume of blue fluid in the network."""
    filled = sum(
        mns[row][col].sum_first_fluid()
        for row in range(dimension.rows)
        for col in range(dimension.cols)
    )
    return PI * filled * tube_length_const


def saturations_per_column(mns: Sequence[Sequence[Meniscus]]) -> list[float]:
    """Mean blue saturation of each tube column."""
    if not mns:
        return []
    return [
        sum(m.sum_first_fluid() for m in column) / len(column)
        for column in zip(*mns)
    ]


def select_moments(moments: Sequence[MomentConfig]) -> list[int]:
    """Indices of the first moments past each multiple of the moment interval."""
    selected = []
    next_mark = 1
    for index, moment in enumerate(moments):
        if moment.clock >= MOMENT_INTERVAL * next_mark:
            selected.append(index)
            next_mark += 1
    return selected


def write_saturation_vs_x(
    path: str | Path, times: Sequence[float], saturations: Sequence[Sequence[float]]
) -> None:
    """Saturation against column, one column per moment, latest moment first."""
    times = list(reversed(times))
    saturations = list(reversed(saturations))
    count = min(len(times), len(saturations))
    columns = len(saturations[0]) if saturations else 0
    parts = ["x"]
    parts.extend(f"\tt={t:g}" for t in times[:count])
    for x in range(columns):
        parts.append(f"\n{x}")
        parts.extend(f"\t{saturations[j][x]:g}" for j in range(count))
    Path(path).write_text("".join(parts))


def write_pressure_vs_time(
    path: str | Path, times: Sequence[float], pressures: Sequence[float]
) -> None:
    """Injection pressure against time as two tab-separated columns."""
    parts = ["time\tpressure"]
    parts.extend(f"\n{t:g}\t{p:g}" for t, p in zip(times, pressures))
    Path(path).write_text("".join(parts))


def _make_plots(
    radius: Sequence[Sequence[float]],
    mns: Sequence[Sequence[Meniscus]],
    count: int,
    folder: Path,
    image_size: int,
) -> None:
    plot_with_radius(mns, radius, count, folder, image_size)
    plot_without_radius(mns, count, folder, image_size)


def _smart_print(
    moments: Sequence[MomentConfig],
    radius: Sequence[Sequence[float]],
    output_dir: Path,
    image_size: int,
) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)
    selected = [moments[i] for i in select_moments(moments)]
    times = [m.clock for m in selected]
    saturations = [saturations_per_column(m.mns) for m in selected]
    pressures = [m.pressure_input for m in selected]
    for count, moment in enumerate(selected, start=FIRST_PLOT_COUNT):
        _make_plots(radius, moment.mns, count, output_dir / PLOTS_FOLDER, image_size)
    write_saturation_vs_x(output_dir / SATURATION_FILE, times, saturations)
    write_pressure_vs_time(output_dir / PRESSURE_ROUGH_FILE, times, pressures)


def smart_print(
    moments: Sequence[MomentConfig],
    radius: Sequence[Sequence[float]],
    output_dir: str | Path,
) -> None:
    """Write saturation and pressure reports and pictures of selected moments."""
    _smart_print(moments, radius, Path(output_dir), IMAGE_SIZE)


def _show_progress(progress: float, last_count: int) -> int:
    if progress >= last_count / 10:
        print(f"simulation-progress={progress * 100:g}%")
        return last_count + 1
    return last_count


def simulate(
    radius: Sequence[Sequence[float]],
    mns: Sequence[Sequence[Meniscus]],
    dimension: Dimension,
    params: PhysicalParameters,
    output_dir: str | Path,
) -> list[MomentConfig]:
    """Inject fluid until 1.1 pore volumes have entered; return every moment."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    plots = output_dir / PLOTS_FOLDER

    total_volume = total_system_volume(dimension, params.tube_length_const)
    print(f"total-vol={total_volume:g}")
    limit = PROPORTION_OF_INJECTION * total_volume

    current = [[Meniscus(m.n, m.fluid, list(m.pos)) for m in row] for row in mns]
    moments: list[MomentConfig] = []
    clock = 0.0
    injected = 0.0
    last_count = 0
    plot_count = FIRST_PLOT_COUNT

    for count in _counter(FIRST_STEP_COUNT):
        if injected > limit:
            break
        last_count = _show_progress(injected / limit, last_count)

        add_mns = gen_add_mns(current, dimension)
        pressure = calculate_pressure(
            radius, current, add_mns, dimension, params.total_flow_rate, params
        )
        velocity = calculate_velocity(
            radius, current, add_mns, pressure, dimension, params
        )
        time_step = decide_time_step(
            radius, velocity, dimension, params.tube_length_const
        )
        if not math.isfinite(time_step):
            raise RuntimeError("no fluid moves in the network")
        volume = determine_volume(radius, velocity, time_step, dimension)
        result = integrate(
            radius, current, velocity, volume, dimension, time_step, params
        )

        current = result.new_mns
        clock += time_step
        injections = result.fluid_injected
        step_injected = sum(injections[: len(injections) - 1 : 2])
        injected += step_injected

        moments.append(
            MomentConfig(
                clock=clock,
                mns=current,
                pressure_input=pressure[-1],
                volume_injected=injected,
                flow_rate_at_this_step=step_injected / time_step,
                volume_blue_in_system=blue_volume(
                    current, dimension, params.tube_length_const
                ),
            )
        )

        if count % params.plot_each_n == 0:
            _make_plots(radius, current, plot_count, plots, params.image_size)
            plot_count += 1

    _smart_print(moments, radius, output_dir, params.image_size)
    return moments


def _counter(start: int):
    value = start
    while True:
        yield value
        value += 1