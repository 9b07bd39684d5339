import math

import pytest

from poreflow.config import PI, PhysicalParameters
from poreflow.dimension import Dimension
from poreflow.meniscus import Meniscus
from poreflow.simulation import (
    MomentConfig,
    blue_volume,
    saturations_per_column,
    select_moments,
    simulate,
    smart_print,
    total_system_volume,
    write_pressure_vs_time,
    write_saturation_vs_x,
)


def _grid(value, rows=2, cols=2):
    return [[value for _ in range(cols)] for _ in range(rows)]


def _mns(fluid, rows=2, cols=2):
    return [[Meniscus(0, fluid, [0.0, 0.0]) for _ in range(cols)] for _ in range(rows)]


def _moment(clock):
    return MomentConfig(clock, _mns(1), 0.0, 0.0, 0.0, 0.0)


def test_total_system_volume_scales_with_tubes():
    dim = Dimension.from_table(_grid(1.0, 2, 3))
    assert total_system_volume(dim, 1.0) == pytest.approx(6 * PI)
    assert total_system_volume(dim, 2.0) == pytest.approx(2 * total_system_volume(dim, 1.0))


def test_blue_volume_full_and_empty():
    dim = Dimension.from_table(_grid(1.0))
    assert blue_volume(_mns(0), dim, 1.0) == pytest.approx(total_system_volume(dim, 1.0))
    assert blue_volume(_mns(1), dim, 1.0) == pytest.approx(0.0)


def test_saturations_per_column():
    mns = [
        [Meniscus(0, 0, [0.0, 0.0]), Meniscus(0, 1, [0.0, 0.0])],
        [Meniscus(0, 0, [0.0, 0.0]), Meniscus(0, 0, [0.0, 0.0])],
    ]
    assert saturations_per_column(mns) == pytest.approx([1.0, 0.5])
    assert saturations_per_column([]) == []


def test_select_moments_first_past_each_mark():
    clocks = [500, 1000, 1500, 2100, 2500, 3200]
    assert select_moments([_moment(c) for c in clocks]) == [1, 3, 5]
    assert select_moments([_moment(10.0), _moment(20.0)]) == []


def test_write_pressure_vs_time(tmp_path):
    path = tmp_path / "p.txt"
    write_pressure_vs_time(path, [1.0, 3.0], [2.0, 4.0])
    assert path.read_text() == "time\tpressure\n1\t2\n3\t4"


def test_write_saturation_vs_x_latest_first(tmp_path):
    path = tmp_path / "s.txt"
    write_saturation_vs_x(path, [1.0, 2.0], [[0.1, 0.2], [0.3, 0.4]])
    lines = path.read_text().split("\n")
    assert lines[0] == "x\tt=2\tt=1"
    assert lines[1].split("\t") == ["0", "0.3", "0.1"]
    assert lines[2].split("\t") == ["1", "0.4", "0.2"]


def test_smart_print_without_selected_moments(tmp_path):
    smart_print([_moment(1.0)], _grid(1.0), tmp_path)
    assert (tmp_path / "sat-vs-x.txt").read_text() == "x"
    assert (tmp_path / "p_vs_t_rough.txt").read_text() == "time\tpressure"


def test_simulate_injects_past_limit(tmp_path):
    radius = _grid(1.0)
    dim = Dimension.from_table(radius)
    params = PhysicalParameters(image_size=40)
    moments = simulate(radius, _mns(1), dim, params, tmp_path)
    assert moments
    limit = 1.1 * total_system_volume(dim, params.tube_length_const)
    assert moments[-1].volume_injected > limit
    clocks = [m.clock for m in moments]
    assert all(a < b for a, b in zip(clocks, clocks[1:]))
    assert all(math.isfinite(m.pressure_input) for m in moments)
    assert (tmp_path / "plots" / "pic-1000.bmp").read_bytes()[:2] == b"BM"
    assert (tmp_path / "sat-vs-x.txt").read_text().startswith("x")