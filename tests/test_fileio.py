import pytest

from poreflow.config import SimulationConfig
from poreflow.dimension import Dimension
from poreflow.fileio import (
    InputError,
    read_config,
    read_incongen_config,
    read_length,
    read_mns,
    read_radius,
    read_simulation_config,
    read_simulation_input,
    read_table,
    write_fluid_ppr,
    write_length,
    write_mns,
    write_radius,
    write_table,
)
from poreflow.meniscus import Meniscus

SIM_CONFIG = "sigma=0.0756\nmu_water=0.001\nmu_oil=0.002\ntotal_volumetric_flow_rate=1000\n"


def _floats(tokens):
    return [float(t) for t in tokens]


def _write_inputs(folder, rows=2, cols=3):
    radius = [[1.0 + r + c for c in range(cols)] for r in range(rows)]
    length = [[2.0] * cols for _ in range(rows)]
    mns = [[Meniscus(1, 0, [0.25, 0.0]) for _ in range(cols)] for _ in range(rows)]
    write_radius(folder, radius)
    write_length(folder, length)
    write_mns(folder, mns)
    (folder / "simulation_config.txt").write_text(SIM_CONFIG)
    return radius, length, mns


def test_radius_round_trip(tmp_path):
    table = [[1.5, 2.25], [3.0, 0.125], [7.0, 8.5]]
    write_radius(tmp_path, table)
    assert read_radius(tmp_path) == table


def test_length_round_trip(tmp_path):
    table = [[0.1, 0.2, 0.3]]
    write_length(tmp_path, table)
    assert read_length(tmp_path) == table


def test_mns_round_trip(tmp_path):
    table = [
        [Meniscus(0, 1, [0.0, 0.0]), Meniscus(1, 0, [0.75, 0.0])],
        [Meniscus(2, 0, [0.25, 0.5]), Meniscus(0, 0, [0.0, 0.0])],
    ]
    write_mns(tmp_path, table)
    assert read_mns(tmp_path) == table


def test_write_table_header(tmp_path):
    path = tmp_path / "t.txt"
    write_table(path, [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
    first = path.read_text().splitlines()[0]
    assert first == "2 3"


def test_read_table_count_mismatch(tmp_path):
    path = tmp_path / "t.txt"
    path.write_text("2 2\n1 2 3\n")
    with pytest.raises(InputError):
        read_table(path, _floats)


def test_read_table_shape(tmp_path):
    path = tmp_path / "t.txt"
    path.write_text("2 3\n1 2 3\n4 5 6\n")
    assert read_table(path, _floats) == [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]


def test_read_table_missing_file(tmp_path):
    with pytest.raises(InputError):
        read_table(tmp_path / "absent.txt", _floats)


def test_read_table_bad_number(tmp_path):
    path = tmp_path / "t.txt"
    path.write_text("1 2\n1 x\n")
    with pytest.raises(InputError):
        read_table(path, _floats)


def test_read_mns_incomplete_record(tmp_path):
    (tmp_path / "tmns.txt").write_text("1 1\n1 0 0.5\n")
    with pytest.raises(InputError):
        read_mns(tmp_path)


def test_read_simulation_config(tmp_path):
    path = tmp_path / "sim.txt"
    path.write_text(SIM_CONFIG)
    config = read_simulation_config(path)
    assert config.sigma == 0.0756
    assert config.mu_oil == 0.002
    assert config.total_volumetric_flow_rate == 1000.0


def test_read_config_incomplete(tmp_path):
    path = tmp_path / "sim.txt"
    path.write_text("sigma=0.1\n")
    with pytest.raises(InputError):
        read_config(path, SimulationConfig)


def test_read_config_unknown_category(tmp_path):
    path = tmp_path / "sim.txt"
    path.write_text(SIM_CONFIG + "colour=3\n")
    with pytest.raises(InputError):
        read_config(path, SimulationConfig)


def test_read_incongen_config(tmp_path):
    path = tmp_path / "incongen.txt"
    path.write_text(
        "nrows=4\nncols=6\ntradius=constant=0.1\ntlength=inverse_radius\ntmns=saturate_oil\n"
    )
    config = read_incongen_config(path)
    assert (config.nrows, config.ncols) == (4, 6)
    assert config.tradius[1] == 0.1


def test_read_simulation_input(tmp_path):
    radius, length, mns = _write_inputs(tmp_path)
    data = read_simulation_input(tmp_path)
    assert data.tradius == radius
    assert data.tlength == length
    assert data.tmns == mns
    assert data.dimension == Dimension(2, 3)
    assert data.simulation_config.mu_water == 0.001


def test_read_simulation_input_dimension_mismatch(tmp_path):
    _write_inputs(tmp_path)
    write_length(tmp_path, [[1.0, 1.0]])
    with pytest.raises(InputError):
        read_simulation_input(tmp_path)


def test_read_simulation_input_missing_config(tmp_path):
    _write_inputs(tmp_path)
    (tmp_path / "simulation_config.txt").unlink()
    with pytest.raises(InputError):
        read_simulation_input(tmp_path)


def test_write_fluid_ppr(tmp_path):
    path = tmp_path / "ppr.txt"
    write_fluid_ppr(path, ["time", "vol"], [[1.0, 2.5], [3.0, 4.0]])
    lines = path.read_text().splitlines()
    assert lines[0] == "time\tvol\t"
    assert lines[1] == "1\t2.5\t"
    assert len(lines) == 3