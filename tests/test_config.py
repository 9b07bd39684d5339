import pytest

from poreflow.config import (
    ConfigError,
    IncongenConfig,
    LengthMode,
    MnsMode,
    PhysicalParameters,
    RadiusMode,
    SimulationConfig,
    constant_extraction,
    split_assignment,
)


def test_split_assignment_first_equals():
    assert split_assignment("tradius=constant=0.1") == ("tradius", "constant=0.1")


def test_split_assignment_without_equals():
    assert split_assignment("abc") == ("abc", "abc")


def test_constant_extraction_value():
    assert constant_extraction("constant=0.1") == pytest.approx(0.1)


def test_constant_extraction_not_constant():
    assert constant_extraction("imbibition") is None
    assert constant_extraction("con") is None


def test_constant_extraction_bad_number():
    with pytest.raises(ConfigError):
        constant_extraction("constant")


def test_physical_defaults_from_source():
    params = PhysicalParameters()
    assert params.trimmer_precision == 1e-6
    assert params.time_div == 10
    assert params.ignore_vel == 1e8
    assert params.image_size == 1000


def test_incongen_full_config():
    config = IncongenConfig()
    for line in [
        "nrows=5",
        "ncols=6",
        "tradius=constant=0.1",
        "tlength=inverse_radius",
    ]:
        config.set(line)
    assert not config.valid()
    config.set("tmns=saturate_oil")
    assert config.valid()
    assert config.nrows == 5
    assert config.ncols == 6
    assert config.tradius[0] is RadiusMode.CONSTANT
    assert config.tradius[1] == pytest.approx(0.1)
    assert config.tlength[0] is LengthMode.INVERSE_RADIUS
    assert config.tmns is MnsMode.SATURATE_OIL


@pytest.mark.parametrize(
    "value, mode",
    [("imbibition", RadiusMode.IMBIBITION), ("function", RadiusMode.FUNCTION)],
)
def test_incongen_radius_modes(value, mode):
    config = IncongenConfig()
    config.set(f"tradius={value}")
    assert config.tradius[0] is mode


def test_incongen_length_constant():
    config = IncongenConfig()
    config.set("tlength=constant=1.0")
    assert config.tlength == (LengthMode.CONSTANT, 1.0)


@pytest.mark.parametrize(
    "line",
    ["colour=red", "tradius=wobbly", "tlength=long", "tmns=soup", "nrows=x"],
)
def test_incongen_errors(line):
    with pytest.raises(ConfigError):
        IncongenConfig().set(line)


def test_simulation_config_full():
    config = SimulationConfig()
    config.set("sigma=0.0756")
    config.set("mu_water=0.001")
    config.set("mu_oil=0.002")
    assert not config.valid()
    config.set("total_volumetric_flow_rate=1000")
    assert config.valid()
    assert config.sigma == pytest.approx(0.0756)
    assert config.mu_oil == pytest.approx(0.002)
    assert config.total_volumetric_flow_rate == pytest.approx(1000)


def test_simulation_config_unknown_category():
    with pytest.raises(ConfigError):
        SimulationConfig().set("gravity=9.8")


def test_simulation_config_bad_value():
    with pytest.raises(ConfigError):
        SimulationConfig().set("sigma=abc")