import pytest

from poreflow.config import PhysicalParameters
from poreflow.determine import determine_volume, gen_add_mns
from poreflow.dimension import Dimension
from poreflow.displacement import (
    Fluid,
    Tank,
    calculate_fluid_table,
    combine_fluid_additions,
    integrate,
)
from poreflow.meniscus import Meniscus
from poreflow.pressure import calculate_pressure
from poreflow.timestep import decide_time_step
from poreflow.velocity import calculate_velocity

PARAMS = PhysicalParameters()


def _step_inputs(dim):
    radius = dim.empty_table(1.0)
    mns = dim.empty_table(lambda: Meniscus(0, 1, [0.0, 0.0]))
    add = gen_add_mns(mns, dim)
    pressure = calculate_pressure(radius, mns, add, dim, PARAMS.total_flow_rate, PARAMS)
    velocity = calculate_velocity(radius, mns, add, pressure, dim, PARAMS)
    dt = decide_time_step(radius, velocity, dim, PARAMS.tube_length_const)
    volume = determine_volume(radius, velocity, dt, dim)
    return radius, mns, velocity, volume, dt


def test_empty_tank_pours_nothing():
    assert Tank().pour_out(3.0) == Fluid(0.0, 0.0)


def test_tank_ignores_non_positive_additions():
    tank = Tank()
    tank.add_fluid([0.0, -1.0])
    assert not tank.blue_present and not tank.grey_present
    assert tank.pour_out(1.0) == Fluid()


def test_blue_only_tank():
    tank = Tank()
    tank.add_fluid([2.0, 0.0])
    out = tank.pour_out(0.5)
    assert out == Fluid(blue=0.5, grey=0.0)
    assert tank.fluid.blue == pytest.approx(2.0 - 0.5)


def test_grey_only_tank_never_goes_negative():
    tank = Tank()
    tank.add_fluid([0.0, 1.0])
    out = tank.pour_out(4.0)
    assert out == Fluid(blue=0.0, grey=4.0)
    assert tank.fluid.grey == 0.0


def test_mixed_tank_pours_blue_first():
    tank = Tank()
    tank.add_fluid([1.0, 3.0])
    first = tank.pour_out(0.25)
    assert first == Fluid(blue=0.25, grey=0.0)
    second = tank.pour_out(2.0)
    assert second.blue + second.grey == pytest.approx(2.0)
    assert second.blue == pytest.approx(1.0 - 0.25)
    assert tank.fluid.blue == 0.0
    assert tank.fluid.grey == pytest.approx(3.0 - second.grey)


def test_fluid_table_conserves_open_node_volume():
    dim = Dimension(2, 2)
    radius, mns, velocity, volume, dt = _step_inputs(dim)
    result = calculate_fluid_table(radius, mns, velocity, volume, dim, dt, PARAMS)
    assert len(result.injection) == len(result.expulsion) == 4
    assert sum(result.injection) == pytest.approx(sum(result.expulsion))
    assert sum(result.injection) > 0
    injected = result.fluid_table[0][0]
    assert injected.blue == pytest.approx(volume[0][0])
    assert injected.grey == 0.0


def test_integrate_pushes_blue_into_inlet_tube():
    dim = Dimension(2, 2)
    radius, mns, velocity, volume, dt = _step_inputs(dim)
    result = integrate(radius, mns, velocity, volume, dim, dt, PARAMS)
    inlet = result.new_mns[0][0]
    assert inlet.n == 1
    assert inlet.sum_first_fluid() == pytest.approx(1.0 / PARAMS.time_div)
    assert all(m.sum_first_fluid() == 0.0 for row in mns for m in row)
    assert sum(result.fluid_injected) == pytest.approx(sum(result.fluid_expelled))


def test_zero_velocity_leaves_menisci_unchanged():
    dim = Dimension(2, 2)
    radius = dim.empty_table(1.0)
    mns = dim.empty_table(lambda: Meniscus(1, 0, [0.3, 0.0]))
    table = dim.empty_table(lambda: Fluid(1.0, 1.0))
    velocity = dim.empty_table(0.0)
    new = combine_fluid_additions(radius, mns, velocity, dim, table, PARAMS)
    assert new == mns
    assert new[0][0] is not mns[0][0]