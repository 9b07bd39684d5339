import pytest

from poreflow.randomness import RAND_MAX, RandomSource


def test_same_seed_same_sequence():
    a = RandomSource(42)
    b = RandomSource(42)
    assert [a.integer() for _ in range(20)] == [b.integer() for _ in range(20)]


def test_integer_without_args_in_range():
    rng = RandomSource(1)
    assert all(0 <= rng.integer() <= RAND_MAX for _ in range(200))


def test_integer_upper_bound():
    rng = RandomSource(2)
    values = {rng.integer(5) for _ in range(500)}
    assert values <= set(range(5))
    assert len(values) > 1


def test_integer_range():
    rng = RandomSource(3)
    values = {rng.integer(1, 10) for _ in range(500)}
    assert values <= set(range(1, 10))


def test_integer_nonpositive_bound_raises():
    with pytest.raises(ValueError):
        RandomSource(4).integer(0)


def test_integer_too_many_args():
    with pytest.raises(TypeError):
        RandomSource(5).integer(1, 2, 3)


def test_fraction_magnitude():
    rng = RandomSource(6)
    for _ in range(200):
        value = abs(rng.fraction(1.0))
        assert 1.11 - 1e-9 <= value <= 9.99 + 1e-9


def test_fraction_scaled_by_shift():
    a = RandomSource(7)
    b = RandomSource(7)
    assert a.fraction(100.0) == pytest.approx(b.fraction(1.0) / 100.0)


def test_fraction_takes_both_signs():
    rng = RandomSource(8)
    signs = {rng.fraction(1.0) > 0 for _ in range(200)}
    assert signs == {True, False}