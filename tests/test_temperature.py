import pytest

from thermostore.domain.temperature import Celsius, Fahrenheit


def test_freezing_point():
    assert Celsius(0.0).to_fahrenheit() == Fahrenheit(32.0)
    assert Celsius(100.0).to_fahrenheit() == Fahrenheit(212.0)


@pytest.mark.parametrize("value", [-40.0, 0.0, 21.7, 37.5, 1e6])
def test_fahrenheit_celsius_round_trip(value):
    assert Celsius(value).to_fahrenheit().to_celsius().value == pytest.approx(value)
    assert Fahrenheit(value).to_celsius().to_fahrenheit().value == pytest.approx(value)


def test_addition_within_unit():
    assert Celsius(20.0) + Celsius(1.5) == Celsius(21.5)
    assert Fahrenheit(70.0) - Fahrenheit(2.0) == Fahrenheit(68.0)


def test_mixing_units_is_rejected():
    with pytest.raises(TypeError):
        Celsius(1.0) + Fahrenheit(1.0)
    with pytest.raises(TypeError):
        Fahrenheit(1.0) - Celsius(1.0)
    with pytest.raises(TypeError):
        Celsius(1.0) + 1.0


def test_units_never_compare_equal():
    assert Celsius(32.0) != Fahrenheit(32.0)


def test_no_bounds_checking():
    assert float(Celsius(-500.0)) == -500.0
    assert Celsius(1e9).value == 1e9
