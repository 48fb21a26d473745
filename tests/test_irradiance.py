import math

import pytest

from solarpiv.irradiance import (
    estimated_annual_power,
    estimated_monthly_power,
    irradiance,
    piv,
    shadow_coverage,
)
from solarpiv.models import InvalidConfigurationError, Orientation

ALTITUDES = [-30, -0.1, 0, 5, 14.9, 15, 22, 29.9, 30, 40, 44.9, 45, 60, 89, 90]


@pytest.mark.parametrize(
    "altitude, obstructed, expected",
    [
        (10, False, 60),
        (40, False, 10),
        (40, True, 20),
        (60, False, 5),
        (60, True, 10),
        (20, True, 30),
        (15, False, 30),
        (30, False, 10),
        (45, True, 10),
    ],
)
def test_shadow_bands(altitude, obstructed, expected):
    assert shadow_coverage(altitude, obstructed) == expected


@pytest.mark.parametrize("obstructed", [False, True])
def test_shadow_non_increasing_with_altitude(obstructed):
    values = [shadow_coverage(a, obstructed) for a in ALTITUDES]
    assert all(a >= b for a, b in zip(values, values[1:]))


def test_obstruction_never_reduces_shadow():
    for a in ALTITUDES:
        assert shadow_coverage(a, True) >= shadow_coverage(a, False)
        assert 0 <= shadow_coverage(a, True) <= 100


def test_overhead_sun_with_tilted_south_panel():
    expected = 1000 * math.cos(math.radians(-60))
    assert irradiance(90, 0, 30, "south") == pytest.approx(expected)
    assert irradiance(90, 0, 30, Orientation.SOUTH) == pytest.approx(500)


@pytest.mark.parametrize("altitude", [0, -0.001, -10, -90])
@pytest.mark.parametrize("orientation", list(Orientation))
def test_no_irradiance_with_sun_below_horizon(altitude, orientation):
    assert irradiance(altitude, 0, 30, orientation) == 0


def test_orientation_factors():
    south = irradiance(50, 5, 20, Orientation.SOUTH)
    assert irradiance(50, 5, 20, Orientation.EAST) == pytest.approx(south * 0.8)
    assert irradiance(50, 5, 20, Orientation.WEST) == pytest.approx(south * 0.8)
    assert irradiance(50, 5, 20, Orientation.NORTH) == pytest.approx(south * 0.6)


def test_orientation_strings_are_case_insensitive():
    assert irradiance(50, 5, 20, "West") == irradiance(50, 5, 20, Orientation.WEST)


def test_unknown_orientation_is_rejected():
    with pytest.raises(InvalidConfigurationError):
        irradiance(50, 5, 20, "southwest")


def test_full_shadow_blocks_everything():
    assert irradiance(60, 100, 30) == 0


def test_irradiance_never_negative():
    for altitude in ALTITUDES:
        for tilt in (0, 15, 30, 60, 90):
            for shadow in (0, 5, 60):
                assert irradiance(altitude, shadow, tilt) >= 0


def test_backward_tilt_keeps_absolute_cosine():
    # Only the magnitude of cos(tilt - altitude) counts
    assert irradiance(10, 0, 90) == pytest.approx(
        1000 * math.sin(math.radians(10)) * abs(math.cos(math.radians(80)))
    )


@pytest.mark.parametrize("value", [0, 1.5, 750, 1000])
def test_piv_zero_when_either_input_zero(value):
    assert piv(value, 0) == 0
    assert piv(0, value) == 0


def test_piv_converts_watts_to_kilowatt_hours():
    assert piv(500, 10) == pytest.approx(5.0)


def test_monthly_power_example():
    assert estimated_monthly_power(500, 5.0, 20) == pytest.approx(15000)


def test_monthly_power_zero_cases():
    assert estimated_monthly_power(0, 5.0, 20) == 0
    assert estimated_monthly_power(500, 0, 20) == 0
    assert estimated_monthly_power(-10, 5.0, 20) == 0


@pytest.mark.parametrize("area", [1, 37.5, 500, 12000])
def test_monthly_power_is_linear_in_area(area):
    assert estimated_monthly_power(2 * area, 4.2, 18) == pytest.approx(
        2 * estimated_monthly_power(area, 4.2, 18)
    )


def test_annual_power_is_twelve_months():
    assert estimated_annual_power(500, 5.0, 20) == pytest.approx(180000)
