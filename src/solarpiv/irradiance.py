"""Shadow heuristic, irradiance model, PIV and power projection.

These are coarse rules of thumb, not a physical model: shadows come from a
banded lookup on sun altitude, and panel facing is a fixed multiplier.
"""

import math

from solarpiv.models import Orientation

MAX_IRRADIANCE = 1000.0  # W/m², clear-sky irradiance with the sun overhead
DAYS_PER_MONTH = 30
MONTHS_PER_YEAR = 12

_ORIENTATION_FACTOR: dict[Orientation, float] = {
    Orientation.SOUTH: 1.0,
    Orientation.EAST: 0.8,
    Orientation.WEST: 0.8,
    Orientation.NORTH: 0.6,
}


def shadow_coverage(altitude: float, obstructed: bool = False) -> float:
    """Percent of the area estimated to be in shade.

    Stand-in for occlusion ray tracing: low sun means long shadows. Obstructions
    only matter once the sun is above 30 degrees.
    """
    if altitude < 15:
        return 60.0
    if altitude < 30:
        return 30.0
    if altitude < 45:
        return 20.0 if obstructed else 10.0
    return 10.0 if obstructed else 5.0


def irradiance(
    altitude: float,
    shadow_pct: float,
    tilt: float = 30.0,
    orientation: Orientation | str = Orientation.SOUTH,
) -> float:
    """Instantaneous irradiance on the panel surface in W/m².

    Args:
        altitude: Sun altitude (degrees). At or below 0 the result is 0.
        shadow_pct: Shadow coverage percent (0-100).
        tilt: Panel tilt from horizontal (degrees).
        orientation: Panel facing; strings are parsed strictly.

    Returns:
        1000 x sin(altitude) x unshaded fraction x facing factor x |cos(tilt - altitude)|.
    """
    factor = _ORIENTATION_FACTOR[Orientation.parse(orientation)]
    altitude_factor = max(0.0, math.sin(math.radians(altitude)))
    shadow_factor = 1.0 - shadow_pct / 100.0
    # abs() also keeps panels facing away from the sun positive; known approximation
    tilt_factor = abs(math.cos(math.radians(tilt - altitude)))
    return max(0.0, MAX_IRRADIANCE * altitude_factor * shadow_factor * factor * tilt_factor)


def piv(avg_irradiance: float, sunlight_hours: float) -> float:
    """Photovoltaic Irradiance Value in kWh/m²/day."""
    return avg_irradiance * sunlight_hours / 1000.0


def estimated_monthly_power(area: float, piv_value: float, efficiency_pct: float = 20.0) -> float:
    """Projected generation in kWh per 30-day month. Area <= 0 yields 0."""
    if area <= 0:
        return 0.0
    return area * piv_value * (efficiency_pct / 100.0) * DAYS_PER_MONTH


def estimated_annual_power(area: float, piv_value: float, efficiency_pct: float = 20.0) -> float:
    return estimated_monthly_power(area, piv_value, efficiency_pct) * MONTHS_PER_YEAR
