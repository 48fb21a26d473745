"""Low-precision solar ephemeris: sun position and daily sun events.

Same formula family as the widely used SunCalc library: days since J2000 give
the sun's mean anomaly and ecliptic longitude, from which declination and
right ascension follow; sidereal time then turns those into horizontal
coordinates for the observer. Accuracy is around a degree, plenty for
rooftop estimates. All functions are pure and take/return UTC.
"""

import math
from datetime import date, datetime, time, timedelta

from pytz import utc

from solarpiv.models import SunPosition, SunTimes

_RAD = math.pi / 180
_DAY_SECONDS = 86400.0
_J1970 = 2440588.0
_J2000 = 2451545.0
_J0 = 0.0009  # Transit correction (days)
_OBLIQUITY = _RAD * 23.4397
_SUNRISE_ALTITUDE = -0.833  # Refraction + solar disc radius (degrees)
_EPOCH = datetime(1970, 1, 1, tzinfo=utc)


def _as_utc(moment: datetime | None) -> datetime:
    """Naive datetimes are taken as UTC. None means now."""
    if moment is None:
        return datetime.now(utc)
    if moment.tzinfo is None:
        return utc.localize(moment)
    return moment.astimezone(utc)


def _to_julian(moment: datetime) -> float:
    return (moment - _EPOCH).total_seconds() / _DAY_SECONDS - 0.5 + _J1970


def _from_julian(j: float) -> datetime:
    return _EPOCH + timedelta(days=j + 0.5 - _J1970)


def _to_days(moment: datetime) -> float:
    return _to_julian(moment) - _J2000


def _solar_mean_anomaly(d: float) -> float:
    return _RAD * (357.5291 + 0.98560028 * d)


def _ecliptic_longitude(m: float) -> float:
    center = _RAD * (1.9148 * math.sin(m) + 0.02 * math.sin(2 * m) + 0.0003 * math.sin(3 * m))
    perihelion = _RAD * 102.9372
    return m + center + perihelion + math.pi


def _declination(ecl: float) -> float:
    return math.asin(math.sin(_OBLIQUITY) * math.sin(ecl))


def _right_ascension(ecl: float) -> float:
    return math.atan2(math.sin(ecl) * math.cos(_OBLIQUITY), math.cos(ecl))


def _sidereal_time(d: float, lw: float) -> float:
    return _RAD * (280.16 + 360.9856235 * d) - lw


def sun_position(lat: float, lng: float, moment: datetime | None = None) -> SunPosition:
    """Sun azimuth/altitude for an observer at (lat, lng).

    Latitude and longitude are not range-checked here.

    Args:
        lat: Observer latitude (degrees, north positive).
        lng: Observer longitude (degrees, east positive).
        moment: Instant to evaluate. Naive = UTC, None = now.

    Returns:
        SunPosition with azimuth in [0, 360) clockwise from north and
        altitude in [-90, 90].
    """
    d = _to_days(_as_utc(moment))
    lw = _RAD * -lng
    phi = _RAD * lat

    m = _solar_mean_anomaly(d)
    ecl = _ecliptic_longitude(m)
    dec = _declination(ecl)
    ra = _right_ascension(ecl)
    h = _sidereal_time(d, lw) - ra

    # Raw azimuth is measured from south, positive westward
    az = math.atan2(math.sin(h), math.cos(h) * math.sin(phi) - math.tan(dec) * math.cos(phi))
    alt = math.asin(
        math.sin(phi) * math.sin(dec) + math.cos(phi) * math.cos(dec) * math.cos(h)
    )
    return SunPosition(
        azimuth_deg=(math.degrees(az) + 180.0) % 360.0,
        altitude_deg=math.degrees(alt),
    )


def _days_for(day: date | datetime, lng: float) -> float:
    """Days since J2000 used to pick the solar cycle.

    A plain date is evaluated at local mean solar noon so the cycle is that
    calendar day at every longitude.
    """
    if isinstance(day, datetime):
        return _to_days(_as_utc(day))
    midnight = utc.localize(datetime.combine(day, time()))
    return _to_days(midnight) + 0.5 - lng / 360.0


def sun_times(lat: float, lng: float, day: date | datetime | None = None) -> SunTimes:
    """Solar noon, sunrise and sunset for one day at (lat, lng).

    When the sun stays above (polar day) or below (polar night) the horizon
    all day, sunrise/sunset are None and daylight is exactly 24 or 0 hours.
    """
    if day is None:
        day = datetime.now(utc)
    lw = _RAD * -lng
    phi = _RAD * lat
    d = _days_for(day, lng)

    n = round(d - _J0 - lw / (2 * math.pi))
    ds = _J0 + lw / (2 * math.pi) + n
    m = _solar_mean_anomaly(ds)
    ecl = _ecliptic_longitude(m)
    dec = _declination(ecl)
    j_noon = _J2000 + ds + 0.0053 * math.sin(m) - 0.0069 * math.sin(2 * ecl)

    solar_noon = _from_julian(j_noon)
    nadir = _from_julian(j_noon - 0.5)

    # Cosine of the sunset hour angle; outside [-1, 1] the sun never crosses the horizon
    h0 = _RAD * _SUNRISE_ALTITUDE
    cos_w = (math.sin(h0) - math.sin(phi) * math.sin(dec)) / (math.cos(phi) * math.cos(dec))

    if cos_w < -1.0:
        return SunTimes(solar_noon, nadir, None, None, 24.0, polar="day")
    if cos_w > 1.0:
        return SunTimes(solar_noon, nadir, None, None, 0.0, polar="night")

    w = math.acos(cos_w)
    a = _J0 + (w + lw) / (2 * math.pi) + n
    j_set = _J2000 + a + 0.0053 * math.sin(m) - 0.0069 * math.sin(2 * ecl)
    j_rise = j_noon - (j_set - j_noon)
    hours = max(0.0, (j_set - j_rise) * 24.0)
    return SunTimes(
        solar_noon=solar_noon,
        nadir=nadir,
        sunrise=_from_julian(j_rise),
        sunset=_from_julian(j_set),
        daylight_hours=hours,
    )


def daylight_hours(lat: float, lng: float, day: date | datetime | None = None) -> float:
    """Hours between sunrise and sunset, clamped to >= 0.

    Returns exactly 24 when the sun never sets and 0 when it never rises.
    """
    return sun_times(lat, lng, day).daylight_hours
