"""Solar computation layer: input resolution, geocoding, and the analysis pipeline."""

import logging
import math
import re
from datetime import datetime

import httpx
from pytz import timezone, utc
from pytz.exceptions import InvalidTimeError
from timezonefinder import TimezoneFinder

from solarpiv.config import Settings, load_settings
from solarpiv.geometry import polygon_area
from solarpiv.irradiance import estimated_monthly_power, irradiance, piv, shadow_coverage
from solarpiv.models import (
    AnalysisRequest,
    InvalidConfigurationError,
    Location,
    ObserverContext,
    Orientation,
    PanelConfiguration,
    QueryInput,
    SolarAnalysisResult,
    SolarEstimate,
)
from solarpiv.sun import daylight_hours, sun_position

logger = logging.getLogger(__name__)

_tf = TimezoneFinder()
_COORDS_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*[,\s]\s*(-?\d+(?:\.\d+)?)\s*$")


class GeocodingError(Exception):
    """Geocoder call failure."""


def parse_coordinates(place: str) -> tuple[float, float] | None:
    """Parse "lat, lng" (comma or whitespace separated). Returns None for anything else."""
    match = _COORDS_RE.match(place)
    if match is None:
        return None
    return float(match.group(1)), float(match.group(2))


def _geocode_nominatim(address: str, settings: Settings) -> tuple[float, float, str] | None:
    """Nominatim (OpenStreetMap) geocoder. Returns (lat, lng, display_name) or None."""
    params = {"q": address, "format": "json", "limit": 1}
    headers = {"User-Agent": settings.user_agent}
    resp = httpx.get(
        settings.geocoder_url,
        params=params,
        headers=headers,
        timeout=settings.http_timeout,
    )
    resp.raise_for_status()
    results = resp.json()
    if not results:
        return None
    r = results[0]
    return float(r["lat"]), float(r["lon"]), r["display_name"]


def geocode_address(address: str, settings: Settings | None = None) -> tuple[float, float, str]:
    """Resolve a free-text address to (lat, lng, display_name).

    Raises:
        GeocodingError: When the address cannot be found.
        httpx.HTTPStatusError: When the geocoder answers with an error status.
    """
    settings = settings or load_settings()
    result = _geocode_nominatim(address, settings)
    if result is None:
        raise GeocodingError(f"Address not found: {address}")
    logger.debug("geocoded %r -> %s", address, result)
    return result


def resolve_context(
    place: str, when: str = "", settings: Settings | None = None
) -> ObserverContext:
    """Resolve a place string and local time string to an ObserverContext.

    Args:
        place: "lat, lng" or a free-text address (geocoded with Nominatim).
        when: Local time at the place, "YYYY-MM-DD HH:MM". Empty = now.
        settings: Geocoder settings; read from the environment if None.

    Returns:
        ObserverContext containing lat/lng, UTC datetime (None = now), and display name.

    Raises:
        GeocodingError: On unknown address or when no timezone covers the point.
        InvalidConfigurationError: On out-of-range coordinates, a malformed time
            string, or a local time skipped or repeated by a DST change.
    """
    coords = parse_coordinates(place)
    if coords is not None:
        lat, lng = coords
        address_display = f"{lat:.4f}, {lng:.4f}"
    else:
        lat, lng, address_display = geocode_address(place, settings)
    Location(lat, lng)

    if not when.strip():
        return ObserverContext(lat=lat, lng=lng, utc_dt=None, address_display=address_display)

    try:
        dt = datetime.strptime(when.strip(), "%Y-%m-%d %H:%M")
    except ValueError:
        raise InvalidConfigurationError(
            f"time must look like YYYY-MM-DD HH:MM, got {when!r}"
        ) from None
    tz_str = _tf.timezone_at(lat=lat, lng=lng)
    if tz_str is None:
        raise GeocodingError(f"Timezone not found: lat={lat}, lng={lng}")
    local_tz = timezone(tz_str)
    try:
        utc_dt = local_tz.localize(dt, is_dst=None).astimezone(utc)
    except InvalidTimeError:
        raise InvalidConfigurationError(
            f"{when.strip()} does not name a single instant in {tz_str} (DST change)"
        ) from None
    logger.debug("local %s (%s) -> %s", dt, tz_str, utc_dt)

    return ObserverContext(lat=lat, lng=lng, utc_dt=utc_dt, address_display=address_display)


def _round_half_up(value: float, ndigits: int = 0) -> float:
    scale = 10**ndigits
    return math.floor(value * scale + 0.5) / scale


def analyze(request: AnalysisRequest) -> SolarAnalysisResult:
    """Run the full pipeline: sun → daylight → shadow → irradiance → PIV → power.

    Intermediate values stay unrounded; only the returned result is rounded.
    Without a positive area, PIV and power are zero and `area_measured` is False.
    """
    moment = request.moment or datetime.now(utc)
    loc = request.location
    panel = request.panel

    if request.polygon is not None:
        area = polygon_area(request.polygon)
    else:
        area = request.area_m2 or 0.0
    area_measured = area > 0

    position = sun_position(loc.lat, loc.lng, moment)
    hours = daylight_hours(loc.lat, loc.lng, moment)
    shadow = shadow_coverage(position.altitude_deg, request.obstructed)
    flux = irradiance(position.altitude_deg, shadow, panel.tilt_deg, panel.orientation)
    if area_measured:
        piv_value = piv(flux, hours)
        power = estimated_monthly_power(area, piv_value, panel.efficiency_pct)
    else:
        piv_value = 0.0
        power = 0.0

    logger.info(
        "analysis at (%.4f, %.4f) %s: alt=%.2f az=%.2f hours=%.2f flux=%.1f power=%.1f",
        loc.lat,
        loc.lng,
        moment.isoformat(),
        position.altitude_deg,
        position.azimuth_deg,
        hours,
        flux,
        power,
    )

    return SolarAnalysisResult(
        sun_azimuth=position.azimuth_deg,
        sun_altitude=position.altitude_deg,
        sunlight_hours=_round_half_up(hours, 1),
        shadow_coverage_pct=_round_half_up(shadow),
        avg_irradiance=_round_half_up(flux),
        piv_value=_round_half_up(piv_value, 2),
        estimated_monthly_power=_round_half_up(power),
        area_m2=_round_half_up(max(0.0, area)),
        area_measured=area_measured,
    )


def run(query: QueryInput, settings: Settings | None = None) -> SolarEstimate:
    """Top-level entry point: takes a QueryInput and returns a SolarEstimate.

    Args:
        query: User input (place, local time, area, panel settings).
        settings: Geocoder settings; read from the environment if None.

    Returns:
        Resolved context, validated panel configuration, and the analysis result.
    """
    context = resolve_context(query.place, query.when, settings)
    panel = PanelConfiguration(
        tilt_deg=float(query.tilt),
        orientation=Orientation.parse(query.orientation),
        efficiency_pct=float(query.efficiency),
    )
    request = AnalysisRequest(
        location=Location(context.lat, context.lng),
        panel=panel,
        moment=context.utc_dt,
        obstructed=query.obstructed,
        area_m2=float(query.area),
    )
    return SolarEstimate(context=context, panel=panel, result=analyze(request))
