"""Data model definitions: explicit boundaries between input, compute, and report layers."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class InvalidConfigurationError(ValueError):
    """Panel configuration or request parameters out of range."""


class InvalidGeometryError(ValueError):
    """Polygon is not a closed ring of at least 4 vertices."""


class Orientation(Enum):
    """Compass direction a fixed panel faces."""

    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"

    @classmethod
    def parse(cls, value: "str | Orientation") -> "Orientation":
        """Accept an Orientation or its name in any case. Unknown names are rejected."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidConfigurationError(
                f"orientation must be one of north/south/east/west, got {value!r}"
            ) from None


@dataclass(frozen=True)
class QueryInput:
    """Raw user input. Not yet validated."""

    place: str  # "28.6139, 77.2090" or a free-text address
    when: str = ""  # Local "YYYY-MM-DD HH:MM"; empty = now
    area: float = 0.0  # m², 0 = nothing drawn yet
    tilt: float = 30.0
    orientation: str = "south"
    efficiency: float = 20.0
    obstructed: bool = False


@dataclass(frozen=True)
class ObserverContext:
    """Result of geocoding + timezone conversion. Input to the solar pipeline."""

    lat: float  # Latitude (decimal degrees)
    lng: float  # Longitude (decimal degrees)
    utc_dt: datetime | None  # UTC datetime (with tzinfo=utc); None = now
    address_display: str  # Normalized address or the coordinate string (for display)


@dataclass(frozen=True)
class Location:
    lat: float
    lng: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.lat <= 90.0:
            raise InvalidConfigurationError(f"latitude out of range: {self.lat}")
        if not -180.0 <= self.lng <= 180.0:
            raise InvalidConfigurationError(f"longitude out of range: {self.lng}")


@dataclass(frozen=True)
class PanelConfiguration:
    """Tilt, facing and efficiency of the panels. Validated on construction."""

    tilt_deg: float = 30.0  # 0 = flat, 90 = vertical
    orientation: Orientation = Orientation.SOUTH
    efficiency_pct: float = 20.0  # Module efficiency, percent

    def __post_init__(self) -> None:
        # Frozen: normalize string orientations through object.__setattr__
        object.__setattr__(self, "orientation", Orientation.parse(self.orientation))
        if not 0.0 <= self.tilt_deg <= 90.0:
            raise InvalidConfigurationError(
                f"tilt must be within [0, 90] degrees, got {self.tilt_deg}"
            )
        if not 0.0 < self.efficiency_pct <= 100.0:
            raise InvalidConfigurationError(
                f"efficiency must be within (0, 100] percent, got {self.efficiency_pct}"
            )


@dataclass(frozen=True)
class Polygon:
    """Closed ring of (lat, lng) vertices drawn by the operator.

    The first vertex is repeated as the last one, so a quadrilateral has 5
    entries. Raises InvalidGeometryError on construction otherwise.
    """

    vertices: tuple[tuple[float, float], ...]

    def __post_init__(self) -> None:
        try:
            verts = tuple((float(lat), float(lng)) for lat, lng in self.vertices)
        except (TypeError, ValueError) as e:
            raise InvalidGeometryError(f"vertices must be (lat, lng) pairs: {e}") from e
        if len(verts) < 4:
            raise InvalidGeometryError(
                f"polygon needs at least 4 vertices (closed ring), got {len(verts)}"
            )
        if verts[0] != verts[-1]:
            raise InvalidGeometryError("polygon ring is not closed (first != last)")
        object.__setattr__(self, "vertices", verts)


@dataclass(frozen=True)
class SunPosition:
    azimuth_deg: float  # Clockwise from north, [0, 360)
    altitude_deg: float  # Above horizon, [-90, 90]


@dataclass(frozen=True)
class SunTimes:
    """Daily sun events for one location and calendar day (all UTC)."""

    solar_noon: datetime
    nadir: datetime
    sunrise: datetime | None  # None when the sun does not cross the horizon
    sunset: datetime | None
    daylight_hours: float
    polar: str | None = None  # "day" (never sets), "night" (never rises) or None


@dataclass(frozen=True)
class AnalysisRequest:
    """Validated input of the solar pipeline.

    `area_m2` and `polygon` are mutually exclusive. With neither set the area
    is 0, meaning nothing has been drawn yet.
    """

    location: Location
    panel: PanelConfiguration = PanelConfiguration()
    moment: datetime | None = None  # None = now
    obstructed: bool = False
    area_m2: float | None = None
    polygon: Polygon | None = None

    def __post_init__(self) -> None:
        if self.area_m2 is not None and self.polygon is not None:
            raise InvalidConfigurationError("give either area_m2 or polygon, not both")


@dataclass(frozen=True)
class SolarAnalysisResult:
    """The sole output of the pipeline. Rounded for presentation."""

    sun_azimuth: float  # Degrees from north
    sun_altitude: float  # Degrees above horizon
    sunlight_hours: float  # 1 decimal
    shadow_coverage_pct: float  # Integer percent
    avg_irradiance: float  # W/m², integer
    piv_value: float  # kWh/m²/day, 2 decimals
    estimated_monthly_power: float  # kWh/month, integer
    area_m2: float
    area_measured: bool  # False when area <= 0: piv and power are zeroed

    @property
    def estimated_annual_power(self) -> float:
        return self.estimated_monthly_power * 12

    def to_dict(self) -> dict[str, float | bool]:
        """camelCase mapping in the shape UI callers consume."""
        return {
            "sunAzimuth": self.sun_azimuth,
            "sunAltitude": self.sun_altitude,
            "sunlightHours": self.sunlight_hours,
            "shadowCoverage": self.shadow_coverage_pct,
            "avgIrradiance": self.avg_irradiance,
            "pivValue": self.piv_value,
            "estimatedPower": self.estimated_monthly_power,
            "estimatedAnnualPower": self.estimated_annual_power,
            "area": self.area_m2,
            "areaMeasured": self.area_measured,
        }


@dataclass(frozen=True)
class SolarEstimate:
    """Resolved context plus pipeline output. What `run` hands back to callers."""

    context: ObserverContext
    panel: PanelConfiguration
    result: SolarAnalysisResult
