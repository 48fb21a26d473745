"""Area measurement of operator-drawn polygons.

The estimate is equirectangular: the bounding box of the ring is converted
with a fixed 111 km per degree on both axes. This is only accurate near the
equator and for small, roughly rectangular areas. It does not shrink
longitude degrees with latitude and ignores the actual shape inside the box.
"""

import logging
from collections.abc import Iterable, Sequence
from typing import Protocol

from solarpiv.models import Polygon

logger = logging.getLogger(__name__)

METERS_PER_DEGREE = 111000.0


class MapControls(Protocol):
    """What a map collaborator offers the UI layer.

    Passed explicitly from the UI to whatever draws on the map, instead of
    hanging callbacks off a global namespace.
    """

    def draw_polygon(self) -> Polygon: ...

    def clear_drawing(self) -> None: ...

    def recenter(self, lat: float, lng: float) -> None: ...

    def current_polygon(self) -> Polygon | None: ...


def as_polygon(vertices: Polygon | Iterable[Sequence[float]]) -> Polygon:
    if isinstance(vertices, Polygon):
        return vertices
    return Polygon(tuple(tuple(v) for v in vertices))


def polygon_area(vertices: Polygon | Iterable[Sequence[float]]) -> float:
    """Approximate surface area in m² of a closed (lat, lng) ring.

    Raises:
        InvalidGeometryError: fewer than 4 vertices or the ring is not closed.
    """
    polygon = as_polygon(vertices)
    lats = [lat for lat, _ in polygon.vertices]
    lngs = [lng for _, lng in polygon.vertices]
    lat_span = abs(max(lats) - min(lats))
    lng_span = abs(max(lngs) - min(lngs))
    area = lat_span * lng_span * METERS_PER_DEGREE * METERS_PER_DEGREE
    logger.debug("polygon area %.1f m² (%.6f° x %.6f°)", area, lat_span, lng_span)
    return area


def square_polygon(lat: float, lng: float, offset: float = 0.001) -> Polygon:
    """Closed square ring of half-width `offset` degrees centred on (lat, lng).

    This is the shape the "Draw Area" action places around the map centre.
    """
    return Polygon(
        (
            (lat - offset, lng - offset),
            (lat - offset, lng + offset),
            (lat + offset, lng + offset),
            (lat + offset, lng - offset),
            (lat - offset, lng - offset),
        )
    )


def drawn_area(controls: MapControls) -> float:
    """Area of whatever is currently drawn; 0 when nothing is."""
    polygon = controls.current_polygon()
    if polygon is None:
        return 0.0
    return polygon_area(polygon)
