import pytest

from solarpiv.geometry import METERS_PER_DEGREE, drawn_area, polygon_area, square_polygon
from solarpiv.models import InvalidGeometryError, Polygon


class FakeMap:
    """In-memory MapControls implementation."""

    def __init__(self, lat=0.0, lng=0.0):
        self.center = (lat, lng)
        self.polygon = None

    def draw_polygon(self):
        self.polygon = square_polygon(*self.center)
        return self.polygon

    def clear_drawing(self):
        self.polygon = None

    def recenter(self, lat, lng):
        self.center = (lat, lng)

    def current_polygon(self):
        return self.polygon


def test_small_square_area():
    polygon = square_polygon(0.0, 0.0, offset=0.001)
    assert polygon_area(polygon) == pytest.approx(0.002 * 0.002 * 111000**2, rel=1e-6)
    assert polygon_area(polygon) == pytest.approx(49284, abs=1)


def test_raw_vertex_sequence_is_accepted():
    ring = [[10.0, 20.0], [10.0, 20.002], [10.002, 20.002], [10.002, 20.0], [10.0, 20.0]]
    assert polygon_area(ring) == pytest.approx(49284, rel=1e-4)


def test_area_uses_bounding_extremes():
    triangle = [(0.0, 0.0), (0.0, 0.01), (0.01, 0.005), (0.0, 0.0)]
    assert polygon_area(triangle) == pytest.approx(0.01 * 0.01 * METERS_PER_DEGREE**2)


def test_degenerate_ring_has_zero_area():
    line = [(1.0, 1.0), (1.0, 1.0), (1.0, 1.0), (1.0, 1.0)]
    assert polygon_area(line) == 0


@pytest.mark.parametrize(
    "vertices",
    [
        [],
        [(0.0, 0.0)],
        [(0.0, 0.0), (0.0, 1.0), (0.0, 0.0)],
    ],
)
def test_too_few_vertices(vertices):
    with pytest.raises(InvalidGeometryError):
        polygon_area(vertices)


def test_open_ring_is_rejected():
    with pytest.raises(InvalidGeometryError, match="not closed"):
        polygon_area([(0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (1.0, 0.0)])


def test_malformed_vertex_is_rejected():
    with pytest.raises(InvalidGeometryError):
        Polygon(((0.0, 0.0), (0.0,), (1.0, 1.0), (0.0, 0.0)))


def test_square_polygon_is_closed_ring_around_center():
    polygon = square_polygon(28.6, 77.2)
    assert len(polygon.vertices) == 5
    assert polygon.vertices[0] == polygon.vertices[-1]
    lats = [lat for lat, _ in polygon.vertices]
    lngs = [lng for _, lng in polygon.vertices]
    assert (min(lats) + max(lats)) / 2 == pytest.approx(28.6)
    assert (min(lngs) + max(lngs)) / 2 == pytest.approx(77.2)


def test_drawn_area_follows_map_state():
    fake = FakeMap(28.6, 77.2)
    assert drawn_area(fake) == 0

    fake.draw_polygon()
    assert drawn_area(fake) == pytest.approx(49284, rel=1e-4)

    fake.clear_drawing()
    assert drawn_area(fake) == 0
