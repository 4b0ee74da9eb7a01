import math

import pytest
from shapely.geometry import Point, Polygon

from medzones.errors import InvalidCoordinatesError, InvalidZoneError
from medzones.services.geospatial import (
    build_polygon,
    haversine_km,
    point_in_polygon,
    polygon_centroid,
    validate_coordinates,
)

OBELISCO = (-34.6037, -58.3816)
NEARBY = (-34.5997, -58.3819)

SQUARE = [
    (-34.60, -58.44),
    (-34.60, -58.40),
    (-34.58, -58.40),
    (-34.58, -58.44),
]


def test_haversine_is_symmetric():
    points = [OBELISCO, NEARBY, (40.7128, -74.0060), (51.5074, -0.1278), (0.0, 179.9), (0.0, -179.9)]
    for a in points:
        for b in points:
            assert haversine_km(*a, *b) == haversine_km(*b, *a)


def test_haversine_zero_for_same_point():
    assert haversine_km(*OBELISCO, *OBELISCO) == 0.0


def test_haversine_buenos_aires_fixture_is_under_one_km():
    distance = haversine_km(*OBELISCO, *NEARBY)

    assert 0 < distance < 1
    assert distance == pytest.approx(0.445, abs=0.01)


def test_haversine_one_degree_of_latitude():
    assert haversine_km(0.0, 0.0, 1.0, 0.0) == pytest.approx(6371.0 * math.pi / 180, rel=1e-9)


def test_point_in_polygon_centroid_inside_far_point_outside():
    centroid_lat = sum(lat for lat, _ in SQUARE) / len(SQUARE)
    centroid_lng = sum(lng for _, lng in SQUARE) / len(SQUARE)

    assert point_in_polygon(centroid_lat, centroid_lng, SQUARE)
    assert not point_in_polygon(-31.4201, -64.1888, SQUARE)
    assert not point_in_polygon(-34.59, -58.30, SQUARE)


def test_point_in_polygon_ignores_winding():
    clockwise = list(reversed(SQUARE))

    assert point_in_polygon(-34.59, -58.42, clockwise)
    assert not point_in_polygon(-34.61, -58.42, clockwise)


def test_point_in_polygon_concave_shape():
    # "U" shape open to the north; the notch is outside
    u_shape = [
        (0.0, 0.0), (0.0, 3.0), (3.0, 3.0), (3.0, 2.0),
        (1.0, 2.0), (1.0, 1.0), (3.0, 1.0), (3.0, 0.0),
    ]

    assert point_in_polygon(0.5, 1.5, u_shape)
    assert point_in_polygon(2.0, 0.5, u_shape)
    assert not point_in_polygon(2.0, 1.5, u_shape)


def test_point_in_polygon_with_too_few_vertices_is_false():
    assert not point_in_polygon(0.0, 0.0, [(0.0, 0.0), (1.0, 1.0)])
    assert not point_in_polygon(0.0, 0.0, [])


BOW_TIE = [(0.0, 0.0), (2.0, 2.0), (0.0, 2.0), (2.0, 0.0)]


def test_point_in_polygon_bow_tie_uses_even_odd_rule():
    assert not Polygon([(lon, lat) for lat, lon in BOW_TIE]).is_valid

    assert point_in_polygon(1.0, 0.5, BOW_TIE)
    assert point_in_polygon(1.0, 1.5, BOW_TIE)
    assert not point_in_polygon(0.2, 1.0, BOW_TIE)
    assert not point_in_polygon(1.8, 1.0, BOW_TIE)


def test_point_in_polygon_edge_point_differs_from_shapely_contains():
    square = [(0.0, 0.0), (0.0, 2.0), (2.0, 2.0), (2.0, 0.0)]

    assert not Polygon([(lon, lat) for lat, lon in square]).contains(Point(1.0, 0.0))
    assert point_in_polygon(0.0, 1.0, square)


@pytest.mark.parametrize(
    "lat, lng",
    [
        (float("nan"), 0.0),
        (0.0, float("inf")),
        (90.5, 0.0),
        (0.0, -180.5),
        ("abc", 0.0),
        (None, 0.0),
    ],
)
def test_validate_coordinates_rejects_invalid_values(lat, lng):
    with pytest.raises(InvalidCoordinatesError):
        validate_coordinates(lat, lng)


def test_validate_coordinates_accepts_bounds():
    validate_coordinates(-90.0, 180.0)
    validate_coordinates(*OBELISCO)


def test_build_polygon_rejects_degenerate_shapes():
    with pytest.raises(InvalidZoneError):
        build_polygon([(0.0, 0.0), (1.0, 1.0)])
    with pytest.raises(InvalidZoneError):
        build_polygon([(0.0, 0.0), (1.0, 1.0), (2.0, 2.0)])


def test_polygon_centroid_of_square():
    lat, lng = polygon_centroid(SQUARE)

    assert lat == pytest.approx(-34.59)
    assert lng == pytest.approx(-58.42)
