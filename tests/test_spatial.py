"""Tests for spatial operations."""
import pytest
from shapely.geometry import Point, box
from doorcode.core.centroids import auto_select_utm, compute_centroid
from doorcode.core.errors import InvalidCoordinateError
from doorcode.core.proximity import bounding_box_for_radius, calculate_distance_km, find_nearest_features
from doorcode.core.spatial import point_in_bbox, spatial_join_point_to_polygons, validate_coordinate


def test_spatial_join_point_to_polygons(sample_boundaries):
    """Test spatial join of point to polygons."""
    point = Point(3.3, 6.5)  # Inside Ikeja polygon

    result = spatial_join_point_to_polygons(point, sample_boundaries["lgas"])
    assert result is not None
    assert list(result["lga_name"]) == ["Ikeja"]

    point_outside = Point(8.5, 12.0)
    result = spatial_join_point_to_polygons(point_outside, sample_boundaries["lgas"])
    assert result is None or result.empty


def test_spatial_join_boundary_point(sample_boundaries):
    result = spatial_join_point_to_polygons(Point(3.5, 6.5), sample_boundaries["lgas"])
    assert sorted(result["lga_name"]) == ["Ikeja", "Ikorodu"]


def test_compute_centroid(sample_boundaries):
    """Test centroid computation."""
    polygon = sample_boundaries["states"].geometry.iloc[0]
    lon, lat = compute_centroid(polygon)

    assert isinstance(lon, float)
    assert isinstance(lat, float)
    assert 3.0 <= lon <= 4.0
    assert 6.3 <= lat <= 6.8


@pytest.mark.parametrize("geometry,expected", [
    (box(3.0, 6.3, 3.5, 6.8), "EPSG:32631"),
    (box(7.0, 9.0, 7.5, 9.5), "EPSG:32632"),
    (box(13.0, 11.5, 13.5, 12.0), "EPSG:32633"),
    (box(35.0, -7.0, 35.5, -6.5), "EPSG:32736"),
])
def test_auto_select_utm(geometry, expected):
    assert auto_select_utm(geometry) == expected


def test_compute_centroid_far_east():
    """Borno-area polygon: centroid stays at the middle of the box."""
    lon, lat = compute_centroid(box(13.0, 11.5, 13.5, 12.0))

    assert lon == pytest.approx(13.25, abs=0.01)
    assert lat == pytest.approx(11.75, abs=0.01)


def test_validate_coordinate_inclusive():
    assert validate_coordinate(90, 180) == (90.0, 180.0)
    assert validate_coordinate("-90", "-180") == (-90.0, -180.0)
    with pytest.raises(InvalidCoordinateError):
        validate_coordinate(90.0001, 0)


def test_point_in_bbox():
    bbox = (2.5, 4.0, 15.0, 14.0)
    assert point_in_bbox(4.0, 2.5, bbox)
    assert point_in_bbox(14.0, 15.0, bbox)
    assert not point_in_bbox(3.99, 3.0, bbox)


def test_calculate_distance_km():
    # One degree of latitude is about 111.2 km
    assert calculate_distance_km(3.3, 6.0, 3.3, 7.0) == pytest.approx(111.19, abs=0.01)
    assert calculate_distance_km(3.3, 6.5, 3.3, 6.5) == 0.0


def test_bounding_box_for_radius_contains_circle():
    min_lon, min_lat, max_lon, max_lat = bounding_box_for_radius(3.3, 6.5, 5)
    assert calculate_distance_km(3.3, 6.5, 3.3, max_lat) == pytest.approx(5, abs=0.01)
    assert calculate_distance_km(3.3, 6.5, max_lon, 6.5) >= 4.99
    assert min_lon < 3.3 < max_lon
    assert min_lat < 6.5 < max_lat


def test_find_nearest_features():
    features = [
        {"name": "Ikeja", "lon": 3.35, "lat": 6.6},
        {"name": "Ikorodu", "lon": 3.5, "lat": 6.62},
        {"name": "No coordinates"},
    ]
    nearest = find_nearest_features(3.34, 6.6, features, limit=5)
    assert [f["name"] for f in nearest] == ["Ikeja", "Ikorodu"]
    assert nearest[0]["distance_km"] == round(nearest[0]["distance_km"], 2)
