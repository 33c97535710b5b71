"""Spatial operations for administrative lookup."""
import math
from typing import Optional, Tuple

import geopandas as gpd
from shapely.geometry import Point, box

from doorcode.core.errors import InvalidCoordinateError


def validate_coordinate(lat, lon) -> Tuple[float, float]:
    """
    Check that a coordinate is usable.

    Bounds are inclusive: latitude in [-90, 90], longitude in [-180, 180].

    Returns:
        (lat, lon) as floats

    Raises:
        InvalidCoordinateError: missing, non-numeric, NaN/inf or out of range
    """
    if lat is None or lon is None:
        raise InvalidCoordinateError(lat, lon, "missing")
    try:
        lat_f = float(lat)
        lon_f = float(lon)
    except (TypeError, ValueError):
        raise InvalidCoordinateError(lat, lon, "not numeric")
    if not (math.isfinite(lat_f) and math.isfinite(lon_f)):
        raise InvalidCoordinateError(lat, lon, "not finite")
    if not -90.0 <= lat_f <= 90.0:
        raise InvalidCoordinateError(lat, lon, "latitude out of range [-90, 90]")
    if not -180.0 <= lon_f <= 180.0:
        raise InvalidCoordinateError(lat, lon, "longitude out of range [-180, 180]")
    return lat_f, lon_f


def point_in_bbox(lat: float, lon: float, bbox: Tuple[float, float, float, float]) -> bool:
    """Inclusive test of a point against (min_lon, min_lat, max_lon, max_lat)."""
    min_lon, min_lat, max_lon, max_lat = bbox
    return min_lat <= lat <= max_lat and min_lon <= lon <= max_lon


def bbox_polygon(bbox: Tuple[float, float, float, float]):
    """Shapely polygon for (min_lon, min_lat, max_lon, max_lat)."""
    return box(*bbox)


def spatial_join_point_to_polygons(
    point: Point,
    polygons_gdf: gpd.GeoDataFrame,
    crs: str = "EPSG:4326"
) -> Optional[gpd.GeoDataFrame]:
    """
    Perform spatial join of a point to polygons.

    Points on a shared boundary match every polygon touching it.

    Args:
        point: Shapely Point geometry (lon, lat)
        polygons_gdf: GeoDataFrame with polygon geometries
        crs: CRS string

    Returns:
        GeoDataFrame with matching polygons or None
    """
    if polygons_gdf is None or polygons_gdf.empty:
        return None

    polygons_gdf = polygons_gdf[polygons_gdf.geometry.notna()]
    if polygons_gdf.empty:
        return None

    point_gdf = gpd.GeoDataFrame(
        [{"geometry": point}],
        crs=crs
    )

    # Ensure both are in same CRS
    if polygons_gdf.crs != crs:
        polygons_gdf = polygons_gdf.to_crs(crs)

    joined = gpd.sjoin(point_gdf, polygons_gdf, how="inner", predicate="intersects")

    return joined if not joined.empty else None
