"""Centroid computation utilities for boundary polygons."""
import geopandas as gpd
from pyproj import Transformer
from typing import Tuple, Optional
from doorcode.core.config import CENTROID_CRS


def auto_select_utm(geometry) -> str:
    """
    UTM zone for a geometry's WGS84 centroid.

    Nigeria falls in zones 31N to 33N (EPSG:32631 to EPSG:32633).

    Args:
        geometry: Shapely geometry in EPSG:4326

    Returns:
        UTM CRS string (e.g., "EPSG:32631")
    """
    centroid = geometry.centroid
    zone = min(int((centroid.x + 180) / 6) + 1, 60)

    # 326xx north of the equator, 327xx south
    base = 32600 if centroid.y >= 0 else 32700
    return f"EPSG:{base + zone}"


def compute_centroid(
    geometry,
    source_crs: str = "EPSG:4326",
    target_crs: Optional[str] = None
) -> Tuple[float, float]:
    """
    Centroid in a projected CRS, converted back to ``source_crs``.

    ``target_crs`` falls back to CENTROID_CRS, then to the UTM zone of the
    geometry.

    Returns:
        Tuple of (longitude, latitude)
    """
    if geometry is None or geometry.is_empty:
        raise ValueError("Geometry is None or empty")

    if geometry.geom_type == "Point":
        return (geometry.x, geometry.y)

    if geometry.geom_type in ["Polygon", "MultiPolygon"]:
        if target_crs is None:
            target_crs = CENTROID_CRS or auto_select_utm(geometry)

        transformer_to_wgs = Transformer.from_crs(
            target_crs, source_crs, always_xy=True
        )

        geom_proj = gpd.GeoSeries([geometry], crs=source_crs).to_crs(target_crs).iloc[0]
        centroid_proj = geom_proj.centroid

        lon, lat = transformer_to_wgs.transform(centroid_proj.x, centroid_proj.y)

        return (lon, lat)

    return (geometry.centroid.x, geometry.centroid.y)
