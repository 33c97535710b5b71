"""Bounding-box registry for tests and local development.

Rectangles are rough approximations of a handful of cities. They are not
administrative boundaries; production lookups load real polygons into the
DuckDB store (see scripts/ingest_registry.py).
"""
from typing import Dict, List, Optional, Tuple

import geopandas as gpd

from doorcode.core.spatial import bbox_polygon
from doorcode.registry.boundaries import BoundaryRegistry

# state code -> (state name, (min_lon, min_lat, max_lon, max_lat))
DEFAULT_STATE_BOXES: Dict[str, Tuple[str, Tuple[float, float, float, float]]] = {
    "LA": ("Lagos", (3.0, 6.4, 4.0, 6.7)),
    "KD": ("Kaduna", (7.3, 10.4, 7.6, 10.7)),
    "FC": ("Federal Capital Territory", (6.7, 8.4, 7.6, 9.4)),
    "KN": ("Kano", (8.3, 11.8, 8.7, 12.2)),
    "OY": ("Oyo", (3.7, 7.2, 4.1, 7.6)),
}

# (state code, lga code, lga name, box or None)
DEFAULT_LGAS: List[Tuple[str, str, str, Optional[Tuple[float, float, float, float]]]] = [
    ("LA", "015", "Ikeja", (3.0, 6.4, 4.0, 6.7)),
    ("LA", "016", "Ikorodu", None),
    ("KD", "008", "Kaduna North", (7.3, 10.4, 7.6, 10.7)),
    ("FC", "01", "Abuja Municipal", (6.7, 8.4, 7.6, 9.4)),
    ("KN", "020", "Kano Municipal", (8.3, 11.8, 8.7, 12.2)),
    ("OY", "031", "Ibadan North", (3.7, 7.2, 4.1, 7.6)),
]


class BoundingBoxRegistry(BoundaryRegistry):
    """BoundaryRegistry whose polygons are axis-aligned rectangles."""

    def __init__(
        self,
        state_boxes: Optional[Dict[str, Tuple[str, Tuple[float, float, float, float]]]] = None,
        lgas: Optional[List[Tuple[str, str, str, Optional[Tuple[float, float, float, float]]]]] = None,
        default_state_code: Optional[str] = None
    ):
        state_boxes = DEFAULT_STATE_BOXES if state_boxes is None else state_boxes
        lgas = DEFAULT_LGAS if lgas is None else lgas

        states_gdf = gpd.GeoDataFrame(
            [
                {"code": code, "name": name, "geometry": bbox_polygon(bbox)}
                for code, (name, bbox) in state_boxes.items()
            ],
            columns=["code", "name", "geometry"],
            geometry="geometry",
            crs="EPSG:4326"
        )
        lgas_gdf = gpd.GeoDataFrame(
            [
                {
                    "state_code": state_code,
                    "code": code,
                    "name": name,
                    "geometry": bbox_polygon(bbox) if bbox else None,
                }
                for state_code, code, name, bbox in lgas
            ],
            columns=["state_code", "code", "name", "geometry"],
            geometry="geometry",
            crs="EPSG:4326"
        )
        super().__init__(states_gdf, lgas_gdf, default_state_code, name="Bounding boxes")
