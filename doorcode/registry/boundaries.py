"""Registry backed by state and LGA boundary polygons."""
from pathlib import Path
from typing import List, Dict, Optional, Any

import geopandas as gpd
from shapely.geometry import Point

from doorcode.core.centroids import compute_centroid
from doorcode.core.proximity import find_nearest_features
from doorcode.core.spatial import spatial_join_point_to_polygons
from doorcode.registry.base import LocationRegistry
from doorcode.registry.state_codes import NIGERIA_STATE_CODES
from doorcode.utils.logging import log_error

STATE_CODE_FIELDS = ["code", "state_code", "STATE_CODE", "ISO", "iso_code"]
STATE_NAME_FIELDS = ["name", "state_name", "STATE", "state", "State", "admin1Name"]
LGA_CODE_FIELDS = ["code", "lga_code", "LGA_CODE", "lga_id", "admin2Pcode"]
LGA_NAME_FIELDS = ["name", "lga_name", "LGA", "lga", "Lga", "admin2Name"]


def _first_field(columns, candidates) -> Optional[str]:
    for field in candidates:
        if field in columns:
            return field
    return None


def _empty_frame(columns: List[str]) -> gpd.GeoDataFrame:
    return gpd.GeoDataFrame(columns=columns + ["geometry"], geometry="geometry", crs="EPSG:4326")


class BoundaryRegistry(LocationRegistry):
    """
    Point-in-polygon registry.

    ``states`` needs columns code, name, geometry. ``lgas`` needs state_code,
    code, name, geometry; LGAs without geometry are listed but never matched
    by ``lgas_at``.
    """

    def __init__(
        self,
        states: gpd.GeoDataFrame,
        lgas: gpd.GeoDataFrame,
        default_state_code: Optional[str] = None,
        name: str = "Boundary registry"
    ):
        self.states = states if states is not None else _empty_frame(["code", "name"])
        self.lgas = lgas if lgas is not None else _empty_frame(["state_code", "code", "name"])
        self.default_state_code = default_state_code
        self.name = name
        self._lga_centroids: Optional[List[Dict[str, Any]]] = None

    def list_states(self) -> List[Dict[str, str]]:
        rows = [{"code": str(r["code"]), "name": str(r["name"])} for _, r in self.states.iterrows()]
        return sorted(rows, key=lambda r: r["code"])

    def list_lgas(self, state_code: str) -> List[Dict[str, str]]:
        if self.lgas.empty:
            return []
        subset = self.lgas[self.lgas["state_code"] == state_code]
        rows = [{"code": str(r["code"]), "name": str(r["name"])} for _, r in subset.iterrows()]
        return sorted(rows, key=lambda r: r["code"])

    def states_at(self, lat: float, lon: float) -> List[str]:
        joined = spatial_join_point_to_polygons(Point(lon, lat), self.states)
        if joined is None:
            return []
        return sorted({str(c) for c in joined["code"]})

    def lgas_at(self, state_code: str, lat: float, lon: float) -> List[str]:
        if self.lgas.empty:
            return []
        subset = self.lgas[self.lgas["state_code"] == state_code]
        joined = spatial_join_point_to_polygons(Point(lon, lat), subset)
        if joined is None:
            return []
        return sorted({str(c) for c in joined["code"]})

    def default_state(self) -> Optional[str]:
        if self.default_state_code:
            return self.default_state_code
        return super().default_state()

    def nearest_place_name(self, lat: float, lon: float) -> Optional[str]:
        """Name of the LGA whose centroid is nearest to the point."""
        if self._lga_centroids is None:
            self._lga_centroids = self._compute_lga_centroids()
        nearest = find_nearest_features(lon, lat, self._lga_centroids, limit=1)
        return nearest[0]["name"] if nearest else None

    def _compute_lga_centroids(self) -> List[Dict[str, Any]]:
        centroids = []
        for _, row in self.lgas.iterrows():
            geometry = row.geometry
            if geometry is None or geometry.is_empty:
                continue
            c_lon, c_lat = compute_centroid(geometry)
            centroids.append({"name": str(row["name"]), "lon": c_lon, "lat": c_lat})
        return centroids

    def get_name(self) -> str:
        return self.name

    @classmethod
    def from_geojson(
        cls,
        states_path: Path,
        lgas_path: Optional[Path] = None,
        default_state_code: Optional[str] = None
    ) -> "BoundaryRegistry":
        """
        Load boundaries from GeoJSON files.

        Field names are probed (``code``, ``state_code``, ``ISO``...);
        state names without a code are mapped through the ISO table.
        """
        states_gdf = normalize_states_frame(gpd.read_file(states_path))
        lgas_gdf = None
        if lgas_path is not None:
            lgas_gdf = normalize_lgas_frame(gpd.read_file(lgas_path))
        return cls(states_gdf, lgas_gdf, default_state_code, name=f"GeoJSON ({Path(states_path).name})")


def normalize_states_frame(gdf: gpd.GeoDataFrame) -> gpd.GeoDataFrame:
    """Rename probed state fields to code/name and map names to ISO codes."""
    if gdf.crs is not None and gdf.crs != "EPSG:4326":
        gdf = gdf.to_crs("EPSG:4326")

    name_field = _first_field(gdf.columns, STATE_NAME_FIELDS)
    code_field = _first_field(gdf.columns, STATE_CODE_FIELDS)
    if name_field is None and code_field is None:
        raise ValueError("State boundaries need a code or name field")

    names = gdf[name_field].astype(str).str.strip() if name_field else None
    if code_field:
        codes = gdf[code_field].astype(str).str.strip().str.upper().str[-2:]
    else:
        codes = names.map(NIGERIA_STATE_CODES)
        unknown = names[codes.isna()].tolist()
        if unknown:
            log_error(ValueError("Unknown state names in boundaries"), {
                "module": "boundaries",
                "function": "normalize_states_frame",
                "names": unknown,
            }, level="warning")

    frame = gpd.GeoDataFrame({
        "code": codes,
        "name": names if names is not None else codes,
    }, geometry=gdf.geometry.values, crs="EPSG:4326")
    return frame[frame["code"].notna()].reset_index(drop=True)


def normalize_lgas_frame(gdf: gpd.GeoDataFrame) -> gpd.GeoDataFrame:
    """Rename probed LGA fields to state_code/code/name."""
    if gdf.crs is not None and gdf.crs != "EPSG:4326":
        gdf = gdf.to_crs("EPSG:4326")

    code_field = _first_field(gdf.columns, LGA_CODE_FIELDS)
    name_field = _first_field(gdf.columns, LGA_NAME_FIELDS)
    state_field = _first_field(gdf.columns, ["state_code", "STATE_CODE", "ISO"])
    if code_field is None or state_field is None:
        raise ValueError("LGA boundaries need code and state_code fields")

    return gpd.GeoDataFrame({
        "state_code": gdf[state_field].astype(str).str.strip().str.upper().str[-2:],
        "code": gdf[code_field].astype(str).str.strip(),
        "name": gdf[name_field].astype(str).str.strip() if name_field else gdf[code_field].astype(str),
    }, geometry=gdf.geometry.values, crs="EPSG:4326")
