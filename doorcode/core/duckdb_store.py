"""DuckDB storage layer for registry boundaries, addresses and sequence counters."""
import duckdb
import json
import threading
from datetime import datetime
from pathlib import Path
from typing import List, Dict, Optional, Any

import geopandas as gpd
import pandas as pd
from shapely import wkb

from doorcode.core.centroids import compute_centroid
from doorcode.core.config import DUCKDB_PATH, LAYER_NAMES
from doorcode.core.errors import StoreUnavailableError
from doorcode.core.models import AddressRecord
from doorcode.core.proximity import bounding_box_for_radius
from doorcode.core.sequence import CounterStore
from doorcode.registry.boundaries import (
    BoundaryRegistry,
    normalize_lgas_frame,
    normalize_states_frame,
)

STATE_LAYER = LAYER_NAMES["admin1"]
LGA_LAYER = LAYER_NAMES["admin2"]

ADDRESS_COLUMNS = [
    "code", "latitude", "longitude", "city", "street", "landmark", "special_description",
    "state_code", "lga_code", "area_type", "area_code", "location_number",
]


class DuckDBStore(CounterStore):
    """DuckDB storage manager for the addressing core."""

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize DuckDB connection.

        Args:
            db_path: Path to DuckDB database file, or ":memory:"
        """
        self.db_path = db_path or DUCKDB_PATH
        if str(self.db_path) != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self.conn = duckdb.connect(str(self.db_path))
        # One connection shared by request threads; every statement goes through this lock
        self._lock = threading.RLock()
        self._init_schema()

    def _init_schema(self):
        """Initialize database schema."""
        with self._lock:
            self.conn.execute(f"""
                CREATE TABLE IF NOT EXISTS {STATE_LAYER} (
                    code VARCHAR PRIMARY KEY,
                    name VARCHAR,
                    geometry_wkb VARCHAR,
                    centroid_lon DOUBLE,
                    centroid_lat DOUBLE,
                    properties TEXT,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

            self.conn.execute(f"""
                CREATE TABLE IF NOT EXISTS {LGA_LAYER} (
                    state_code VARCHAR,
                    code VARCHAR,
                    name VARCHAR,
                    geometry_wkb VARCHAR,
                    centroid_lon DOUBLE,
                    centroid_lat DOUBLE,
                    properties TEXT,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    PRIMARY KEY (state_code, code)
                )
            """)

            self.conn.execute("""
                CREATE TABLE IF NOT EXISTS addresses (
                    code VARCHAR PRIMARY KEY,
                    latitude DOUBLE NOT NULL,
                    longitude DOUBLE NOT NULL,
                    city VARCHAR,
                    street VARCHAR,
                    landmark VARCHAR,
                    special_description VARCHAR,
                    state_code VARCHAR,
                    lga_code VARCHAR,
                    area_type VARCHAR,
                    area_code VARCHAR,
                    location_number VARCHAR,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

            self.conn.execute("""
                CREATE TABLE IF NOT EXISTS sequence_counters (
                    scope_key VARCHAR PRIMARY KEY,
                    counter INTEGER NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

            self.conn.execute("CREATE INDEX IF NOT EXISTS idx_addresses_coords ON addresses(latitude, longitude)")
            self.conn.execute("CREATE INDEX IF NOT EXISTS idx_addresses_state_lga ON addresses(state_code, lga_code)")

    # --- Registry -----------------------------------------------------------

    def ingest_registry_csv(self, csv_path: Path):
        """
        Ingest the state/LGA catalogue from CSV.

        Expected columns: state_code, state_name and optionally lga_code,
        lga_name. Existing geometry is kept.

        Args:
            csv_path: Path to CSV file
        """
        df = pd.read_csv(csv_path, dtype=str).fillna("")

        if "state_code" not in df.columns or "state_name" not in df.columns:
            raise ValueError(f"{csv_path} needs state_code and state_name columns")

        states = df[["state_code", "state_name"]].drop_duplicates("state_code")
        lgas = pd.DataFrame()
        if "lga_code" in df.columns:
            lgas = df[df["lga_code"].str.strip() != ""]

        with self._lock:
            for _, row in states.iterrows():
                self.conn.execute(f"""
                    INSERT INTO {STATE_LAYER} (code, name, created_at) VALUES (?, ?, ?)
                    ON CONFLICT (code) DO UPDATE SET name = excluded.name
                """, [row["state_code"].strip().upper(), row["state_name"].strip(), datetime.now()])

            for _, row in lgas.iterrows():
                self.conn.execute(f"""
                    INSERT INTO {LGA_LAYER} (state_code, code, name, created_at) VALUES (?, ?, ?, ?)
                    ON CONFLICT (state_code, code) DO UPDATE SET name = excluded.name
                """, [
                    row["state_code"].strip().upper(),
                    row["lga_code"].strip(),
                    row.get("lga_name", "").strip() or row["lga_code"].strip(),
                    datetime.now(),
                ])

    def ingest_boundaries(self, layer_name: str, gdf: gpd.GeoDataFrame):
        """
        Ingest boundary polygons for states or LGAs.

        Args:
            layer_name: admin1_state or admin2_lga
            gdf: GeoDataFrame with probed code/name (and state_code for LGAs) fields
        """
        if layer_name not in LAYER_NAMES.values():
            raise ValueError(f"Unknown layer name: {layer_name}")

        if layer_name == STATE_LAYER:
            frame = normalize_states_frame(gdf)
        else:
            frame = normalize_lgas_frame(gdf)

        rows = []
        for _, row in frame.iterrows():
            geometry = row.geometry
            centroid_lon, centroid_lat = None, None
            geometry_wkb = None
            if geometry is not None and not geometry.is_empty:
                geometry_wkb = wkb.dumps(geometry, hex=True)
                centroid_lon, centroid_lat = compute_centroid(geometry)

            properties = json.dumps({k: str(v) for k, v in row.items() if k != "geometry"})
            rows.append((row, geometry_wkb, centroid_lon, centroid_lat, properties))

        with self._lock:
            for row, geometry_wkb, centroid_lon, centroid_lat, properties in rows:
                if layer_name == STATE_LAYER:
                    self.conn.execute(f"""
                        INSERT OR REPLACE INTO {STATE_LAYER}
                        (code, name, geometry_wkb, centroid_lon, centroid_lat, properties, created_at)
                        VALUES (?, ?, ?, ?, ?, ?, ?)
                    """, [row["code"], row["name"], geometry_wkb, centroid_lon, centroid_lat,
                          properties, datetime.now()])
                else:
                    self.conn.execute(f"""
                        INSERT OR REPLACE INTO {LGA_LAYER}
                        (state_code, code, name, geometry_wkb, centroid_lon, centroid_lat, properties, created_at)
                        VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """, [row["state_code"], row["code"], row["name"], geometry_wkb,
                          centroid_lon, centroid_lat, properties, datetime.now()])

    def load_registry(self, default_state_code: Optional[str] = None) -> BoundaryRegistry:
        """Build a point-in-polygon registry from the stored layers."""
        with self._lock:
            state_rows = self.conn.execute(
                f"SELECT code, name, geometry_wkb FROM {STATE_LAYER} ORDER BY code"
            ).fetchall()
            lga_rows = self.conn.execute(
                f"SELECT state_code, code, name, geometry_wkb FROM {LGA_LAYER} ORDER BY state_code, code"
            ).fetchall()

        states = gpd.GeoDataFrame(
            [
                {"code": code, "name": name, "geometry": wkb.loads(g, hex=True) if g else None}
                for code, name, g in state_rows
            ],
            columns=["code", "name", "geometry"],
            geometry="geometry",
            crs="EPSG:4326"
        )
        lgas = gpd.GeoDataFrame(
            [
                {"state_code": s, "code": code, "name": name, "geometry": wkb.loads(g, hex=True) if g else None}
                for s, code, name, g in lga_rows
            ],
            columns=["state_code", "code", "name", "geometry"],
            geometry="geometry",
            crs="EPSG:4326"
        )
        return BoundaryRegistry(states, lgas, default_state_code, name=f"DuckDB ({self.db_path})")

    # --- Addresses ----------------------------------------------------------

    def save_address(self, record: AddressRecord):
        """Insert an address. Codes are unique; a duplicate raises duckdb.ConstraintException."""
        values = record.to_dict()
        placeholders = ", ".join("?" for _ in ADDRESS_COLUMNS)
        with self._lock:
            self.conn.execute(
                f"INSERT INTO addresses ({', '.join(ADDRESS_COLUMNS)}, created_at) VALUES ({placeholders}, ?)",
                [values[c] for c in ADDRESS_COLUMNS] + [datetime.now()]
            )

    def get_address(self, code: str) -> Optional[AddressRecord]:
        """Get an address by its code."""
        with self._lock:
            result = self.conn.execute(
                f"SELECT {', '.join(ADDRESS_COLUMNS)} FROM addresses WHERE code = ?", [code]
            ).fetchone()

        if result:
            return AddressRecord(**dict(zip(ADDRESS_COLUMNS, result)))
        return None

    def list_codes(self) -> List[str]:
        """All stored address codes, oldest first."""
        with self._lock:
            return [r[0] for r in self.conn.execute(
                "SELECT code FROM addresses ORDER BY created_at, code"
            ).fetchall()]

    def find_near(self, lat: float, lon: float, radius_km: float) -> List[Dict[str, Any]]:
        """
        Addresses inside the degree box around (lat, lon) that covers ``radius_km``.

        Exact haversine filtering is left to the caller.

        Returns:
            List of {"address_text", "lat", "lon", "code"}

        Raises:
            StoreUnavailableError: if the query fails
        """
        min_lon, min_lat, max_lon, max_lat = bounding_box_for_radius(lon, lat, radius_km)
        try:
            with self._lock:
                rows = self.conn.execute("""
                    SELECT code, latitude, longitude, street, landmark, special_description, city
                    FROM addresses
                    WHERE latitude BETWEEN ? AND ?
                      AND longitude BETWEEN ? AND ?
                """, [min_lat, max_lat, min_lon, max_lon]).fetchall()
        except duckdb.Error as e:
            raise StoreUnavailableError(f"Nearby address query failed: {e}") from e

        results = []
        for code, latitude, longitude, street, landmark, special_description, city in rows:
            record = AddressRecord(
                code=code, latitude=latitude, longitude=longitude, city=city,
                street=street, landmark=landmark, special_description=special_description,
            )
            results.append({
                "address_text": record.display_text(),
                "lat": latitude,
                "lon": longitude,
                "code": code or "",
            })
        return results

    # --- Sequence counters --------------------------------------------------

    def increment(self, key: str) -> int:
        """Atomically increment the counter for ``key`` and return the new value."""
        with self._lock:
            self.conn.execute("BEGIN TRANSACTION")
            try:
                row = self.conn.execute(
                    "SELECT counter FROM sequence_counters WHERE scope_key = ?", [key]
                ).fetchone()
                if row is None:
                    value = 1
                    self.conn.execute(
                        "INSERT INTO sequence_counters (scope_key, counter, updated_at) VALUES (?, ?, ?)",
                        [key, value, datetime.now()]
                    )
                else:
                    value = row[0] + 1
                    self.conn.execute(
                        "UPDATE sequence_counters SET counter = ?, updated_at = ? WHERE scope_key = ?",
                        [value, datetime.now(), key]
                    )
                self.conn.execute("COMMIT")
            except Exception:
                self.conn.execute("ROLLBACK")
                raise
            return value

    def peek(self, key: str) -> int:
        """Current counter value for ``key`` (0 if never incremented)."""
        with self._lock:
            row = self.conn.execute(
                "SELECT counter FROM sequence_counters WHERE scope_key = ?", [key]
            ).fetchone()
        return row[0] if row else 0

    def close(self):
        """Close database connection."""
        with self._lock:
            self.conn.close()
