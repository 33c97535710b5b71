#!/usr/bin/env python3
"""CLI script to load the state/LGA catalogue and boundaries into DuckDB."""
import argparse
import sys
from pathlib import Path
import geopandas as gpd
from doorcode.core.duckdb_store import DuckDBStore
from doorcode.core.config import DUCKDB_PATH, LAYER_NAMES, PACKAGE_DATA_DIR


def main():
    parser = argparse.ArgumentParser(description="Ingest state/LGA registry into DuckDB")
    parser.add_argument("--catalogue", type=Path, default=PACKAGE_DATA_DIR / "nigeria_states.csv",
                       help="CSV with state_code, state_name[, lga_code, lga_name]")
    parser.add_argument("--states", type=Path, help="State boundaries GeoJSON")
    parser.add_argument("--lgas", type=Path, help="LGA boundaries GeoJSON")
    parser.add_argument("--db-path", type=Path, default=DUCKDB_PATH,
                       help="DuckDB database path")

    args = parser.parse_args()

    for path in (args.catalogue, args.states, args.lgas):
        if path is not None and not path.exists():
            print(f"Error: File not found: {path}", file=sys.stderr)
            sys.exit(1)

    db_store = DuckDBStore(args.db_path)

    print(f"Ingesting catalogue {args.catalogue}...")
    db_store.ingest_registry_csv(args.catalogue)
    print("✅ Catalogue ingested")

    for layer, path in ((LAYER_NAMES["admin1"], args.states), (LAYER_NAMES["admin2"], args.lgas)):
        if path is None:
            continue
        print(f"Loading {path}...")
        gdf = gpd.read_file(path)
        print(f"Loaded {len(gdf)} features")

        print(f"Ingesting into {layer}...")
        db_store.ingest_boundaries(layer, gdf)
        print("✅ Ingested successfully")

    registry = db_store.load_registry()
    print(f"Registry has {len(registry.list_states())} states")

    db_store.close()


if __name__ == "__main__":
    main()
