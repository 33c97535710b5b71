#!/usr/bin/env python3
"""CLI script to build a Digital Door Code and descriptive address for a coordinate."""
import argparse
import json
import sys
from pathlib import Path
from doorcode.core.classifier import AreaClassifier
from doorcode.core.config import BEST_EFFORT_LOOKUP, DUCKDB_PATH
from doorcode.core.duckdb_store import DuckDBStore
from doorcode.core.errors import DoorCodeError
from doorcode.core.locator import AdministrativeLocator
from doorcode.core.models import AddressRecord
from doorcode.core.orchestrator import EnhancedAddressOrchestrator
from doorcode.core.rural import RuralAddressGenerator
from doorcode.core.sequence import SequenceAllocator
from doorcode.utils.error_tracking import setup_error_tracking
from doorcode.utils.logging import setup_logging


def main():
    parser = argparse.ArgumentParser(description="Generate a Digital Door Code")
    parser.add_argument("lat", type=float, help="Latitude")
    parser.add_argument("lon", type=float, help="Longitude")
    parser.add_argument("--city", help="City or town name")
    parser.add_argument("--text", help="User-entered address text")
    parser.add_argument("--rural", action="store_true", help="Force rural descriptive address")
    parser.add_argument("--state", help="State code override")
    parser.add_argument("--lga", help="LGA code override")
    parser.add_argument("--best-effort", action="store_true", default=BEST_EFFORT_LOOKUP,
                       help="Fall back to default state / first LGA when nothing matches")
    parser.add_argument("--save", action="store_true", help="Store the address")
    parser.add_argument("--db-path", type=Path, default=DUCKDB_PATH,
                       help="DuckDB database path")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")

    args = parser.parse_args()
    setup_logging(args.log_level)
    setup_error_tracking()

    db_store = DuckDBStore(args.db_path)
    registry = db_store.load_registry()
    orchestrator = EnhancedAddressOrchestrator(
        locator=AdministrativeLocator(registry, best_effort=args.best_effort),
        classifier=AreaClassifier(),
        allocator=SequenceAllocator(db_store),
        rural_generator=RuralAddressGenerator(address_store=db_store, registry=registry),
    )

    try:
        result = orchestrator.build(
            args.lat, args.lon, args.city,
            user_text=args.text,
            is_rural=args.rural,
            require_code=args.save,
            allocate=args.save,
            state_code=args.state,
            lga_code=args.lga,
        )
    except DoorCodeError as e:
        print(f"Error: {e}", file=sys.stderr)
        db_store.close()
        sys.exit(1)

    if args.save:
        record = AddressRecord(
            code=result.code,
            latitude=args.lat,
            longitude=args.lon,
            city=args.city,
            special_description=result.address_components.primary,
            **result.components.to_dict(),
        )
        db_store.save_address(record)

    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    db_store.close()


if __name__ == "__main__":
    main()
