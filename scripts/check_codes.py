#!/usr/bin/env python3
"""CLI script to re-parse stored address codes and report malformed ones."""
import argparse
import sys
from collections import Counter
from pathlib import Path
from doorcode.core.codec import decode
from doorcode.core.config import DUCKDB_PATH
from doorcode.core.duckdb_store import DuckDBStore
from doorcode.core.models import MalformedCode


def main():
    parser = argparse.ArgumentParser(description="Validate stored Digital Door Codes")
    parser.add_argument("--db-path", type=Path, default=DUCKDB_PATH,
                       help="DuckDB database path")
    parser.add_argument("--verbose", action="store_true", help="List every malformed code")

    args = parser.parse_args()

    db_store = DuckDBStore(args.db_path)
    codes = db_store.list_codes()
    db_store.close()

    reasons = Counter()
    for code in codes:
        parsed = decode(code)
        if isinstance(parsed, MalformedCode):
            reasons[parsed.reason] += 1
            if args.verbose:
                print(f"{code}: {parsed.reason} ({parsed.segment})")

    print(f"Checked {len(codes)} codes")
    for reason, count in reasons.most_common():
        print(f"  {reason}: {count}")

    if reasons:
        legacy = reasons.get("legacy_hhg", 0)
        print(f"⚠️  {sum(reasons.values())} malformed ({legacy} legacy HHG)")
        sys.exit(1)
    print("✅ All codes valid")


if __name__ == "__main__":
    main()
