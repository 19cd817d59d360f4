#!/usr/bin/env python3
"""
Migrate candidates, companies and jobs from the JSON store to SQLite.

Usage:
    python scripts/migrate_json_to_db.py --json data/store.json --db data/jobmatch.db
"""

import argparse
from pathlib import Path
import sys

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from jobmatch.database import SqlRepository
from jobmatch.schema import VALIDATORS
from jobmatch.storage import COLLECTIONS, load_store


def migrate(json_path: Path, db_path: Path, dry_run: bool = False) -> dict:
    """
    Migrate every collection from JSON to database.

    Args:
        json_path: Path to JSON store file
        db_path: Path to SQLite database file
        dry_run: If True, don't write to database

    Returns:
        Per-collection counts: {"jobs": {"migrated": n, "skipped": n}, ...}
    """
    print(f"Loading records from {json_path}...")
    store = load_store(json_path)
    for name in COLLECTIONS:
        print(f"Found {len(store[name])} {name} in JSON store")

    if dry_run:
        print("\n[DRY RUN] Nothing written.")
        return {name: {"migrated": 0, "skipped": 0} for name in COLLECTIONS}

    print(f"\nInitializing database at {db_path}...")
    repository = SqlRepository(db_path)

    counts = {}
    for name in COLLECTIONS:
        migrated = skipped = 0
        for key, record in store[name].items():
            errors = VALIDATORS[name](record)
            if errors:
                print(f"⚠️  Skipping {name}/{key}: {'; '.join(errors)}")
                skipped += 1
                continue
            if name == "jobs" and not record.get("id"):
                record = {**record, "id": key}
            outcome = repository.save(name, record)
            if outcome["status"] == "no-change":
                skipped += 1
            else:
                migrated += 1
        counts[name] = {"migrated": migrated, "skipped": skipped}

    print("\n✅ Migration complete!")
    for name, c in counts.items():
        print(f"   {name:<10} migrated={c['migrated']} skipped={c['skipped']}")
    return counts


def main():
    parser = argparse.ArgumentParser(description="Migrate the JSON store to SQLite")
    parser.add_argument("--json", type=Path, default=Path("data/store.json"),
                        help="Path to JSON store file")
    parser.add_argument("--db", type=Path, default=Path("data/jobmatch.db"),
                        help="Path to SQLite database file")
    parser.add_argument("--dry-run", action="store_true",
                        help="Show what would be migrated without writing")

    args = parser.parse_args()

    if not args.json.exists():
        print(f"❌ JSON file not found: {args.json}")
        sys.exit(1)

    migrate(args.json, args.db, dry_run=args.dry_run)


if __name__ == "__main__":
    main()
