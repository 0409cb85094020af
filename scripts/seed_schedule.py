"""
Schedule seeding script

Backfills the locations table from the default two-week rotation so the
public schedule has data to serve. Days that already have a location and
days marked as exceptions are skipped.

Run from project root: python scripts/seed_schedule.py [--start YYYY-MM-DD] [--days N]
"""

import argparse
import logging
import os
import sys
from datetime import date

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import SEED_HORIZON_DAYS
from database import SessionLocal
from schedule import seed_locations


def main(argv=None):
    parser = argparse.ArgumentParser(description="Seed trading locations from the rotation")
    parser.add_argument("--start", type=date.fromisoformat, default=None, help="first day to fill (default: today)")
    parser.add_argument("--days", type=int, default=SEED_HORIZON_DAYS, help="number of days to cover")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    db = SessionLocal()
    try:
        created = seed_locations(db, start=args.start, days=args.days)
    finally:
        db.close()

    print(f"Created {created} locations")
    return 0


if __name__ == "__main__":
    sys.exit(main())
