# scripts/enroll_term_assignments.py
# Enroll students in every active ClassSubject assignment of a year, or of one
# term, where they are missing.
#
# Run:
#   python scripts/enroll_term_assignments.py --year 2025
#   python scripts/enroll_term_assignments.py --year 2025 --term 684bf23e2df1befa4ceb8874 --commit

# --- path bootstrap ---
import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
# ----------------------

import argparse
from bson import ObjectId
from bson.errors import InvalidId
from db import get_db
from utils.enrollment_patch import backfill_assignments, terms_for_year


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--year", default="2025", help="academic year")
    ap.add_argument("--term", default=None, help="only this term id (default: all terms of the year)")
    ap.add_argument("--commit", action="store_true", help="Apply changes. Default is dry-run.")
    args = ap.parse_args()

    term_id = None
    if args.term:
        try:
            term_id = ObjectId(args.term)
        except InvalidId:
            print(f"❌ Not a valid term id: {args.term}")
            sys.exit(1)

    db = get_db()
    print("🔧 Enrolling students in ClassSubject assignments...")
    print("=" * 60)
    terms = terms_for_year(db, args.year)
    print(f"📅 Found {len(terms)} terms for {args.year}:")
    for t in terms:
        print(f"- {t.get('name')} (ID: {t['_id']})")

    backfill_assignments(db, args.year, term_id=term_id, dry_run=not args.commit)

    if not args.commit:
        print("\n(dry-run) No changes written. Add --commit to apply.")


if __name__ == "__main__":
    main()
