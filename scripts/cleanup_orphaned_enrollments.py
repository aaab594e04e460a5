# scripts/cleanup_orphaned_enrollments.py
# --- path bootstrap ---
import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
# ----------------------

import argparse
from db import get_db
from utils.orphans import find_orphaned_enrollments, delete_enrollments


def main():
    ap = argparse.ArgumentParser(description="Remove StudentClass records that point at missing students.")
    ap.add_argument("--status", default="Active", help="enrollment status to scan")
    ap.add_argument("--commit", action="store_true", help="Delete the records. Default is dry-run.")
    args = ap.parse_args()

    db = get_db()
    print("🧹 Looking for orphaned StudentClass records...")
    orphans = find_orphaned_enrollments(db, status=args.status)

    if not orphans:
        print("✅ No orphaned records found - database is clean!")
        return
    if not args.commit:
        print("(dry-run) No changes written. Add --commit to apply.")
        return

    deleted = delete_enrollments(db, [o["_id"] for o in orphans])
    print(f"✅ Deleted {deleted} orphaned StudentClass records")


if __name__ == "__main__":
    main()
