# scripts/check_problematic_students.py
# Audit students registered for a subject assignment and print, for those that
# should not be, the Mongo shell command that pulls it. Nothing is written.
#
# Run:
#   python scripts/check_problematic_students.py
#   python scripts/check_problematic_students.py --ids 6898... 6899... --csv findings.csv

# --- path bootstrap so `from db import get_db` works when run as a script ---
import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
# -------------------------------------------------------------------------

import argparse
from bson.errors import InvalidId
from db import get_db
from utils.enrollment_audit import audit_students, print_audit_report, findings_frame

PROBLEMATIC_IDS = [
    "6898769e72bc9ea5b866d3d8",
    "6898771b72bc9ea5b866d419",
    "6898775072bc9ea5b866d45a",
    "689a27e9c5dffd4f675c0be8",
]
KISWAHILI_CLASS_SUBJECT_ID = "68b98bf9ad996dd40bc814fa"
FORM4_CLASS_ID = "689851fa032ccdda56d45cbd"


def main():
    ap = argparse.ArgumentParser(description="Check potentially problematic student enrollments.")
    ap.add_argument("--ids", nargs="+", default=PROBLEMATIC_IDS, help="student ids to audit")
    ap.add_argument("--class-subject", default=KISWAHILI_CLASS_SUBJECT_ID,
                    help="ClassSubject assignment id the students are registered for")
    ap.add_argument("--class-id", default=FORM4_CLASS_ID, help="class the students should be in")
    ap.add_argument("--year", default=None, help="only look at enrollments of this academic year")
    ap.add_argument("--csv", default=None, help="also write the findings to this CSV file")
    args = ap.parse_args()

    print("🔍 Checking potentially problematic student enrollments...")
    print("=" * 50)
    try:
        findings = audit_students(get_db(), args.ids, args.class_subject, args.class_id, args.year)
    except InvalidId as e:
        print(f"❌ Not a valid id: {e}")
        sys.exit(1)
    print_audit_report(findings, args.class_subject)

    if args.csv:
        findings_frame(findings).to_csv(args.csv, index=False)
        print("wrote:", args.csv)


if __name__ == "__main__":
    main()
