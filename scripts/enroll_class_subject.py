# scripts/enroll_class_subject.py
# Enroll every active student of a class in one subject (e.g. Form 4 Kiswahili),
# creating the ClassSubject assignment first if it is missing.
#
# Run:
#   python scripts/enroll_class_subject.py                       # dry run
#   python scripts/enroll_class_subject.py --commit
#   python scripts/enroll_class_subject.py --class "Form 3" --subject ARAB --year 2025 --commit

# --- path bootstrap ---
import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
# ----------------------

import argparse
from db import get_db
from utils.enrollment_patch import MissingPrerequisite, enroll_subject_for_class


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--class", dest="class_name", default="Form 4", help="class name")
    ap.add_argument("--subject", default="KISW", help="subject code")
    ap.add_argument("--year", default="2025", help="academic year")
    ap.add_argument("--commit", action="store_true", help="Apply changes. Default is dry-run.")
    args = ap.parse_args()

    print(f"🔄 Enrolling {args.class_name} students in {args.subject}...")
    print("=" * 60)
    try:
        res = enroll_subject_for_class(get_db(), args.class_name, args.subject, args.year,
                                       dry_run=not args.commit)
    except MissingPrerequisite as e:
        print(f"❌ {e}")
        sys.exit(1)

    if not args.commit:
        print("\n(dry-run) No changes written. Add --commit to apply.")
        return
    if res["newly_enrolled"]:
        print(f"\n✅ SUCCESS: {res['newly_enrolled']} students have been enrolled in {args.subject}!")
    print("\n🎉 Enrollment process completed!")


if __name__ == "__main__":
    main()
