# utils/orphans.py
from typing import Iterable, List


def find_orphaned_enrollments(db, status: str = "Active", echo=print) -> List[dict]:
    """Enrollments whose `student` no longer has a student document."""
    orphans = []
    checked = 0
    for sc in db["studentclasses"].find({"status": status}, {"student": 1}):
        if not db["students"].find_one({"_id": sc.get("student")}, {"_id": 1}):
            orphans.append(sc)
            echo(f"  Found orphaned record: {sc['_id']} -> Missing student: {sc.get('student')}")
        checked += 1
        if checked % 10 == 0:
            echo(f"  Checked {checked} records...")
    echo(f"  Total StudentClass records checked: {checked}")
    echo(f"  Orphaned records found: {len(orphans)}")
    return orphans


def delete_enrollments(db, enrollment_ids: Iterable) -> int:
    deleted = 0
    for _id in enrollment_ids:
        deleted += db["studentclasses"].delete_one({"_id": _id}).deleted_count
    return deleted
