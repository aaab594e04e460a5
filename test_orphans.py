from bson import ObjectId

from conftest import add_student
from utils.orphans import find_orphaned_enrollments, delete_enrollments


def test_finds_only_enrollments_without_student(db, school):
    keep = add_student(db, school["form4"])
    gone = add_student(db, school["form4"])
    db["students"].delete_one({"_id": gone})
    dropped_gone = add_student(db, school["form4"], status="Dropped")
    db["students"].delete_one({"_id": dropped_gone})

    orphans = find_orphaned_enrollments(db, echo=lambda *_: None)
    assert [o["student"] for o in orphans] == [gone]

    deleted = delete_enrollments(db, [o["_id"] for o in orphans])
    assert deleted == 1
    assert db["studentclasses"].find_one({"student": gone}) is None
    assert db["studentclasses"].find_one({"student": keep}) is not None


def test_progress_every_ten_records(db, school):
    for _ in range(12):
        add_student(db, school["form4"])
    lines = []
    assert find_orphaned_enrollments(db, echo=lines.append) == []
    assert "  Checked 10 records..." in lines
    assert "  Orphaned records found: 0" in lines


def test_delete_unknown_id_counts_nothing(db):
    assert delete_enrollments(db, [ObjectId()]) == 0
