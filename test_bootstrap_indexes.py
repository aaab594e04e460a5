import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from utils.bootstrap_indexes import ensure_indexes


def test_duplicate_assignment_rejected(db):
    ensure_indexes(db)
    doc = {"class": ObjectId(), "subject": ObjectId(), "teacher": ObjectId(),
           "term": ObjectId(), "academicYear": "2025", "isActive": True}
    db["classsubjects"].insert_one(dict(doc))
    with pytest.raises(DuplicateKeyError):
        db["classsubjects"].insert_one(dict(doc))


def test_one_enrollment_per_student_class_year(db):
    ensure_indexes(db)
    doc = {"student": ObjectId(), "class": ObjectId(), "academicYear": "2025", "status": "Active"}
    db["studentclasses"].insert_one(dict(doc))
    with pytest.raises(DuplicateKeyError):
        db["studentclasses"].insert_one(dict(doc))
