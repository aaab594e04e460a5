import mongomock
import pytest
from bson import ObjectId


@pytest.fixture
def db():
    return mongomock.MongoClient()["school_management"]


@pytest.fixture
def school(db):
    """Form 4 / Kiswahili with one teacher and two terms of 2025."""
    form4 = db["classes"].insert_one({"name": "Form 4"}).inserted_id
    form3 = db["classes"].insert_one({"name": "Form 3"}).inserted_id
    kisw = db["subjects"].insert_one({"code": "KISW", "name": "Kiswahili"}).inserted_id
    teacher = db["users"].insert_one(
        {"email": "t.mwangi@school.ac.ke", "role": "subject_teacher", "profileId": ObjectId()}
    ).inserted_id
    term1 = db["terms"].insert_one({"name": "Term 1", "academicYear": "2025", "isCurrent": False}).inserted_id
    term2 = db["terms"].insert_one({"name": "Term 2", "academicYear": "2025", "isCurrent": True}).inserted_id
    return {"form4": form4, "form3": form3, "kisw": kisw, "teacher": teacher,
            "term1": term1, "term2": term2}


def add_student(db, class_id, year="2025", status="Active", subjects=None,
                first="Amina", last="Hassan", active=True, with_user=True):
    sid = db["students"].insert_one(
        {"firstName": first, "lastName": last, "isActive": active}
    ).inserted_id
    if with_user:
        db["users"].insert_one({"email": f"{sid}@students.school.ac.ke", "role": "student",
                                "profileId": sid, "isActive": True})
    db["studentclasses"].insert_one({
        "student": sid, "class": class_id, "academicYear": year,
        "status": status, "subjects": list(subjects or []),
    })
    return sid
