# utils/enrollment_audit.py
# Decide, per student, whether a subject assignment should be pulled from
# their class enrollment. Read-only: fixes are printed, never executed.
from __future__ import annotations
from typing import Iterable, List, Optional

import pandas as pd
from bson import ObjectId

from utils.mongo_df import docs_to_df

NO_STUDENT = "No student record found."
NO_ENROLLMENT = "No class enrollment found."
WRONG_CLASS = "Not enrolled in the target class."
NO_USER = "No user account found."
INACTIVE = "Student is inactive."


def _oid(x) -> ObjectId:
    return x if isinstance(x, ObjectId) else ObjectId(str(x))


def _full_name(student: Optional[dict]) -> str:
    if not student:
        return "Unknown"
    return f"{student.get('firstName', '')} {student.get('lastName', '')}".strip() or "Unknown"


def audit_student(db, student_id, class_subject_id, class_id,
                  academic_year: Optional[str] = None) -> dict:
    """
    Three unrelated lookups (student, enrollment, user account) and the list of
    reasons the student should lose the assignment. Any reason means "remove".
    """
    sid = _oid(student_id)
    csid = _oid(class_subject_id)
    cid = _oid(class_id)

    student = db["students"].find_one({"_id": sid})

    q = {"student": sid}
    if academic_year:
        q["academicYear"] = academic_year
    enrollment = db["studentclasses"].find_one(q)

    user = db["users"].find_one({"profileId": sid, "role": "student"})

    class_name = None
    in_target = None
    has_assignment = None
    if enrollment:
        cls = db["classes"].find_one({"_id": enrollment.get("class")}, {"name": 1})
        class_name = cls.get("name") if cls else "Unknown"
        in_target = str(enrollment.get("class")) == str(cid)
        has_assignment = any(str(s) == str(csid) for s in (enrollment.get("subjects") or []))

    reasons: List[str] = []
    if not student:
        reasons.append(NO_STUDENT)
    if not enrollment:
        reasons.append(NO_ENROLLMENT)
    elif not in_target:
        reasons.append(WRONG_CLASS)
    if not user:
        reasons.append(NO_USER)
    if student and student.get("isActive") is False:
        reasons.append(INACTIVE)

    return {
        "student_id": str(sid),
        "name": _full_name(student),
        "student_found": student is not None,
        "student_active": bool(student) and student.get("isActive") is not False,
        "enrollment_found": enrollment is not None,
        "class_name": class_name,
        "status": enrollment.get("status") if enrollment else None,
        "academic_year": enrollment.get("academicYear") if enrollment else None,
        "in_target_class": in_target,
        "has_assignment": has_assignment,
        "user_email": user.get("email") if user else None,
        "user_active": (user.get("isActive", True) if user else None),
        "reasons": reasons,
        "action": "remove" if reasons else "keep",
    }


def audit_students(db, student_ids: Iterable, class_subject_id, class_id,
                   academic_year: Optional[str] = None) -> List[dict]:
    return [audit_student(db, s, class_subject_id, class_id, academic_year) for s in student_ids]


def fix_statement(student_id, class_subject_id) -> str:
    """Mongo shell command that pulls the assignment out of the student's enrollment."""
    return (
        f'db.studentclasses.updateOne({{student: ObjectId("{student_id}")}}, '
        f'{{$pull: {{subjects: ObjectId("{class_subject_id}")}}}});'
    )


def print_audit_report(findings: List[dict], class_subject_id, echo=print):
    for f in findings:
        echo(f"Student ID: {f['student_id']}")
        if f["student_found"]:
            echo(f"  ✅ Student record: {f['name']}")
            echo(f"     Active: {f['student_active']}")
        else:
            echo("  ❌ No student record found!")

        if f["enrollment_found"]:
            echo(f"  ✅ Class enrollment: {f['class_name']}")
            echo(f"     Status: {f['status']}")
            echo(f"     Academic Year: {f['academic_year']}")
            echo(f"     Is in target class: {f['in_target_class']}")
            echo(f"     Has assignment: {f['has_assignment']}")
        else:
            echo("  ❌ No class enrollment found!")

        if f["user_email"] is not None:
            echo(f"  ✅ User account: {f['user_email']} (Active: {f['user_active']})")
        else:
            echo("  ❌ No user account found!")

        if f["action"] == "remove":
            echo("  🚨 RECOMMENDATION: Remove from subject")
        else:
            echo("  ✅ RECOMMENDATION: Keep enrollment")
        echo("  " + "-" * 40)

    to_remove = [f for f in findings if f["action"] == "remove"]
    to_keep = [f for f in findings if f["action"] == "keep"]

    echo("")
    echo("📊 Final Recommendations:")
    echo("=" * 25)
    if to_remove:
        echo("❌ Students to REMOVE from the subject:")
        for f in to_remove:
            echo(f"  - {f['name']} ({f['student_id']})")
            echo(f"    Issues: {', '.join(f['reasons'])}")
        echo("")
        echo("🔧 To remove these students from the subject, run:")
        for f in to_remove:
            echo(fix_statement(f["student_id"], class_subject_id))
    else:
        echo("✅ All students are validly enrolled - no action needed")

    if to_keep:
        echo("")
        echo("✅ Valid students (keep enrollment):")
        for f in to_keep:
            echo(f"  - {f['name']} ({f['student_id']})")

    echo("")
    echo("🎯 Summary:")
    echo(f"  - Students to remove: {len(to_remove)}")
    echo(f"  - Valid students: {len(to_keep)}")


def findings_frame(findings: List[dict]) -> pd.DataFrame:
    rows = [dict(f, reasons="; ".join(f["reasons"])) for f in findings]
    return docs_to_df(rows)
