# utils/enrollment_patch.py
# Make sure every active student of a class is registered for a class-subject
# assignment. Single pass, no transaction: updates that succeeded before an
# error stay in place.
from __future__ import annotations
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from bson import ObjectId
from pymongo.errors import PyMongoError

ACTIVE = "Active"
TEACHER_ROLES = ["teacher", "class_teacher", "subject_teacher"]


class MissingPrerequisite(RuntimeError):
    """Class, subject, teacher or term the patch depends on does not exist."""


def _now():
    return datetime.now(tz=timezone.utc)


def _active_enrollments_q(class_id, academic_year: str) -> dict:
    return {"class": class_id, "academicYear": academic_year, "status": ACTIVE}


def resolve_class_and_subject(db, class_name: str, subject_code: str) -> Tuple[dict, dict]:
    cls = db["classes"].find_one({"name": class_name})
    subj = db["subjects"].find_one({"code": subject_code})
    if not cls or not subj:
        missing = []
        if not cls:
            missing.append(f"class '{class_name}'")
        if not subj:
            missing.append(f"subject '{subject_code}'")
        raise MissingPrerequisite(f"Required data not found: {', '.join(missing)}")
    return cls, subj


def ensure_class_subject(db, class_id, subject_id, academic_year: str,
                         dry_run: bool = False, echo=print) -> Tuple[Optional[ObjectId], bool]:
    """
    Return (assignment_id, created). An existing active assignment for
    (class, subject, year) wins; otherwise one is built from any active teacher
    and a term of that year (the current term first).
    """
    cs = db["classsubjects"]
    existing = cs.find_one({
        "class": class_id,
        "subject": subject_id,
        "academicYear": academic_year,
        "isActive": True,
    })
    if existing:
        echo(f"✅ ClassSubject assignment already exists (ID: {existing['_id']})")
        return existing["_id"], False

    echo("⚠️  No ClassSubject assignment found. Creating a basic one...")
    teacher_q = {"role": {"$in": TEACHER_ROLES}, "isActive": {"$ne": False}}
    teacher = db["users"].find_one(teacher_q)
    term = db["terms"].find_one({"academicYear": academic_year}, sort=[("isCurrent", -1)])

    if not teacher or not term:
        n_teachers = db["users"].count_documents(teacher_q)
        n_terms = db["terms"].count_documents({"academicYear": academic_year})
        raise MissingPrerequisite(
            "Cannot create ClassSubject: need at least one teacher and one term "
            f"(teachers found: {n_teachers}, terms for {academic_year}: {n_terms})"
        )

    if dry_run:
        echo(f"   (dry-run) would create with teacher {teacher.get('email')} and term {term.get('name')}")
        return None, True

    now = _now()
    res = cs.insert_one({
        "class": class_id,
        "subject": subject_id,
        "teacher": teacher["_id"],
        "academicYear": academic_year,
        "term": term["_id"],
        "isActive": True,
        "createdAt": now,
        "updatedAt": now,
    })
    echo(f"✅ Created new ClassSubject assignment (ID: {res.inserted_id})")
    echo(f"   - Teacher: {teacher.get('email')}")
    echo(f"   - Term: {term.get('name')}")
    return res.inserted_id, True


def _student_label(db, student_id) -> str:
    s = db["students"].find_one({"_id": student_id}, {"firstName": 1, "lastName": 1})
    if s:
        return f"{s.get('firstName', '')} {s.get('lastName', '')}".strip()
    return f"ID: {student_id}"


def enroll_class_in_assignment(db, class_id, academic_year: str, assignment_id,
                               dry_run: bool = False, verbose: bool = True, echo=print) -> dict:
    """
    Add assignment_id to the subjects of every active enrollment of the class.
    The enrollment list is fetched once up front; a failing lookup or update is counted
    and skipped.
    """
    sc = db["studentclasses"]
    rows: List[dict] = list(sc.find(_active_enrollments_q(class_id, academic_year)))

    out = {"total": len(rows), "newly_enrolled": 0, "already_enrolled": 0,
           "unchanged": 0, "errors": 0}

    for row in rows:
        label = f"ID: {row.get('student')}" if verbose else str(row["_id"])
        try:
            if verbose:
                label = _student_label(db, row["student"])
            subjects = row.get("subjects") or []
            if assignment_id is not None and any(str(s) == str(assignment_id) for s in subjects):
                out["already_enrolled"] += 1
                if verbose:
                    echo(f"   ✅ {label} - Already enrolled")
                continue

            if dry_run:
                out["newly_enrolled"] += 1
                if verbose:
                    echo(f"   ➕ {label} - Would enroll")
                continue

            res = sc.update_one(
                {"_id": row["_id"]},
                {"$addToSet": {"subjects": assignment_id}, "$set": {"updatedAt": _now()}},
            )
            if res.modified_count > 0:
                out["newly_enrolled"] += 1
                if verbose:
                    echo(f"   ✅ {label} - Newly enrolled")
            else:
                out["unchanged"] += 1
                if verbose:
                    echo(f"   ⚠️  {label} - No changes made")
        except PyMongoError as e:
            out["errors"] += 1
            echo(f"   ❌ {label} - Error: {e}")

    return out


def count_enrolled(db, class_id, academic_year: str, assignment_id) -> int:
    q = _active_enrollments_q(class_id, academic_year)
    q["subjects"] = assignment_id
    return db["studentclasses"].count_documents(q)


def enroll_subject_for_class(db, class_name: str, subject_code: str, academic_year: str,
                             dry_run: bool = False, echo=print) -> dict:
    cls, subj = resolve_class_and_subject(db, class_name, subject_code)
    echo(f"📚 Class: {cls['name']} (ID: {cls['_id']})")
    echo(f"📖 Subject: {subj.get('name', subj['code'])} (ID: {subj['_id']})")
    echo(f"📅 Academic Year: {academic_year}")

    echo("\n1️⃣  Checking ClassSubject assignment...")
    assignment_id, created = ensure_class_subject(
        db, cls["_id"], subj["_id"], academic_year, dry_run=dry_run, echo=echo)

    echo(f"\n2️⃣  Enrolling active {cls['name']} students...")
    counts = enroll_class_in_assignment(
        db, cls["_id"], academic_year, assignment_id, dry_run=dry_run, echo=echo)

    verified = None
    if not dry_run:
        echo("\n3️⃣  Verification...")
        verified = count_enrolled(db, cls["_id"], academic_year, assignment_id)
        echo(f"✅ Total students now enrolled: {verified}")

    result = dict(counts, assignment_id=assignment_id, created=created, verified=verified)

    echo("\n📊 Final Summary:")
    echo("=" * 30)
    echo(f"   - Students {'to enroll' if dry_run else 'newly enrolled'}: {counts['newly_enrolled']}")
    echo(f"   - Students already enrolled: {counts['already_enrolled']}")
    echo(f"   - Errors encountered: {counts['errors']}")
    echo(f"   - Total {cls['name']} students: {counts['total']}")
    if verified is not None:
        echo(f"   - Total now enrolled: {verified}")
        if verified != counts["total"] - counts["errors"]:
            echo(f"⚠️  Expected {counts['total'] - counts['errors']} enrolled, found {verified}.")
    if counts["errors"]:
        echo(f"\n⚠️  There were {counts['errors']} errors during enrollment.")
    return result


# ---------------- backfill: every active assignment of a year ----------------
def terms_for_year(db, academic_year: str) -> List[dict]:
    return list(db["terms"].find({"academicYear": academic_year}, {"name": 1, "isCurrent": 1}))


def backfill_assignments(db, academic_year: str, term_id=None,
                         dry_run: bool = False, echo=print) -> dict:
    """
    For each active assignment of the year (optionally one term), enroll the
    active students of its class.
    """
    q = {"academicYear": academic_year, "isActive": True}
    if term_id is not None:
        q["term"] = term_id

    totals = {"assignments_processed": 0, "newly_enrolled": 0,
              "already_enrolled": 0, "errors": 0, "verified": {}}

    for a in list(db["classsubjects"].find(q)):
        cls = db["classes"].find_one({"_id": a.get("class")}, {"name": 1})
        subj = db["subjects"].find_one({"_id": a.get("subject")}, {"name": 1})
        echo(f"\nProcessing: {cls['name'] if cls else 'Unknown Class'} - "
             f"{subj['name'] if subj else 'Unknown Subject'}")

        counts = enroll_class_in_assignment(
            db, a["class"], academic_year, a["_id"], dry_run=dry_run, verbose=False, echo=echo)
        echo(f"  Students in class: {counts['total']}")
        echo(f"  ✅ {'To enroll' if dry_run else 'Newly enrolled'}: {counts['newly_enrolled']}")
        echo(f"  ✅ Already enrolled: {counts['already_enrolled']}")
        if not dry_run:
            verified = count_enrolled(db, a["class"], academic_year, a["_id"])
            echo(f"  🔍 Verified enrolled: {verified}")
            totals["verified"][str(a["_id"])] = verified

        totals["assignments_processed"] += 1
        totals["newly_enrolled"] += counts["newly_enrolled"]
        totals["already_enrolled"] += counts["already_enrolled"]
        totals["errors"] += counts["errors"]

    echo("\n📊 Enrollment Summary:")
    echo(f"  - Assignments processed: {totals['assignments_processed']}")
    echo(f"  - Students {'to enroll' if dry_run else 'newly enrolled'}: {totals['newly_enrolled']}")
    if totals["errors"]:
        echo(f"  - Errors: {totals['errors']}")
    return totals
