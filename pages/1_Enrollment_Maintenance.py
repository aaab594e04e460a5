# pages/1_Enrollment_Maintenance.py

from __future__ import annotations

import streamlit as st
from bson.errors import InvalidId

from db import get_db
from utils.guards import guard_role, CONSOLE_ROLES
from utils.enrollment_audit import audit_students, print_audit_report, findings_frame, fix_statement
from utils.enrollment_patch import MissingPrerequisite, enroll_subject_for_class
from utils.orphans import find_orphaned_enrollments
from utils.mongo_df import docs_to_df

user = guard_role(*CONSOLE_ROLES)

st.title("🛠️ Enrollment Maintenance")
st.caption(f"Signed in as {user.get('email', '')} ({(user.get('role') or '').upper()})")

db = get_db()


def _run(fn, *args, **kwargs):
    """Call fn with an echo that collects the console lines."""
    lines: list[str] = []
    out = fn(*args, echo=lines.append, **kwargs)
    return out, "\n".join(lines)


tabs = st.tabs(["Audit students", "Enroll class in subject", "Orphaned records"])

# -------------------------------
# 1) Audit
# -------------------------------
with tabs[0]:
    st.subheader("Audit students registered for an assignment")
    ids_raw = st.text_area("Student ids (one per line)")
    c1, c2, c3 = st.columns(3)
    with c1:
        cs_id = st.text_input("ClassSubject id")
    with c2:
        class_id = st.text_input("Target class id")
    with c3:
        year = st.text_input("Academic year (optional)")

    if st.button("Run audit", type="primary"):
        ids = [x.strip() for x in ids_raw.splitlines() if x.strip()]
        try:
            findings = audit_students(db, ids, cs_id, class_id, year or None)
        except InvalidId as e:
            st.error(f"Bad id: {e}")
            st.stop()
        st.dataframe(findings_frame(findings), use_container_width=True)
        fixes = [fix_statement(f["student_id"], cs_id) for f in findings if f["action"] == "remove"]
        if fixes:
            st.warning(f"{len(fixes)} student(s) should be removed. Run in the Mongo shell:")
            st.code("\n".join(fixes), language="javascript")
        else:
            st.success("All students are validly enrolled - no action needed")
        _, log = _run(print_audit_report, findings, cs_id)
        with st.expander("Console output"):
            st.text(log)

# -------------------------------
# 2) Patch
# -------------------------------
with tabs[1]:
    st.subheader("Enroll every active student of a class in a subject")
    c1, c2, c3 = st.columns(3)
    with c1:
        class_name = st.text_input("Class name", value="Form 4")
    with c2:
        subject_code = st.text_input("Subject code", value="KISW")
    with c3:
        p_year = st.text_input("Academic year", value="2025")

    b1, b2 = st.columns(2)
    with b1:
        preview = st.button("Preview (dry-run)", use_container_width=True)
    with b2:
        apply_ = st.button("Apply", type="primary", use_container_width=True)

    if preview or apply_:
        try:
            res, log = _run(enroll_subject_for_class, db, class_name, subject_code, p_year,
                            dry_run=not apply_)
        except MissingPrerequisite as e:
            st.error(str(e))
            st.stop()
        m1, m2, m3, m4 = st.columns(4)
        m1.metric("Newly enrolled" if apply_ else "To enroll", res["newly_enrolled"])
        m2.metric("Already enrolled", res["already_enrolled"])
        m3.metric("Errors", res["errors"])
        m4.metric("Verified", res["verified"] if res["verified"] is not None else "-")
        st.text(log)

# -------------------------------
# 3) Orphans
# -------------------------------
with tabs[2]:
    st.subheader("StudentClass records pointing at missing students")
    st.caption("Read-only here. Delete with scripts/cleanup_orphaned_enrollments.py --commit")
    if st.button("Scan"):
        orphans, log = _run(find_orphaned_enrollments, db)
        if orphans:
            st.dataframe(docs_to_df(orphans), use_container_width=True)
        else:
            st.success("No orphaned records found - database is clean!")
        with st.expander("Console output"):
            st.text(log)
