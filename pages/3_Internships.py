from datetime import date, timedelta

import streamlit as st

from smarthub import internships, users
from smarthub.api_client import Err, Ok, call
from smarthub.app_state import flash, get_client
from smarthub.formatting import format_compact_time, work_status_label
from smarthub.models import InternshipRequest, Role, WorkStatus
from smarthub.ui import render_hero, report, require_session, setup_page
from smarthub.validation import ValidationError, validate_internship

setup_page("Internships", "💼")
session = require_session()
client = get_client()

render_hero("Internships", "Company internships, their students and supervisors.")


def internship_form(key: str, internship=None):
    students = call(users.get_users_by_role, client, Role.STUDENT)
    if isinstance(students, Err):
        report(students)
        return None
    student_map = {f"{u.display_name} ({u.username})": u.id for u in students.value}
    labels = list(student_map.keys())
    current = None
    if internship and internship.student:
        current = next((label for label, sid in student_map.items() if sid == internship.student.id), None)

    with st.form(key, clear_on_submit=internship is None):
        title = st.text_input("Title", value=internship.title if internship else "")
        company = st.text_input("Company", value=(internship.company or "") if internship else "")
        description = st.text_area("Description", value=(internship.description or "") if internship else "")
        student_label = st.selectbox("Student", labels, index=labels.index(current) if current in labels else None)
        col1, col2 = st.columns(2)
        start = col1.date_input("Start date", value=internship.start_date if internship and internship.start_date else date.today())
        end = col2.date_input(
            "End date",
            value=internship.end_date if internship and internship.end_date else date.today() + timedelta(days=60),
        )
        statuses = list(WorkStatus)
        status = st.selectbox(
            "Status",
            statuses,
            index=statuses.index(internship.status) if internship else 0,
            format_func=work_status_label,
        )
        submitted = st.form_submit_button("Save" if internship else "Create", type="primary")
    if not submitted:
        return None

    problems = []
    if student_label is None:
        problems.append("A student must be selected.")
    else:
        try:
            request = InternshipRequest(
                title=title.strip(),
                company=company.strip(),
                description=description.strip(),
                student_id=student_map[student_label],
                supervisor_id=internship.supervisor.id if internship and internship.supervisor else session.user_id,
                start_date=start,
                end_date=end,
                status=status,
            )
            validate_internship(request)
            return request
        except ValidationError as exc:
            problems.extend(exc.problems)
    for problem in problems:
        st.error(problem)
    return None


if session.can_author:
    with st.expander("Create an internship"):
        request = internship_form("create_internship")
        if request is not None:
            result = call(internships.create_internship, client, request)
            if isinstance(result, Ok):
                flash(f"Internship created: {result.value.title}")
                st.rerun()
            report(result)

with st.expander("Filters", expanded=False):
    f1, f2 = st.columns(2)
    status_filter = f1.selectbox(
        "Status", [None] + list(WorkStatus), format_func=lambda s: "Any" if s is None else work_status_label(s)
    )
    company_filter = f2.text_input("Company")
    d1, d2 = st.columns(2)
    use_dates = st.checkbox("Filter by start date")
    date_from = d1.date_input("Start date from", value=date.today() - timedelta(days=365), disabled=not use_dates)
    date_to = d2.date_input("Start date to", value=date.today() + timedelta(days=365), disabled=not use_dates)

scope = st.radio("Show", ["All internships", "Mine"], horizontal=True)
query = st.text_input("Search", placeholder="Title, company or description")

if query.strip():
    result = call(internships.search_internships, client, query.strip())
elif scope == "Mine":
    loader = internships.get_my_internships if session.is_student else internships.get_supervised_internships
    result = call(loader, client)
else:
    result = call(
        internships.list_internships,
        client,
        status=status_filter,
        company=company_filter.strip() or None,
        start_date_from=date_from if use_dates else None,
        start_date_to=date_to if use_dates else None,
    )

if isinstance(result, Err):
    report(result)
    st.stop()

if not result.value:
    st.info("No internships found.")
    st.stop()

for internship in result.value:
    with st.expander(f"{internship.title} @ {internship.company or '?'} · {work_status_label(internship.status)}"):
        st.write(internship.description or "No description")
        student = internship.student.display_name if internship.student else "Unassigned"
        supervisor = internship.supervisor.display_name if internship.supervisor else "No supervisor"
        st.caption(
            f"Student: {student} · Supervisor: {supervisor} · "
            f"{format_compact_time(internship.start_date)} → {format_compact_time(internship.end_date)}"
        )

        owns = session.has_role(Role.ADMIN) or (
            session.can_author and internship.supervisor is not None and internship.supervisor.id == session.user_id
        )
        if not owns:
            continue

        request = internship_form(f"edit_internship_{internship.id}", internship)
        if request is not None:
            updated = call(internships.update_internship, client, internship.id, request)
            if isinstance(updated, Ok):
                flash("Internship updated.")
                st.rerun()
            report(updated)

        if st.button("Delete internship", key=f"del_internship_{internship.id}"):
            deleted = call(internships.delete_internship, client, internship.id)
            if isinstance(deleted, Ok):
                flash(f"Internship deleted: {internship.title}")
                st.rerun()
            report(deleted)
