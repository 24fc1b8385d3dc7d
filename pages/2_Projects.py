from datetime import date, timedelta

import streamlit as st

from smarthub import projects, users
from smarthub.api_client import Err, Ok, call
from smarthub.app_state import flash, get_client
from smarthub.formatting import format_compact_time, work_status_label
from smarthub.models import ProjectRequest, Role, WorkStatus
from smarthub.ui import render_hero, report, require_session, setup_page
from smarthub.validation import ValidationError, validate_project

setup_page("Projects", "🧪")
session = require_session()
client = get_client()

render_hero("Projects", "Supervised student projects and their progress.")


def load_students():
    result = call(users.get_users_by_role, client, Role.STUDENT)
    if isinstance(result, Err):
        report(result)
        return {}
    return {f"{u.display_name} ({u.username})": u.id for u in result.value}


def project_form(key: str, project=None):
    """Render the create/edit form and return a request when it is submitted."""
    student_map = load_students()
    current_ids = {s.id for s in project.students} if project else set()
    with st.form(key, clear_on_submit=project is None):
        title = st.text_input("Title", value=project.title if project else "")
        description = st.text_area("Description", value=(project.description or "") if project else "")
        col1, col2 = st.columns(2)
        start = col1.date_input("Start date", value=(project.start_date if project and project.start_date else date.today()))
        end = col2.date_input(
            "End date",
            value=(project.end_date if project and project.end_date else date.today() + timedelta(days=90)),
        )
        statuses = list(WorkStatus)
        status = st.selectbox(
            "Status",
            statuses,
            index=statuses.index(project.status) if project else 0,
            format_func=work_status_label,
        )
        chosen = st.multiselect(
            "Students",
            list(student_map.keys()),
            default=[label for label, sid in student_map.items() if sid in current_ids],
        )
        submitted = st.form_submit_button("Save" if project else "Create", type="primary")
    if not submitted:
        return None
    request = ProjectRequest(
        title=title.strip(),
        description=description.strip(),
        student_ids=[student_map[label] for label in chosen],
        start_date=start,
        end_date=end,
        status=status,
    )
    try:
        validate_project(request)
    except ValidationError as exc:
        for problem in exc.problems:
            st.error(problem)
        return None
    return request


if session.can_author:
    with st.expander("Create a project"):
        request = project_form("create_project")
        if request is not None:
            result = call(projects.create_project, client, request)
            if isinstance(result, Ok):
                flash(f"Project created: {result.value.title}")
                st.rerun()
            report(result)

col_scope, col_status, col_search = st.columns([2, 1, 2])
scopes = ["All projects", "My projects"]
scope = col_scope.radio("Show", scopes, horizontal=True)
status_filter = col_status.selectbox("Status", [None] + list(WorkStatus), format_func=lambda s: "Any" if s is None else work_status_label(s))
query = col_search.text_input("Search", placeholder="Title or description")

if query.strip():
    result = call(projects.search_projects, client, query.strip())
elif status_filter is not None:
    result = call(projects.get_projects_by_status, client, status_filter)
elif scope == "My projects":
    loader = projects.get_student_projects if session.is_student else projects.get_supervised_projects
    result = call(loader, client)
else:
    result = call(projects.list_projects, client)

if isinstance(result, Err):
    report(result)
    st.stop()

if not result.value:
    st.info("No projects found.")
    st.stop()

for project in result.value:
    supervisor = project.supervisor.display_name if project.supervisor else "No supervisor"
    with st.expander(f"{project.title} · {work_status_label(project.status)}"):
        st.write(project.description or "No description")
        st.caption(
            f"Supervisor: {supervisor} · "
            f"{format_compact_time(project.start_date)} → {format_compact_time(project.end_date)}"
        )
        if project.students:
            st.write("**Students:** " + ", ".join(s.display_name for s in project.students))
        else:
            st.caption("No students assigned.")

        owns = session.has_role(Role.ADMIN) or (
            session.can_author and project.supervisor is not None and project.supervisor.id == session.user_id
        )
        if not owns:
            continue

        request = project_form(f"edit_project_{project.id}", project)
        if request is not None:
            updated = call(projects.update_project, client, project.id, request)
            if isinstance(updated, Ok):
                flash("Project updated.")
                st.rerun()
            report(updated)

        if st.button("Delete project", key=f"del_project_{project.id}"):
            deleted = call(projects.delete_project, client, project.id)
            if isinstance(deleted, Ok):
                flash(f"Project deleted: {project.title}")
                st.rerun()
            report(deleted)
