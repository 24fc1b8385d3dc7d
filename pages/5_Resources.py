from datetime import date

import streamlit as st

from smarthub import resources, users
from smarthub.api_client import Err, Ok, call
from smarthub.app_state import flash, get_client
from smarthub.config import get_settings
from smarthub.formatting import format_compact_time, format_file_size, resource_type_label
from smarthub.models import ResourceRequest, ResourceType, Role
from smarthub.ui import render_hero, report, require_session, setup_page
from smarthub.validation import ValidationError, validate_resource

setup_page("Resources", "📄")
session = require_session()
client = get_client()

render_hero("Resources", "Articles, theses, publications and reports.")


def author_options():
    result = call(users.list_users, client)
    if isinstance(result, Err):
        report(result)
        return {}
    return {f"{u.display_name} ({u.username})": u.id for u in result.value}


def resource_form(key: str, resource=None):
    """Returns ``(request, upload)`` on a valid submit, else ``None``."""
    authors = author_options()
    current = {a.id for a in resource.authors} if resource else {session.user_id}
    types = list(ResourceType)
    with st.form(key, clear_on_submit=resource is None):
        title = st.text_input("Title", value=resource.title if resource else "")
        abstract = st.text_area("Abstract", value=(resource.abstract_text or "") if resource else "")
        col1, col2 = st.columns(2)
        kind = col1.selectbox(
            "Type", types, index=types.index(resource.type) if resource else 0, format_func=resource_type_label
        )
        published_on = col2.date_input(
            "Publication date",
            value=resource.publication_date if resource and resource.publication_date else date.today(),
        )
        chosen = st.multiselect(
            "Authors", list(authors.keys()), default=[label for label, uid in authors.items() if uid in current]
        )
        upload = st.file_uploader("File", type=["pdf", "doc", "docx", "txt", "ppt", "pptx"])
        submitted = st.form_submit_button("Save" if resource else "Add resource", type="primary")
    if not submitted:
        return None
    request = ResourceRequest(
        title=title.strip(),
        abstract_text=abstract.strip(),
        publication_date=published_on,
        type=kind,
        author_ids=[authors[label] for label in chosen],
    )
    try:
        validate_resource(request)
    except ValidationError as exc:
        for problem in exc.problems:
            st.error(problem)
        return None
    file_part = (upload.name, upload.getvalue(), upload.type) if upload is not None else None
    return request, file_part


if session.can_author:
    with st.expander("Add a resource"):
        submitted = resource_form("create_resource")
        if submitted is not None:
            request, file_part = submitted
            with st.spinner("Uploading..."):
                result = call(resources.create_resource, client, request, file_part)
            if isinstance(result, Ok):
                flash(f"Resource added: {result.value.title}")
                st.rerun()
            report(result)

col1, col2, col3 = st.columns([1, 1, 2])
type_filter = col1.selectbox(
    "Type", [None] + list(ResourceType), format_func=lambda t: "Any" if t is None else resource_type_label(t)
)
year_filter = col2.number_input("Year", min_value=0, max_value=date.today().year + 1, value=0, help="0 means any year")
query = col3.text_input("Search", placeholder="Title or abstract")
mine = st.checkbox("Only my resources") if session.can_author else False

if mine:
    result = call(resources.get_my_resources, client)
else:
    result = call(
        resources.list_resources,
        client,
        resource_type=type_filter,
        year=int(year_filter) or None,
        search=query.strip() or None,
    )

if isinstance(result, Err):
    report(result)
    st.stop()

if not result.value:
    st.info("No resources found.")
    st.stop()

base_url = get_settings().api_url
for resource in result.value:
    with st.expander(f"{resource.title} · {resource_type_label(resource.type)}"):
        authors = ", ".join(a.display_name for a in resource.authors) or "Unknown authors"
        st.caption(f"{authors} · {format_compact_time(resource.publication_date)}")
        st.write(resource.abstract_text or "No abstract")
        if resource.file_download_url:
            link = resource.file_download_url
            if link.startswith("/"):
                link = base_url + link
            size = format_file_size(resource.file_size)
            st.markdown(f"[📥 {resource.original_file_name or 'Download'}]({link}) {size}")

        owns = session.has_role(Role.ADMIN) or (
            session.can_author and any(a.id == session.user_id for a in resource.authors)
        )
        if not owns:
            continue

        submitted = resource_form(f"edit_resource_{resource.id}", resource)
        if submitted is not None:
            request, file_part = submitted
            updated = call(resources.update_resource, client, resource.id, request, file_part)
            if isinstance(updated, Ok):
                flash("Resource updated.")
                st.rerun()
            report(updated)

        if st.button("Delete resource", key=f"del_resource_{resource.id}"):
            deleted = call(resources.delete_resource, client, resource.id)
            if isinstance(deleted, Ok):
                flash(f"Resource deleted: {resource.title}")
                st.rerun()
            report(deleted)
