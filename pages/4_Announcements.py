from datetime import datetime, time

import streamlit as st

from smarthub import announcements
from smarthub.api_client import Err, Ok, call
from smarthub.app_state import flash, get_client
from smarthub.formatting import announcement_type_label, format_compact_time
from smarthub.models import AnnouncementRequest, AnnouncementType, Role
from smarthub.ui import render_hero, report, require_session, setup_page
from smarthub.validation import ValidationError, validate_announcement

setup_page("Announcements", "📣")
session = require_session()
client = get_client()

render_hero("Announcements", "Seminars, workshops, defenses and offers.")


def announcement_form(key: str, item=None):
    types = list(AnnouncementType)
    when = item.date if item and item.date else datetime.now()
    with st.form(key, clear_on_submit=item is None):
        title = st.text_input("Title", value=item.title if item else "")
        content = st.text_area("Content", value=item.content if item else "", height=160)
        kind = st.selectbox(
            "Type", types, index=types.index(item.type) if item else 0, format_func=announcement_type_label
        )
        col1, col2 = st.columns(2)
        day = col1.date_input("Date", value=when.date())
        hour = col2.time_input("Time", value=when.time() if item else time(9, 0))
        published = st.checkbox("Published", value=item.published if item else False)
        submitted = st.form_submit_button("Save" if item else "Publish", type="primary")
    if not submitted:
        return None
    request = AnnouncementRequest(
        title=title.strip(),
        content=content.strip(),
        type=kind,
        date=datetime.combine(day, hour),
        published=published,
    )
    try:
        validate_announcement(request)
    except ValidationError as exc:
        for problem in exc.problems:
            st.error(problem)
        return None
    return request


if session.can_author:
    with st.expander("New announcement"):
        request = announcement_form("create_announcement")
        if request is not None:
            result = call(announcements.create_announcement, client, request)
            if isinstance(result, Ok):
                flash(f"Announcement saved: {result.value.title}")
                st.rerun()
            report(result)

scopes = ["Published", "All", "Mine"] if session.can_author else ["Published"]
col1, col2, col3 = st.columns([2, 1, 2])
scope = col1.radio("Show", scopes, horizontal=True)
type_filter = col2.selectbox(
    "Type", [None] + list(AnnouncementType), format_func=lambda t: "Any" if t is None else announcement_type_label(t)
)
query = col3.text_input("Search", placeholder="Title or content")

if query.strip():
    result = call(announcements.search_announcements, client, query.strip())
elif type_filter is not None:
    result = call(announcements.get_by_type, client, type_filter, published_only=scope == "Published")
elif scope == "All":
    result = call(announcements.list_announcements, client)
elif scope == "Mine":
    result = call(announcements.get_my_announcements, client)
else:
    result = call(announcements.get_published, client)

if isinstance(result, Err):
    report(result)
    st.stop()

items = result.value
if not session.can_author:
    items = [a for a in items if a.published]
if not items:
    st.info("No announcements found.")
    st.stop()

for item in sorted(items, key=lambda a: a.date.timestamp() if a.date else 0, reverse=True):
    badge = "" if item.published else " · Draft"
    with st.expander(f"{item.title} · {announcement_type_label(item.type)}{badge}"):
        author = item.author.display_name if item.author else "Unknown"
        st.caption(f"{format_compact_time(item.date)} · by {author}")
        st.write(item.content)

        owns = session.has_role(Role.ADMIN) or (
            session.can_author and item.author is not None and item.author.id == session.user_id
        )
        if not owns:
            continue

        col_pub, col_del = st.columns(2)
        if col_pub.button("Unpublish" if item.published else "Publish", key=f"toggle_{item.id}"):
            toggled = call(announcements.toggle_publish, client, item.id)
            if isinstance(toggled, Ok):
                flash("Published." if toggled.value.published else "Moved to drafts.")
                st.rerun()
            report(toggled)
        if col_del.button("Delete", key=f"del_announcement_{item.id}"):
            deleted = call(announcements.delete_announcement, client, item.id)
            if isinstance(deleted, Ok):
                flash("Announcement deleted.")
                st.rerun()
            report(deleted)

        request = announcement_form(f"edit_announcement_{item.id}", item)
        if request is not None:
            updated = call(announcements.update_announcement, client, item.id, request)
            if isinstance(updated, Ok):
                flash("Announcement updated.")
                st.rerun()
            report(updated)
