import streamlit as st

from smarthub import agent, announcements, stats
from smarthub import quiz as quiz_service
from smarthub.api_client import Err, Ok, call
from smarthub.app_state import get_client, get_session
from smarthub.formatting import announcement_type_label, attempt_status_label, format_compact_time, format_score
from smarthub.models import Role
from smarthub.ui import render_hero, report, setup_page

setup_page("SmartHub", "🎓")

render_hero(
    "SmartHub",
    "Courses, projects, internships, announcements, resources and quizzes in one place.",
)

session = get_session()
if session is None:
    st.info("Log in or register from the sidebar to get started.")
    st.stop()

client = get_client()

st.subheader(f"Welcome, {session.user.display_name}")

with st.spinner("Loading dashboard..."):
    if session.has_role(Role.ADMIN):
        stats_result = call(stats.get_admin_stats, client)
    else:
        stats_result = call(stats.get_dashboard_stats, client)

if isinstance(stats_result, Ok):
    s = stats_result.value
    cols = st.columns(6)
    cols[0].metric("Courses", s.courses)
    cols[1].metric("Projects", s.projects)
    cols[2].metric("Internships", s.internships)
    cols[3].metric("Announcements", s.announcements)
    cols[4].metric("Resources", s.resources)
    cols[5].metric("Quizzes", s.quizzes)
    if session.has_role(Role.ADMIN):
        cols = st.columns(4)
        cols[0].metric("Users", s.users)
        cols[1].metric("Active users", s.active_users)
        cols[2].metric("Teachers", s.teachers)
        cols[3].metric("Students", s.students)
elif isinstance(stats_result, Err):
    st.warning(f"Statistics unavailable: {stats_result.message}")

left, right = st.columns([3, 2])

with left:
    st.markdown("### Recent announcements")
    result = call(announcements.get_recent, client)
    if isinstance(result, Ok):
        if not result.value:
            st.info("No announcements yet.")
        for item in result.value[:5]:
            with st.container(border=True):
                st.markdown(f"**{item.title}** · {announcement_type_label(item.type)}")
                st.caption(format_compact_time(item.date))
                st.write(item.content[:280] + ("..." if len(item.content) > 280 else ""))
    elif isinstance(result, Err):
        report(result)

with right:
    if session.is_student:
        st.markdown("### My recent attempts")
        result = call(quiz_service.get_recent_attempts, client, session.user_id, 5)
        if isinstance(result, Ok):
            rows = [
                {
                    "Quiz": a.quiz_title or f"#{a.quiz_id}",
                    "Status": attempt_status_label(a.status),
                    "Score": format_score(a.score),
                    "Date": format_compact_time(a.completed_at or a.attempted_at),
                }
                for a in result.value
            ]
            if rows:
                st.dataframe(rows, use_container_width=True, hide_index=True)
            else:
                st.info("You have not attempted any quiz yet.")
        elif isinstance(result, Err):
            report(result)

        st.markdown("### Suggested next topic")
        result = call(agent.recommend_next_quiz, client, session.user_id)
        if isinstance(result, Ok) and result.value.recommended_topic:
            st.success(f"**{result.value.recommended_topic}**")
            if result.value.reason:
                st.caption(result.value.reason)
        elif isinstance(result, Err):
            st.caption("No recommendation available right now.")
    else:
        st.markdown("### Quick links")
        st.page_link("pages/6_Quizzes.py", label="Manage quizzes", icon="📝")
        st.page_link("pages/9_Quiz_Generation.py", label="Generate a quiz with AI", icon="🤖")
        st.page_link("pages/4_Announcements.py", label="Publish an announcement", icon="📣")
