import altair as alt
import pandas as pd
import streamlit as st

from smarthub import quiz as quiz_service
from smarthub.api_client import Err, Ok, call
from smarthub.app_state import get_client
from smarthub.formatting import answer_status, attempt_status_label, format_compact_time, format_score, score_level
from smarthub.models import AttemptStatus
from smarthub.ui import render_hero, report, require_session, setup_page

setup_page("Quiz results", "📊")
session = require_session()
client = get_client()

render_hero("Quiz results", "Scores and corrections for your submitted attempts.")


def show_attempt(attempt_id: int):
    result = call(quiz_service.get_attempt, client, attempt_id)
    if isinstance(result, Err):
        report(result)
        return
    attempt = result.value

    level = score_level(attempt.score)
    st.markdown(f"### {attempt.quiz_title or f'Quiz #{attempt.quiz_id}'}")
    cols = st.columns(3)
    cols[0].metric("Score", format_score(attempt.score))
    cols[1].metric("Status", attempt_status_label(attempt.status))
    cols[2].metric("Completed", format_compact_time(attempt.completed_at or attempt.attempted_at))
    if level == "success":
        st.success("Great work!")
    elif level == "warning":
        st.warning("Not bad, a bit more practice will help.")
    elif level == "danger":
        st.error("Review the material and try again.")

    if not attempt.answers:
        st.info("No answers were recorded for this attempt.")
        return

    for number, answer in enumerate(attempt.answers, 1):
        icon = {True: "✅", False: "❌"}.get(answer.is_correct, "📝")
        with st.expander(f"{icon} Question {number}: {answer.question_text or ''}", expanded=answer.is_correct is False):
            st.write(f"**Your answer:** {answer.answer_text or '(no answer)'}")
            st.caption(answer_status(answer.is_correct))
            if answer.is_correct is False and answer.correct_answer:
                st.write(f"**Correct answer:** {answer.correct_answer}")


selected = st.query_params.get("attempt_id") or st.session_state.get("results_attempt_id")
if selected:
    try:
        show_attempt(int(selected))
    except (TypeError, ValueError):
        st.warning("Invalid attempt id.")
    if st.button("Show all attempts"):
        st.session_state.pop("results_attempt_id", None)
        st.query_params.clear()
        st.rerun()
    st.stop()

if not session.is_student:
    st.info("Attempt history is kept per student. Quiz statistics are on the Quizzes page.")
    st.page_link("pages/6_Quizzes.py", label="Open quizzes", icon="📝")
    st.stop()

result = call(quiz_service.get_user_attempts, client, session.user_id)
if isinstance(result, Err):
    report(result)
    st.stop()

attempts = result.value
if not attempts:
    st.info("You have not attempted any quiz yet.")
    st.page_link("pages/7_Take_Quiz.py", label="Take a quiz", icon="⏱️")
    st.stop()

completed = [a for a in attempts if a.status == AttemptStatus.COMPLETED and a.score is not None]
if completed:
    scores = [a.score for a in completed]
    cols = st.columns(3)
    cols[0].metric("Completed attempts", len(completed))
    cols[1].metric("Average score", format_score(sum(scores) / len(scores)))
    cols[2].metric("Best score", format_score(max(scores)))

    trend_df = pd.DataFrame(
        [
            {
                "date": a.completed_at or a.attempted_at,
                "score": a.score,
                "quiz": a.quiz_title or f"#{a.quiz_id}",
            }
            for a in completed
            if a.completed_at or a.attempted_at
        ]
    )
    if not trend_df.empty:
        trend_df["date"] = pd.to_datetime(trend_df["date"], utc=True)
        chart = (
            alt.Chart(trend_df)
            .mark_line(point=True, color="#58a6ff", strokeWidth=2)
            .encode(
                x=alt.X("date:T", title="Date", axis=alt.Axis(labelAngle=-30)),
                y=alt.Y("score:Q", title="Score (%)", scale=alt.Scale(domain=[0, 100])),
                tooltip=[
                    alt.Tooltip("quiz:N", title="Quiz"),
                    alt.Tooltip("date:T", title="Date"),
                    alt.Tooltip("score:Q", title="Score (%)", format=".1f"),
                ],
            )
            .properties(height=260)
        )
        st.altair_chart(chart, use_container_width=True)

st.markdown("### All attempts")
for attempt in sorted(attempts, key=lambda a: a.id, reverse=True):
    with st.container(border=True):
        left, mid, right = st.columns([4, 2, 1])
        left.markdown(f"**{attempt.quiz_title or f'Quiz #{attempt.quiz_id}'}**")
        left.caption(format_compact_time(attempt.completed_at or attempt.attempted_at))
        mid.write(f"{attempt_status_label(attempt.status)} · {format_score(attempt.score)}")
        if attempt.status == AttemptStatus.IN_PROGRESS:
            if right.button("Resume", key=f"resume_{attempt.id}"):
                st.session_state.take_quiz_id = attempt.quiz_id
                st.switch_page("pages/7_Take_Quiz.py")
        elif right.button("Details", key=f"details_{attempt.id}"):
            st.session_state.results_attempt_id = attempt.id
            st.rerun()
