import altair as alt
import pandas as pd
import streamlit as st

from smarthub import quiz as quiz_service
from smarthub.api_client import Err, Ok, call
from smarthub.app_state import flash, get_client
from smarthub.formatting import format_compact_time, format_score, question_type_label
from smarthub.models import QuizRequest
from smarthub.quiz_editor import blank_quiz, render_quiz_editor, reset_editor
from smarthub.ui import render_hero, report, require_session, setup_page

setup_page("Quizzes", "📝")
session = require_session()
client = get_client()

render_hero("Quizzes", "Browse quizzes, review their statistics and author new ones.")

EDIT_KEY = "quiz_draft"


def start_editing(quiz_id, draft: QuizRequest):
    st.session_state.quiz_draft = draft
    st.session_state.quiz_draft_id = quiz_id
    reset_editor()
    st.rerun()


def stop_editing():
    st.session_state.quiz_draft = None
    st.session_state.quiz_draft_id = None


def render_statistics(quiz):
    stats = call(quiz_service.get_quiz_statistics, client, quiz.id)
    if isinstance(stats, Err):
        report(stats)
        return
    s = stats.value
    cols = st.columns(4)
    cols[0].metric("Attempts", s.total_attempts)
    cols[1].metric("Completed", s.completed_attempts)
    cols[2].metric("Average score", format_score(s.average_score))
    cols[3].metric("Best score", format_score(s.max_score))

    rows = []
    for number, question in enumerate(quiz.questions, 1):
        per_question = call(quiz_service.get_question_statistics, client, question.id)
        if isinstance(per_question, Err):
            continue
        q = per_question.value
        rows.append(
            {
                "Question": f"Q{number}",
                "Text": question.text,
                "Answers": q.total_answers,
                "Correct": q.correct_answers,
                "Success (%)": round(q.correct_percentage, 1),
            }
        )
    if not rows:
        st.caption("No answers recorded yet.")
        return
    df = pd.DataFrame(rows)
    chart = (
        alt.Chart(df)
        .mark_bar(color="#4cc9f0")
        .encode(
            x=alt.X("Question:N", sort=None),
            y=alt.Y("Success (%):Q", scale=alt.Scale(domain=[0, 100])),
            tooltip=["Text:N", "Answers:Q", "Correct:Q", alt.Tooltip("Success (%):Q", format=".1f")],
        )
        .properties(height=240)
    )
    st.altair_chart(chart, use_container_width=True)
    st.dataframe(df, use_container_width=True, hide_index=True)


def render_detail(quiz_id: int):
    result = call(quiz_service.get_quiz, client, quiz_id)
    if isinstance(result, Err):
        report(result)
        return
    quiz = result.value
    st.write(quiz.description or "No description")
    st.caption(f"{len(quiz.questions)} questions · created {format_compact_time(quiz.created_at)}")

    if session.can_author:
        for number, question in enumerate(quiz.questions, 1):
            st.markdown(f"**{number}. {question.text}** · {question_type_label(question.type)}")
            if question.options:
                st.write(" / ".join(question.options))
            if question.correct_answer:
                st.caption(f"Answer: {question.correct_answer}")
        st.markdown("#### Statistics")
        render_statistics(quiz)

        col_edit, col_delete = st.columns(2)
        if col_edit.button("Edit", key=f"edit_{quiz.id}"):
            start_editing(quiz.id, QuizRequest.from_quiz(quiz))
        if col_delete.button("Delete", key=f"delete_{quiz.id}"):
            deleted = call(quiz_service.delete_quiz, client, quiz.id)
            if isinstance(deleted, Ok):
                flash(f"Quiz deleted: {quiz.title}")
                st.rerun()
            report(deleted)
    elif session.is_student and quiz.active:
        if st.button("Take this quiz", key=f"take_{quiz.id}", type="primary"):
            st.session_state.take_quiz_id = quiz.id
            st.switch_page("pages/7_Take_Quiz.py")


# --- editor ----------------------------------------------------------------

draft = st.session_state.get(EDIT_KEY)
if session.can_author and draft is not None:
    editing_id = st.session_state.get("quiz_draft_id")
    st.markdown("### " + ("Edit quiz" if editing_id else "New quiz"))
    request = render_quiz_editor(draft, EDIT_KEY)
    if request is not None:
        if editing_id:
            saved = call(quiz_service.update_quiz, client, editing_id, request)
        else:
            saved = call(quiz_service.create_quiz, client, request)
        if isinstance(saved, Ok):
            stop_editing()
            flash(f"Quiz saved: {saved.value.title}")
            st.rerun()
        report(saved)
    if st.button("Cancel"):
        stop_editing()
        st.rerun()
    st.stop()

if session.can_author and st.button("New quiz", type="primary"):
    start_editing(None, blank_quiz())

# --- list ------------------------------------------------------------------

col_scope, col_search = st.columns([1, 2])
only_active = col_scope.checkbox("Active only", value=session.is_student, disabled=session.is_student)
query = col_search.text_input("Search", placeholder="Quiz title")

if query.strip():
    result = call(quiz_service.search_quizzes, client, query.strip())
elif only_active:
    result = call(quiz_service.get_active_quizzes, client)
else:
    result = call(quiz_service.list_quizzes, client)

if isinstance(result, Err):
    report(result)
    st.stop()

items = result.value
if session.is_student:
    items = [q for q in items if q.active]
if not items:
    st.info("No quizzes found.")
    st.stop()

st.dataframe(
    [
        {
            "Title": q.title,
            "Questions": q.question_count,
            "Active": "Yes" if q.active else "No",
            "Created": format_compact_time(q.created_at),
        }
        for q in items
    ],
    use_container_width=True,
    hide_index=True,
)

labels = {f"{q.title} (#{q.id})": q.id for q in items}
choice = st.selectbox("Open quiz", list(labels.keys()), index=None, placeholder="Pick a quiz")
if choice is not None:
    with st.container(border=True):
        st.markdown(f"### {choice}")
        render_detail(labels[choice])
