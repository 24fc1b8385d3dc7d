import logging

import streamlit as st

from smarthub import agent
from smarthub import quiz as quiz_service
from smarthub.api_client import Err, call
from smarthub.app_state import get_client
from smarthub.formatting import format_countdown, question_type_label
from smarthub.models import QuestionType, Role
from smarthub.quiz_attempt import Phase, QuizAttemptOrchestrator
from smarthub.ui import render_hero, report, require_session, setup_page

logger = logging.getLogger(__name__)

LOW_TIME_SECONDS = 300
TRUE_FALSE_OPTIONS = ["True", "False"]

setup_page("Take a quiz", "⏱️")
session = require_session(Role.STUDENT)
client = get_client()

render_hero("Take a quiz", "Answer every question before the timer runs out. Answers are sent when you submit.")


def pick_quiz_id():
    raw = st.query_params.get("quiz_id") or st.session_state.get("take_quiz_id")
    if raw:
        try:
            return int(raw)
        except (TypeError, ValueError):
            st.warning("Invalid quiz id in the address bar.")
    result = call(quiz_service.get_active_quizzes, client)
    if isinstance(result, Err):
        report(result)
        st.stop()
    quizzes = result.value
    if not quizzes:
        st.info("No active quiz is available right now.")
        st.stop()
    labels = {f"{q.title} ({q.question_count} questions)": q.id for q in quizzes}
    choice = st.selectbox("Quiz", list(labels.keys()))
    if st.button("Start", type="primary"):
        st.session_state.take_quiz_id = labels[choice]
        st.rerun()
    st.stop()


quiz_id = pick_quiz_id()
attempts = st.session_state.attempts

orchestrator = attempts.get(quiz_id)
if orchestrator is None or orchestrator.closed:
    orchestrator = QuizAttemptOrchestrator(client)
    with st.spinner("Preparing the quiz..."):
        result = call(orchestrator.begin, quiz_id, session.user_id)
    if isinstance(result, Err):
        report(result)
        if st.button("Back to quiz list"):
            st.session_state.pop("take_quiz_id", None)
            st.query_params.clear()
            st.rerun()
        st.stop()
    attempts[quiz_id] = orchestrator


def finish(orch: QuizAttemptOrchestrator):
    state = orch.state
    if state.result is not None and state.result.score is not None:
        feedback = call(agent.update_learning_profile, client, session.user_id, state.quiz.id, state.result.score, state.quiz.title)
        if isinstance(feedback, Err):
            logger.warning("Learning profile not updated for attempt %s", state.attempt_id)
    orch.close()
    attempts.pop(quiz_id, None)
    st.session_state.pop("take_quiz_id", None)
    st.session_state.results_attempt_id = state.attempt_id
    st.switch_page("pages/8_Quiz_Results.py")


if orchestrator.state.phase == Phase.COMPLETED:
    finish(orchestrator)

state = orchestrator.state
quiz = state.quiz

header_left, header_right = st.columns([3, 1])
with header_left:
    st.markdown(f"## {quiz.title}")
    st.write(quiz.description or "No description")


@st.fragment(run_every=1)
def countdown():
    before = orchestrator.state
    current = orchestrator.sync_clock()
    css = "countdown low" if current.remaining < LOW_TIME_SECONDS else "countdown"
    st.markdown(f'<div class="{css}">⏱️ {format_countdown(current.remaining)}</div>', unsafe_allow_html=True)
    # an automatic submission changes the whole page
    if (current.phase, current.timed_out, current.error) != (before.phase, before.timed_out, before.error):
        st.rerun()


with header_right:
    if state.phase in (Phase.IN_PROGRESS, Phase.SUBMITTING):
        countdown()

if state.timed_out and state.phase == Phase.IN_PROGRESS:
    st.warning("Time is up. The automatic submission failed; submit again to record your answers.")

if state.error:
    err_col, btn_col = st.columns([5, 1])
    err_col.error(state.error)
    if btn_col.button("Dismiss"):
        orchestrator.dismiss_error()
        st.rerun()

st.caption(f"{state.answered_count} of {len(quiz.questions)} questions answered")

locked = not state.can_submit
answers = state.answers


def on_single(question_id: int, question_type: QuestionType, key: str):
    value = st.session_state.get(key)
    if value is not None:
        orchestrator.record_answer(question_id, value, question_type)


def on_toggle(question_id: int, option: str):
    orchestrator.record_answer(question_id, option, QuestionType.MULTIPLE_CHOICE)


for number, question in enumerate(quiz.questions, 1):
    with st.container(border=True):
        st.markdown(f"**Question {number}** · {question_type_label(question.type)}")
        st.write(question.text)
        key = f"answer_{state.attempt_id}_{question.id}"
        current = answers.get(question.id)

        if question.type in (QuestionType.SINGLE_CHOICE, QuestionType.TRUE_FALSE):
            options = question.options or (TRUE_FALSE_OPTIONS if question.type == QuestionType.TRUE_FALSE else [])
            index = options.index(current) if isinstance(current, str) and current in options else None
            st.radio(
                "Answer",
                options,
                index=index,
                key=key,
                label_visibility="collapsed",
                disabled=locked,
                on_change=on_single,
                args=(question.id, question.type, key),
            )
        elif question.type == QuestionType.MULTIPLE_CHOICE:
            selected = current if isinstance(current, frozenset) else frozenset()
            for opt_index, option in enumerate(question.options):
                st.checkbox(
                    option,
                    value=option in selected,
                    key=f"{key}_{opt_index}",
                    disabled=locked,
                    on_change=on_toggle,
                    args=(question.id, option),
                )
        else:
            st.text_area(
                "Your answer",
                value=current if isinstance(current, str) else "",
                key=key,
                disabled=locked,
                on_change=on_single,
                args=(question.id, question.type, key),
            )

submit_label = "Submitting..." if state.phase == Phase.SUBMITTING else "Submit answers"
if st.button(submit_label, type="primary", disabled=locked):
    with st.spinner("Submitting..."):
        orchestrator.submit()
    if orchestrator.state.phase == Phase.COMPLETED:
        finish(orchestrator)
    st.rerun()
