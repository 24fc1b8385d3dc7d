import logging

import streamlit as st

from smarthub.api_client import ApiClient
from smarthub.logging_config import setup_logging
from smarthub.session import Session

logger = logging.getLogger(__name__)

SESSION_KEY = "session"


def init_app():
    setup_logging()

    if SESSION_KEY not in st.session_state:
        st.session_state[SESSION_KEY] = None

    # quiz id -> QuizAttemptOrchestrator
    if "attempts" not in st.session_state:
        st.session_state.attempts = {}

    # course id -> CourseQuizInitiation / CourseQuizResult
    if "course_quizzes" not in st.session_state:
        st.session_state.course_quizzes = {}
    if "course_quiz_results" not in st.session_state:
        st.session_state.course_quiz_results = {}

    if "generated_quiz" not in st.session_state:
        st.session_state.generated_quiz = None

    if "quiz_draft" not in st.session_state:
        st.session_state.quiz_draft = None

    if "flash" not in st.session_state:
        st.session_state.flash = None


def get_session() -> Session | None:
    return st.session_state.get(SESSION_KEY)


def start_session(session: Session):
    st.session_state[SESSION_KEY] = session
    st.session_state.attempts = {}
    st.session_state.course_quizzes = {}
    st.session_state.course_quiz_results = {}


def end_session():
    session = get_session()
    for orchestrator in st.session_state.get("attempts", {}).values():
        orchestrator.close()
    st.session_state[SESSION_KEY] = None
    st.session_state.attempts = {}
    st.session_state.generated_quiz = None
    st.session_state.course_quizzes = {}
    st.session_state.course_quiz_results = {}
    st.session_state.quiz_draft = None
    if session is not None:
        logger.info("User %s logged out", session.user.username)


def get_client() -> ApiClient:
    session = get_session()
    if session is None:
        return ApiClient()
    return session.client()


def flash(message: str):
    """Show ``message`` as a success box after the next rerun."""
    st.session_state.flash = message
