import logging

import altair as alt
import pandas as pd
import streamlit as st

from smarthub import agent
from smarthub import quiz as quiz_service
from smarthub.api_client import Err, Ok, call
from smarthub.app_state import flash, get_client
from smarthub.formatting import question_type_label
from smarthub.models import AgentParameters, AgentStrategy, Difficulty, QuestionType, QuizGenerationRequest, QuizRequest
from smarthub.quiz_editor import render_quiz_editor, reset_editor
from smarthub.ui import render_hero, report, require_session, setup_page
from smarthub.validation import MAX_GENERATED_QUESTIONS, MIN_TOPIC_LENGTH, ValidationError, validate_generation

logger = logging.getLogger(__name__)

DRAFT_KEY = "generated_draft"

setup_page("AI quizzes", "🤖")
session = require_session()
client = get_client()

render_hero("AI quizzes", "Generate quizzes from course material and follow your learning progress.")

rag_ready = agent.is_rag_ready(client)
if rag_ready:
    st.success("Course material is indexed and the generator is ready.")
else:
    st.warning("The generator is not ready yet. Generation requests may fail or be slow.")


def remember(quiz):
    st.session_state.generated_quiz = quiz
    st.session_state[DRAFT_KEY] = QuizRequest.from_quiz(quiz)
    reset_editor()


def show_generated(editable: bool):
    quiz = st.session_state.get("generated_quiz")
    if quiz is None:
        return
    st.markdown("---")
    st.subheader(f"Generated: {quiz.title}")
    st.caption(f"{len(quiz.questions)} questions · saved as quiz #{quiz.id}")

    if not editable:
        for number, question in enumerate(quiz.questions, 1):
            with st.expander(f"Question {number}: {question.text}"):
                st.caption(question_type_label(question.type))
                for option in question.options:
                    st.write(f"- {option}")
        col_take, col_clear = st.columns(2)
        if col_take.button("Take this quiz", type="primary"):
            st.session_state.take_quiz_id = quiz.id
            st.switch_page("pages/7_Take_Quiz.py")
        if col_clear.button("Discard"):
            st.session_state.generated_quiz = None
            st.rerun()
        return

    draft = st.session_state.get(DRAFT_KEY) or QuizRequest.from_quiz(quiz)
    request = render_quiz_editor(draft, DRAFT_KEY, submit_label="Save changes")
    if request is not None:
        saved = call(quiz_service.update_quiz, client, quiz.id, request)
        if isinstance(saved, Ok):
            st.session_state.generated_quiz = None
            st.session_state[DRAFT_KEY] = None
            flash(f"Quiz saved: {saved.value.title}")
            st.rerun()
        report(saved)
    if st.button("Done, keep as generated"):
        st.session_state.generated_quiz = None
        st.session_state[DRAFT_KEY] = None
        st.rerun()


def render_teacher_tools():
    st.markdown("### Generate from a topic")
    with st.form("generate_quiz"):
        topic = st.text_input("Topic", placeholder="e.g. Binary search trees", help=f"At least {MIN_TOPIC_LENGTH} characters")
        col1, col2 = st.columns(2)
        count = col1.number_input("Questions", min_value=1, max_value=MAX_GENERATED_QUESTIONS, value=10)
        difficulty = col2.selectbox("Difficulty", list(Difficulty), index=1, format_func=lambda d: d.value.title())
        types = st.multiselect(
            "Question types",
            list(QuestionType),
            default=[QuestionType.SINGLE_CHOICE, QuestionType.TRUE_FALSE],
            format_func=question_type_label,
        )
        submitted = st.form_submit_button("Generate", type="primary")
    if submitted:
        request = QuizGenerationRequest(
            topic=topic.strip(),
            question_count=int(count),
            difficulty=difficulty,
            question_types=types,
        )
        try:
            validate_generation(request)
        except ValidationError as exc:
            for problem in exc.problems:
                st.error(problem)
        else:
            with st.spinner("Generating quiz..."):
                result = call(quiz_service.generate_quiz, client, request)
            if isinstance(result, Ok):
                remember(result.value)
                st.rerun()
            report(result)

    with st.expander("Generate from a web page"):
        with st.form("generate_from_url"):
            url = st.text_input("URL", placeholder="https://...")
            url_count = st.number_input("Questions", min_value=1, max_value=MAX_GENERATED_QUESTIONS, value=5)
            url_submitted = st.form_submit_button("Generate")
        if url_submitted:
            if not url.strip().startswith(("http://", "https://")):
                st.error("Enter a valid http(s) URL.")
            else:
                with st.spinner("Reading the page and generating..."):
                    result = call(quiz_service.generate_quiz_from_url, client, url.strip(), int(url_count))
                if isinstance(result, Ok):
                    remember(result.value)
                    st.rerun()
                report(result)

    show_generated(editable=True)


def render_progress(progress):
    report_view = agent.progress_report(progress)
    st.write(report_view.summary)
    cols = st.columns(3)
    cols[0].metric("Quizzes", progress.quiz_count)
    cols[1].metric("Success rate", f"{progress.success_rate:.1f}%")
    cols[2].metric("Average score", f"{progress.average_score:.1f}%")

    if progress.topic_performance:
        topic_df = pd.DataFrame(
            [{"Topic": topic, "Score (%)": score} for topic, score in progress.topic_performance.items()]
        ).sort_values("Score (%)", ascending=False)
        chart = (
            alt.Chart(topic_df)
            .mark_bar()
            .encode(
                x=alt.X("Score (%):Q", scale=alt.Scale(domain=[0, 100])),
                y=alt.Y("Topic:N", sort="-x"),
                color=alt.condition(alt.datum["Score (%)"] >= 60, alt.value("#4cc9f0"), alt.value("#f2a365")),
                tooltip=["Topic:N", alt.Tooltip("Score (%):Q", format=".1f")],
            )
            .properties(height=max(120, 28 * len(topic_df)))
        )
        st.altair_chart(chart, use_container_width=True)

    left, right = st.columns(2)
    with left:
        st.markdown("**Strengths**")
        for line in report_view.strengths or ["None yet"]:
            st.write(f"- {line}")
    with right:
        st.markdown("**To improve**")
        for line in report_view.improvements or ["None"]:
            st.write(f"- {line}")
    for line in report_view.recommendations:
        st.info(line)


def render_student_tools():
    progress_result = call(agent.get_progress_analysis, client, session.user_id)
    progress = progress_result.value if isinstance(progress_result, Ok) else None

    st.markdown("### My progress")
    if progress is None:
        st.caption("No progress analysis available yet.")
    else:
        render_progress(progress)

    st.markdown("### Recommended topics")
    recs = call(agent.get_recommendations, client, session.user_id)
    if isinstance(recs, Err):
        report(recs)
    elif not recs.value:
        st.caption("Complete a few quizzes to get recommendations.")
    else:
        for rec in recs.value:
            view = agent.describe_recommendation(rec)
            with st.container(border=True):
                st.markdown(f"{view.icon} **{view.topic}** · {view.confidence:.0f}% confidence ({view.level})")
                if view.reason:
                    st.caption(view.reason)
                if st.button("Generate a quiz on this topic", key=f"rec_{rec.id or view.topic}"):
                    with st.spinner("Generating a personalized quiz..."):
                        result = call(agent.generate_personalized_quiz, client, session.user_id, view.topic)
                    if isinstance(result, Ok):
                        remember(result.value)
                        st.rerun()
                    report(result)

    st.markdown("### Adaptive quiz")
    strategies = list(AgentStrategy)
    suggested = agent.recommended_strategy(progress) if progress is not None else AgentStrategy.STANDARD
    with st.form("agent_quiz"):
        topic = st.text_input("Topic")
        col1, col2, col3 = st.columns(3)
        strategy = col1.selectbox("Strategy", strategies, index=strategies.index(suggested), format_func=lambda s: s.value.title())
        difficulty = col2.selectbox("Difficulty", list(Difficulty), index=1, format_func=lambda d: d.value.title())
        count = col3.number_input("Questions", min_value=1, max_value=MAX_GENERATED_QUESTIONS, value=10)
        submitted = st.form_submit_button("Generate", type="primary")
    st.caption(f"Suggested strategy from your progress: {suggested.value.title()}")
    if submitted:
        if len(topic.strip()) < MIN_TOPIC_LENGTH:
            st.error(f"Topic must be at least {MIN_TOPIC_LENGTH} characters long.")
        else:
            parameters = AgentParameters(strategy=strategy, difficulty=difficulty, question_count=int(count))
            with st.spinner("The agent is preparing your quiz..."):
                result = call(agent.generate_with_agent, client, session.user_id, topic.strip(), parameters)
            if isinstance(result, Ok):
                logger.info("Agent quiz %s generated with %s", result.value.id, strategy.value)
                remember(result.value)
                st.rerun()
            report(result)

    show_generated(editable=False)


if session.can_author:
    render_teacher_tools()
else:
    render_student_tools()
