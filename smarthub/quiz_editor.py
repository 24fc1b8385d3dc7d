"""Streamlit form for authoring a quiz, shared by the quiz and AI pages."""

import streamlit as st

from smarthub.formatting import question_type_label
from smarthub.models import QuestionRequest, QuestionType, QuizRequest
from smarthub.validation import ValidationError, validate_quiz

TRUE_FALSE_OPTIONS = ["True", "False"]
REV_KEY = "quiz_editor_rev"


def blank_question() -> QuestionRequest:
    return QuestionRequest(text="", type=QuestionType.SINGLE_CHOICE, options=["", ""], correct_answer="")


def blank_quiz() -> QuizRequest:
    return QuizRequest(title="", description="", active=True, questions=[blank_question()])


def reset_editor():
    """Force fresh widgets the next time a draft is rendered."""
    st.session_state[REV_KEY] = st.session_state.get(REV_KEY, 0) + 1


def _split_lines(raw: str) -> list[str]:
    return [line.strip() for line in raw.splitlines() if line.strip()]


def _question_fields(prefix: str, number: int, question: QuestionRequest) -> QuestionRequest:
    types = list(QuestionType)
    text = st.text_area(f"Question {number}", value=question.text, key=f"{prefix}_text")
    qtype = st.selectbox(
        "Type",
        types,
        index=types.index(question.type),
        key=f"{prefix}_type",
        format_func=question_type_label,
    )

    if qtype == QuestionType.TRUE_FALSE:
        options = list(TRUE_FALSE_OPTIONS)
    elif qtype == QuestionType.OPEN_ENDED:
        options = []
    else:
        raw = st.text_area(
            "Options (one per line)",
            value="\n".join(question.options),
            key=f"{prefix}_options",
        )
        options = _split_lines(raw)

    # options feed the answer widgets, so their keys follow the option list
    answer_key = f"{prefix}_answer_{abs(hash((qtype.value, tuple(options))))}"
    current = question.correct_answer or ""
    if qtype == QuestionType.MULTIPLE_CHOICE:
        wanted = set(current.split(";"))
        chosen = st.multiselect(
            "Correct answers",
            options,
            default=[o for o in options if o in wanted],
            key=answer_key,
        )
        correct = ";".join(o for o in options if o in chosen)
    elif qtype == QuestionType.OPEN_ENDED:
        correct = st.text_input("Reference answer (optional)", value=current, key=answer_key)
    else:
        picked = st.selectbox(
            "Correct answer",
            options,
            index=options.index(current) if current in options else None,
            key=answer_key,
        )
        correct = picked or ""
    return QuestionRequest(text=text.strip(), type=qtype, options=options, correct_answer=correct.strip())


def render_quiz_editor(draft: QuizRequest, state_key: str, submit_label: str = "Save quiz") -> QuizRequest | None:
    """Render ``draft`` as editable widgets.

    The edited draft is written back to ``st.session_state[state_key]`` on
    every structural change. Returns the validated request when the user
    presses ``submit_label``; validation problems are shown inline.
    """
    rev = st.session_state.get(REV_KEY, 0)
    prefix = f"{state_key}_{rev}"

    title = st.text_input("Title", value=draft.title, key=f"{prefix}_title")
    description = st.text_area("Description", value=draft.description, key=f"{prefix}_description")
    active = st.checkbox("Active", value=draft.active is not False, key=f"{prefix}_active")

    questions = []
    removed = None
    for index, question in enumerate(draft.questions):
        with st.container(border=True):
            questions.append(_question_fields(f"{prefix}_q{index}", index + 1, question))
            if st.button("Remove question", key=f"{prefix}_q{index}_remove"):
                removed = index

    current = QuizRequest(title=title.strip(), description=description.strip(), active=active, questions=questions)

    if removed is not None:
        current.questions.pop(removed)
        st.session_state[state_key] = current
        reset_editor()
        st.rerun()

    col_add, col_save = st.columns(2)
    if col_add.button("Add question", key=f"{prefix}_add"):
        current.questions.append(blank_question())
        st.session_state[state_key] = current
        reset_editor()
        st.rerun()

    if not col_save.button(submit_label, type="primary", key=f"{prefix}_save"):
        return None
    st.session_state[state_key] = current
    try:
        validate_quiz(current)
    except ValidationError as exc:
        for problem in exc.problems:
            st.error(problem)
        return None
    return current
