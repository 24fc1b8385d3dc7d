from datetime import date, datetime

import pytest

from smarthub.models import (
    AnnouncementRequest,
    AnnouncementType,
    CourseRequest,
    InternshipRequest,
    ProjectRequest,
    QuestionRequest,
    QuestionType,
    QuizGenerationRequest,
    QuizRequest,
    ResourceRequest,
    ResourceType,
)
from smarthub.validation import (
    ValidationError,
    validate_announcement,
    validate_course,
    validate_generation,
    validate_internship,
    validate_project,
    validate_quiz,
    validate_resource,
)


def question(**overrides):
    fields = {"text": "Capital of France?", "type": QuestionType.SINGLE_CHOICE, "options": ["Paris", "Rome"], "correct_answer": "Paris"}
    fields.update(overrides)
    return QuestionRequest(**fields)


def problems_of(validator, request):
    with pytest.raises(ValidationError) as info:
        validator(request)
    return info.value.problems


def test_valid_quiz_passes():
    validate_quiz(QuizRequest(title="Geo", questions=[question()]))


def test_quiz_needs_title_and_questions():
    problems = problems_of(validate_quiz, QuizRequest(title=" ", questions=[]))
    assert "Title is required." in problems
    assert "A quiz needs at least one question." in problems


def test_correct_answer_must_be_an_option():
    problems = problems_of(validate_quiz, QuizRequest(title="Geo", questions=[question(correct_answer="Berlin")]))
    assert problems == ["Question 1: the correct answer must be one of the options."]


def test_duplicate_and_missing_options():
    problems = problems_of(
        validate_quiz, QuizRequest(title="Geo", questions=[question(options=["Paris", "Paris"]), question(options=["Paris"])])
    )
    assert "Question 1: options must be unique." in problems
    assert "Question 2: at least two non-empty options are required." in problems


def test_multiple_choice_answers_are_split():
    mc = question(type=QuestionType.MULTIPLE_CHOICE, options=["A", "B", "C"], correct_answer="A;C")
    validate_quiz(QuizRequest(title="Letters", questions=[mc]))
    bad = question(type=QuestionType.MULTIPLE_CHOICE, options=["A", "B", "C"], correct_answer="A;D")
    assert problems_of(validate_quiz, QuizRequest(title="Letters", questions=[bad]))


def test_open_question_needs_only_text():
    validate_quiz(QuizRequest(title="Essay", questions=[question(type=QuestionType.OPEN_ENDED, options=[], correct_answer="")]))


def test_project_end_must_follow_start():
    request = ProjectRequest(title="P", description="D", start_date=date(2024, 5, 1), end_date=date(2024, 5, 1))
    assert problems_of(validate_project, request) == ["End date must be after start date."]


def test_internship_requires_company():
    request = InternshipRequest(
        title="Backend intern", company=" ", student_id=3, start_date=date(2024, 1, 1), end_date=date(2024, 3, 1)
    )
    assert problems_of(validate_internship, request) == ["Company is required."]


def test_simple_required_fields():
    assert problems_of(validate_course, CourseRequest(title=""))
    assert problems_of(
        validate_announcement,
        AnnouncementRequest(title="Hi", content="", type=AnnouncementType.SEMINAR, date=datetime(2024, 1, 1)),
    ) == ["Content is required."]
    validate_resource(ResourceRequest(title="Paper", publication_date=date(2023, 1, 1), type=ResourceType.ARTICLE))


@pytest.mark.parametrize(
    "request_kwargs,expected",
    [
        ({"topic": "Tree"}, "Topic must be at least 5 characters long."),
        ({"topic": "Trees and graphs", "question_count": 0}, "Question count must be between 1 and 50."),
        ({"topic": "Trees and graphs", "question_count": 51}, "Question count must be between 1 and 50."),
        ({"topic": "Trees and graphs", "question_types": []}, "Select at least one question type."),
    ],
)
def test_generation_limits(request_kwargs, expected):
    assert problems_of(validate_generation, QuizGenerationRequest(**request_kwargs)) == [expected]


def test_generation_accepts_boundaries():
    validate_generation(QuizGenerationRequest(topic="Trees", question_count=50))
    validate_generation(QuizGenerationRequest(topic="Trees", question_count=1))


def test_course_needs_a_teacher():
    assert problems_of(validate_course, CourseRequest(title="Algorithms")) == ["A teacher is required."]
    validate_course(CourseRequest(title="Algorithms", teacher_id=3))
