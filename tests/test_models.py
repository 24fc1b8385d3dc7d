from datetime import date

from smarthub.models import (
    AttemptStatus,
    PlatformStats,
    ProjectRequest,
    QuestionType,
    Quiz,
    QuizAttempt,
    QuizGenerationRequest,
    QuizRequest,
    UserBasic,
)


def test_quiz_parses_camel_case(quiz_payload):
    quiz = Quiz.model_validate(quiz_payload)
    assert quiz.questions[0].correct_answer == "B"
    assert quiz.questions[1].type == QuestionType.MULTIPLE_CHOICE
    assert quiz.question(3).text == "Explain"
    assert quiz.question(99) is None


def test_attempt_defaults():
    attempt = QuizAttempt.model_validate({"id": 1, "quizId": 2})
    assert attempt.status == AttemptStatus.IN_PROGRESS
    assert attempt.answers == []
    assert attempt.score is None


def test_wire_uses_aliases_and_drops_none():
    request = ProjectRequest(title="Robot", start_date=date(2024, 1, 1), end_date=date(2024, 6, 1), student_ids=[4])
    assert request.wire() == {
        "title": "Robot",
        "description": "",
        "studentIds": [4],
        "startDate": "2024-01-01",
        "endDate": "2024-06-01",
    }


def test_generation_request_defaults():
    body = QuizGenerationRequest(topic="Graph theory").wire()
    assert body == {
        "topic": "Graph theory",
        "questionCount": 10,
        "difficulty": "MEDIUM",
        "questionTypes": ["SINGLE_CHOICE", "TRUE_FALSE"],
    }


def test_quiz_request_from_quiz(quiz_payload):
    request = QuizRequest.from_quiz(Quiz.model_validate(quiz_payload))
    assert request.title == "Data structures"
    assert [q.correct_answer for q in request.questions] == ["B", "X;Z", ""]
    assert request.wire()["questions"][1]["correctAnswer"] == "X;Z"


def test_display_name_falls_back_to_username():
    assert UserBasic(id=1, username="jdoe").display_name == "jdoe"
    assert UserBasic(id=1, username="jdoe", first_name="Jane", last_name="Doe").display_name == "Jane Doe"


def test_platform_stats_keeps_unknown_counters():
    stats = PlatformStats.model_validate({"users": 12, "quizAttempts": 40, "newThing": 3})
    assert stats.users == 12
    assert stats.quiz_attempts == 40
    assert stats.courses == 0
    assert stats.model_extra["newThing"] == 3
