import pytest
import requests

from smarthub import agent
from smarthub.api_client import ApiError
from smarthub.models import AgentParameters, AgentStrategy, Difficulty, ProgressAnalysis, Quiz, QuizRecommendation

from conftest import FakeResponse


def progress(**fields):
    return ProgressAnalysis(user_id=42, **fields)


def test_recommended_strategy():
    assert agent.recommended_strategy(progress(success_rate=30)) == AgentStrategy.REMEDIATION
    assert agent.recommended_strategy(progress(success_rate=85)) == AgentStrategy.CHALLENGE
    assert agent.recommended_strategy(progress(success_rate=85, weak_topics=["SQL"])) == AgentStrategy.DIAGNOSTIC
    assert agent.recommended_strategy(progress(success_rate=65, weak_topics=["SQL"])) == AgentStrategy.DIAGNOSTIC
    assert agent.recommended_strategy(progress(success_rate=65)) == AgentStrategy.REINFORCEMENT


def test_describe_recommendation_bands():
    def view(score):
        return agent.describe_recommendation(QuizRecommendation(recommended_topic="Graphs", confidence_score=score))

    assert (view(0.9).level, view(0.9).icon) == ("high", "🎯")
    assert view(0.8).level == "high"
    assert view(0.6).level == "medium"
    assert view(0.45).level == "low"
    assert view(0.1).level == "minimal"
    assert round(view(0.75).confidence) == 75


def test_progress_report():
    report = agent.progress_report(
        progress(
            success_rate=55,
            average_score=61.2,
            completed_count=4,
            topic_performance={"SQL": 40.0, "Graphs": 90.0},
            strong_topics=["Graphs"],
            weak_topics=["SQL", "Heaps"],
        )
    )
    assert "55.0%" in report.summary
    assert "4 quizzes completed" in report.summary
    assert report.strengths == ["Graphs: 90.0%"]
    assert report.improvements == ["SQL: 40.0% (needs work)", "Heaps: N/A (needs work)"]
    assert len(report.recommendations) == 3


def test_generate_with_agent_sends_parameters(client, http, quiz_payload):
    http.add("POST", "/api/rag/generate-with-agent", FakeResponse(200, quiz_payload))
    params = AgentParameters(strategy=AgentStrategy.CHALLENGE, difficulty=Difficulty.HARD, question_count=5)
    quiz = agent.generate_with_agent(client, 42, "Graph theory", params)

    _, _, kwargs = http.last
    assert quiz.id == 7
    assert kwargs["params"] == {"userId": 42, "topic": "Graph theory"}
    assert kwargs["json"]["strategy"] == "CHALLENGE"
    assert kwargs["json"]["questionCount"] == 5


def test_rag_ready_from_status(client, http):
    http.add("GET", "/api/rag/status", FakeResponse(200, {"ollamaConnected": True, "vectorizationActive": True}))
    assert agent.is_rag_ready(client)
    http.add("GET", "/api/rag/status", FakeResponse(200, {"ollamaConnected": True}))
    assert not agent.is_rag_ready(client)
    http.add("GET", "/api/rag/status", FakeResponse(200, {"systemReady": True}))
    assert agent.is_rag_ready(client)


def test_rag_not_ready_when_unreachable(client, http):
    http.add("GET", "/api/rag/status", requests.Timeout("slow"))
    assert agent.is_rag_ready(client) is False


def test_update_learning_profile_params(client, http):
    agent.update_learning_profile(client, 42, 7, 80.0, "Data structures")
    method, path, kwargs = http.last
    assert (method, path) == ("POST", "/api/rag/update-profile")
    assert kwargs["params"] == {"userId": 42, "quizId": 7, "score": 80.0, "topic": "Data structures"}


def test_course_quiz_eligibility_reads_either_flag(client, http):
    path = "/api/agent/course-quiz/eligibility"
    http.add("GET", path, FakeResponse(200, {"eligible": True, "remainingAttemptsToday": 2, "maxAttemptsPerDay": 3}))
    status = agent.check_course_quiz_eligibility(client, 42, 3)
    assert status.eligible and status.remaining_attempts_today == 2
    assert http.last[2]["params"] == {"userId": 42, "courseId": 3}

    http.add("GET", path, FakeResponse(200, {"isEligible": False, "reason": "Daily limit reached"}))
    status = agent.check_course_quiz_eligibility(client, 42, 3)
    assert not status.eligible
    assert status.reason == "Daily limit reached"


def test_initiate_course_quiz(client, http, quiz_payload):
    http.add(
        "POST",
        "/api/agent/course-quiz/initiate",
        FakeResponse(200, {"attemptId": 55, "quizId": 7, "quizResponse": quiz_payload, "timeLimitMinutes": 30}),
    )
    initiation = agent.initiate_course_quiz(client, 42, 3)
    assert initiation.attempt_id == 55
    assert initiation.quiz.title == "Data structures"
    assert initiation.time_limit_minutes == 30
    assert http.last[2]["params"] == {"userId": 42, "courseId": 3}


def test_initiate_course_quiz_not_eligible_raises(client, http):
    http.add(
        "POST",
        "/api/agent/course-quiz/initiate",
        FakeResponse(200, {"attemptId": None, "warnings": ["Come back tomorrow"], "supervisorEnabled": False}),
    )
    with pytest.raises(ApiError) as info:
        agent.initiate_course_quiz(client, 42, 3)
    assert info.value.message == "Come back tomorrow"


def test_submit_course_quiz_and_stats(client, http):
    http.add(
        "POST",
        "/api/agent/course-quiz/submit/55",
        FakeResponse(200, {"attemptId": 55, "score": 82.5, "passed": True, "feedback": {"grade": "B", "strengths": ["Trees"]}}),
    )
    result = agent.submit_course_quiz(client, 55, {"q0": "B"})
    assert result.passed and result.feedback.grade == "B"
    assert http.last[2]["json"] == {"q0": "B"}

    http.add("GET", "/api/agent/course-quiz/stats", FakeResponse(200, {"totalAttempts": 4, "bestScore": 90.0}))
    stats = agent.get_course_quiz_stats(client, 42, 3)
    assert (stats.total_attempts, stats.best_score, stats.average_score) == (4, 90.0, 0.0)


def test_adaptive_quiz_strategy_param(client, http, quiz_payload):
    path = "/api/agent/adaptive-quiz/initiate"
    http.add("POST", path, FakeResponse(200, {"status": "SUCCESS", "strategy": "CHALLENGE", "quiz": quiz_payload}))
    result = agent.initiate_adaptive_quiz(client, 42, 3, AgentStrategy.CHALLENGE)
    assert result.quiz.id == 7
    assert http.last[2]["params"] == {"userId": 42, "courseId": 3, "strategy": "CHALLENGE"}

    agent.initiate_adaptive_quiz(client, 42, 3)
    assert http.last[2]["params"] == {"userId": 42, "courseId": 3}


def test_adaptive_quiz_not_eligible_and_error(client, http):
    path = "/api/agent/adaptive-quiz/initiate"
    http.add("POST", path, FakeResponse(200, {"status": "NOT_ELIGIBLE", "message": "Wait", "eligibility": {"eligible": False}}))
    result = agent.initiate_adaptive_quiz(client, 42, 3)
    assert result.quiz is None and result.message == "Wait"

    http.add("POST", path, FakeResponse(200, {"status": "ERROR", "message": "LLM offline"}))
    with pytest.raises(ApiError) as info:
        agent.initiate_adaptive_quiz(client, 42, 3)
    assert info.value.message == "LLM offline"


def test_course_quiz_answers_by_position(quiz_payload):
    quiz = Quiz.model_validate(quiz_payload)
    answers = agent.course_quiz_answers(quiz, {0: "B", 1: ["Z", "X"], 2: "  "})
    assert answers == {"q0": "B", "q1": ["X", "Z"]}
    assert agent.course_quiz_answers(quiz, {0: None, 1: []}) == {}
