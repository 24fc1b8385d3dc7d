"""Client for the backend's RAG / agent endpoints plus the small helpers the
pages use to present their answers. All generation happens server-side."""

import logging
from dataclasses import dataclass

from smarthub.api_client import ApiClient, ApiError, parse
from smarthub.models import (
    AdaptiveQuizResult,
    AgentParameters,
    AgentStrategy,
    CourseQuizInitiation,
    CourseQuizResult,
    CourseQuizStats,
    NextQuizRecommendation,
    ProgressAnalysis,
    Quiz,
    QuizEligibility,
    QuizRecommendation,
    RagStatus,
)

logger = logging.getLogger(__name__)


def generate_personalized_quiz(client: ApiClient, user_id: int, topic: str) -> Quiz:
    body = client.post("/api/rag/generate-personalized", params={"userId": user_id, "topic": topic})
    return parse(Quiz, body)


def generate_with_agent(client: ApiClient, user_id: int, topic: str, parameters: AgentParameters | None = None) -> Quiz:
    parameters = parameters or AgentParameters()
    body = client.post(
        "/api/rag/generate-with-agent",
        json=parameters.wire(),
        params={"userId": user_id, "topic": topic},
    )
    return parse(Quiz, body)


def get_recommendations(client: ApiClient, user_id: int) -> list[QuizRecommendation]:
    return client.get_list(f"/api/rag/recommendations/{user_id}", QuizRecommendation)


def get_progress_analysis(client: ApiClient, user_id: int) -> ProgressAnalysis:
    return client.get_model(f"/api/agent/analysis/{user_id}", ProgressAnalysis)


def recommend_next_quiz(client: ApiClient, user_id: int) -> NextQuizRecommendation:
    return client.get_model("/api/agent/recommend/next", NextQuizRecommendation, params={"userId": user_id})


def update_learning_profile(client: ApiClient, user_id: int, quiz_id: int, score: float, topic: str):
    client.post(
        "/api/rag/update-profile",
        params={"userId": user_id, "quizId": quiz_id, "score": score, "topic": topic},
    )


def get_rag_status(client: ApiClient) -> RagStatus:
    return client.get_model("/api/rag/status", RagStatus)


def is_rag_ready(client: ApiClient) -> bool:
    try:
        status = get_rag_status(client)
    except ApiError as exc:
        logger.warning("RAG status unavailable: %s", exc.message)
        return False
    return status.system_ready or (status.ollama_connected and status.vectorization_active)


# --- course quiz supervisor ------------------------------------------------

COURSE_QUIZ = "/api/agent/course-quiz"


def check_course_quiz_eligibility(client: ApiClient, user_id: int, course_id: int) -> QuizEligibility:
    return client.get_model(f"{COURSE_QUIZ}/eligibility", QuizEligibility, params={"userId": user_id, "courseId": course_id})


def initiate_course_quiz(client: ApiClient, user_id: int, course_id: int) -> CourseQuizInitiation:
    """Start a supervised course quiz.

    The backend answers 200 with no attempt when the student is not
    eligible; that is reported as an ``ApiError`` carrying its warning.
    """
    body = client.post(f"{COURSE_QUIZ}/initiate", params={"userId": user_id, "courseId": course_id})
    initiation = parse(CourseQuizInitiation, body)
    if not initiation.started:
        reason = next(iter(initiation.warnings or []), None)
        raise ApiError(reason or "The course quiz could not be started.")
    logger.info("Course quiz attempt %s started for course %s", initiation.attempt_id, course_id)
    return initiation


def submit_course_quiz(client: ApiClient, attempt_id: int, answers: dict) -> CourseQuizResult:
    return parse(CourseQuizResult, client.post(f"{COURSE_QUIZ}/submit/{attempt_id}", json=answers))


def get_course_quiz_stats(client: ApiClient, user_id: int, course_id: int) -> CourseQuizStats:
    return client.get_model(f"{COURSE_QUIZ}/stats", CourseQuizStats, params={"userId": user_id, "courseId": course_id})


def initiate_adaptive_quiz(
    client: ApiClient, user_id: int, course_id: int, strategy: AgentStrategy | None = None
) -> AdaptiveQuizResult:
    """``strategy=None`` lets the backend pick one from the student's progress."""
    body = client.post(
        "/api/agent/adaptive-quiz/initiate",
        params={"userId": user_id, "courseId": course_id, "strategy": strategy.value if strategy else None},
    )
    result = parse(AdaptiveQuizResult, body)
    if result.status == "ERROR":
        raise ApiError(result.message)
    return result


def course_quiz_answers(quiz: Quiz, picked: dict) -> dict:
    """Key answers by question position (``q0``, ``q1`` ...) for the supervisor.

    ``picked`` maps a question index to a string or a list of options;
    blank answers are left out and selections follow option order.
    """
    answers = {}
    for index, question in enumerate(quiz.questions):
        value = picked.get(index)
        if isinstance(value, (list, tuple, set, frozenset)):
            chosen = [o for o in question.options if o in value]
            if chosen:
                answers[f"q{index}"] = chosen
        elif value is not None and str(value).strip():
            answers[f"q{index}"] = str(value).strip()
    return answers


# --- presentation helpers --------------------------------------------------


def recommended_strategy(progress: ProgressAnalysis) -> AgentStrategy:
    if progress.success_rate < 50:
        return AgentStrategy.REMEDIATION
    if progress.success_rate >= 80 and not progress.weak_topics:
        return AgentStrategy.CHALLENGE
    if progress.weak_topics:
        return AgentStrategy.DIAGNOSTIC
    return AgentStrategy.REINFORCEMENT


@dataclass(frozen=True)
class RecommendationView:
    topic: str
    reason: str
    confidence: float
    level: str
    icon: str


def describe_recommendation(recommendation: QuizRecommendation) -> RecommendationView:
    score = recommendation.confidence_score
    if score >= 0.8:
        level, icon = "high", "🎯"
    elif score >= 0.6:
        level, icon = "medium", "📊"
    elif score >= 0.4:
        level, icon = "low", "💡"
    else:
        level, icon = "minimal", "📚"
    return RecommendationView(
        topic=recommendation.recommended_topic,
        reason=recommendation.reason or "",
        confidence=score * 100,
        level=level,
        icon=icon,
    )


@dataclass(frozen=True)
class ProgressReport:
    summary: str
    strengths: list
    improvements: list
    recommendations: list


def _topic_score(progress: ProgressAnalysis, topic: str) -> str:
    value = progress.topic_performance.get(topic)
    return f"{value:.1f}%" if value is not None else "N/A"


def progress_report(progress: ProgressAnalysis) -> ProgressReport:
    summary = (
        f"Overall success rate: {progress.success_rate:.1f}%. "
        f"Average score: {progress.average_score:.1f}%. "
        f"{progress.completed_count} quizzes completed."
    )
    strengths = [f"{topic}: {_topic_score(progress, topic)}" for topic in progress.strong_topics]
    improvements = [f"{topic}: {_topic_score(progress, topic)} (needs work)" for topic in progress.weak_topics]

    recommendations = []
    if progress.success_rate < 60:
        recommendations.append("Use the REMEDIATION strategy to consolidate the basics.")
    if progress.weak_topics:
        recommendations.append("Focus on your weak topics.")
    if progress.strong_topics:
        recommendations.append("Try the CHALLENGE strategy to keep progressing.")
    else:
        recommendations.append("Keep going at your current pace.")
    return ProgressReport(summary, strengths, improvements, recommendations)
