from typing import Iterable

from smarthub.api_client import ApiClient, parse
from smarthub.models import (
    AnswerStatistics,
    AnswerSubmission,
    AttemptSubmission,
    Quiz,
    QuizAttempt,
    QuizGenerationRequest,
    QuizRequest,
    QuizStatistics,
    QuizSummary,
)

BASE = "/api/v1/quizzes"


def list_quizzes(client: ApiClient, active: bool | None = None, search: str | None = None, course_id: int | None = None):
    params = {
        "active": str(active).lower() if active is not None else None,
        "search": search,
        "courseId": course_id,
    }
    return client.get_list(BASE, QuizSummary, params=params)


def get_active_quizzes(client: ApiClient):
    return client.get_list(f"{BASE}/active", QuizSummary)


def search_quizzes(client: ApiClient, title: str):
    return client.get_list(f"{BASE}/search", QuizSummary, params={"title": title})


def get_quiz(client: ApiClient, quiz_id: int) -> Quiz:
    return client.get_model(f"{BASE}/{quiz_id}", Quiz)


def create_quiz(client: ApiClient, request: QuizRequest) -> Quiz:
    return parse(Quiz, client.post(BASE, json=request.wire()))


def update_quiz(client: ApiClient, quiz_id: int, request: QuizRequest) -> Quiz:
    return parse(Quiz, client.put(f"{BASE}/{quiz_id}", json=request.wire()))


def delete_quiz(client: ApiClient, quiz_id: int):
    client.delete(f"{BASE}/{quiz_id}")


def generate_quiz(client: ApiClient, request: QuizGenerationRequest) -> Quiz:
    """Ask the backend to draft a quiz; the returned quiz is already persisted."""
    return parse(Quiz, client.post(f"{BASE}/generate", json=request.wire()))


def generate_quiz_from_url(client: ApiClient, url: str, question_count: int = 5) -> Quiz:
    return parse(Quiz, client.post(f"{BASE}/generate-from-url", params={"url": url, "questionCount": question_count}))


# --- attempts --------------------------------------------------------------


def start_attempt(client: ApiClient, quiz_id: int, user_id: int) -> QuizAttempt:
    return parse(QuizAttempt, client.post(f"{BASE}/{quiz_id}/attempts/start", params={"userId": user_id}))


def resume_or_start_attempt(client: ApiClient, user_id: int, quiz_id: int) -> QuizAttempt:
    """Return the in-progress attempt for (user, quiz), creating one if needed."""
    return client.get_model(f"{BASE}/{quiz_id}/users/{user_id}/resume", QuizAttempt)


def submit_attempt(client: ApiClient, quiz_id: int, attempt_id: int, answers: Iterable[AnswerSubmission]) -> QuizAttempt:
    body = AttemptSubmission(quiz_id=quiz_id, answers=list(answers))
    return parse(QuizAttempt, client.post(f"{BASE}/{quiz_id}/attempts/{attempt_id}/submit", json=body.wire()))


def get_attempt(client: ApiClient, attempt_id: int) -> QuizAttempt:
    return client.get_model(f"{BASE}/attempts/{attempt_id}", QuizAttempt)


def get_user_attempts(client: ApiClient, user_id: int) -> list[QuizAttempt]:
    return client.get_list(f"{BASE}/users/{user_id}/attempts", QuizAttempt)


def get_user_attempts_for_quiz(client: ApiClient, user_id: int, quiz_id: int) -> list[QuizAttempt]:
    return client.get_list(f"{BASE}/{quiz_id}/users/{user_id}/attempts", QuizAttempt)


def get_recent_attempts(client: ApiClient, user_id: int, limit: int = 5) -> list[QuizAttempt]:
    return client.get_list(f"{BASE}/users/{user_id}/recent-attempts", QuizAttempt, params={"limit": limit})


# --- statistics ------------------------------------------------------------


def get_quiz_statistics(client: ApiClient, quiz_id: int) -> QuizStatistics:
    return client.get_model(f"{BASE}/{quiz_id}/statistics", QuizStatistics)


def get_question_statistics(client: ApiClient, question_id: int) -> AnswerStatistics:
    return client.get_model(f"{BASE}/questions/{question_id}/statistics", AnswerStatistics)
