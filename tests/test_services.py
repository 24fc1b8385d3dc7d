from datetime import date

from smarthub import announcements, courses, internships, resources, stats, users
from smarthub import quiz as quiz_service
from smarthub.models import (
    AnnouncementType,
    CourseRequest,
    ProfileUpdate,
    QuizGenerationRequest,
    ResourceRequest,
    ResourceType,
    Role,
    WorkStatus,
)

from conftest import FakeResponse, encoded


def test_quiz_listing_filters(client, http):
    http.add("GET", "/api/v1/quizzes", FakeResponse(200, [{"id": 1, "title": "Q", "questionCount": 4}]))
    items = quiz_service.list_quizzes(client, active=True, course_id=3)
    assert items[0].question_count == 4
    assert http.last[2]["params"] == {"active": "true", "courseId": 3}


def test_generate_quiz_posts_request(client, http, quiz_payload):
    http.add("POST", "/api/v1/quizzes/generate", FakeResponse(200, quiz_payload))
    quiz = quiz_service.generate_quiz(client, QuizGenerationRequest(topic="Linked lists", question_count=3))
    assert quiz.title == "Data structures"
    assert http.last[2]["json"]["questionCount"] == 3


def test_recent_attempts_and_statistics(client, http):
    http.add("GET", "/api/v1/quizzes/users/42/recent-attempts", FakeResponse(200, [{"id": 1, "quizId": 7, "score": 50}]))
    assert quiz_service.get_recent_attempts(client, 42, limit=3)[0].score == 50
    assert http.last[2]["params"] == {"limit": 3}

    http.add(
        "GET",
        "/api/v1/quizzes/questions/5/statistics",
        FakeResponse(200, {"questionId": 5, "totalAnswers": 4, "correctAnswers": 3, "correctPercentage": 75.0}),
    )
    assert quiz_service.get_question_statistics(client, 5).correct_percentage == 75.0


def test_course_enrollment_check(client, http):
    http.add("GET", "/api/courses/3/check-enrollment", FakeResponse(200, {"isEnrolled": True}))
    assert courses.is_enrolled(client, 3) is True
    http.add("GET", "/api/courses/3/check-enrollment", FakeResponse(200, {"isEnrolled": False}))
    assert courses.is_enrolled(client, 3) is False


def test_course_upload_sends_one_part_per_file(client, http):
    courses.upload_files(client, 3, [("a.pdf", b"%PDF", "application/pdf"), ("b.txt", b"hi", None)])
    method, path, kwargs = http.last
    assert (method, path) == ("POST", "/api/courses/3/files")
    assert kwargs["files"] == [
        ("files", ("a.pdf", b"%PDF", "application/pdf")),
        ("files", ("b.txt", b"hi", "application/octet-stream")),
    ]


def test_internship_filters(client, http):
    internships.list_internships(client, status=WorkStatus.IN_PROGRESS, start_date_from=date(2024, 1, 1))
    assert http.last[1] == "/api/internships"
    assert http.last[2]["params"] == {"status": "IN_PROGRESS", "startDateFrom": "2024-01-01"}


def test_announcement_search_and_type(client, http):
    announcements.search_announcements(client, "defense")
    assert http.last[2]["params"] == {"query": "defense"}
    announcements.get_by_type(client, AnnouncementType.JOB_OFFER, published_only=True)
    assert http.last[1] == "/api/v1/announcements/type/JOB_OFFER/published"


def test_toggle_publish_uses_patch(client, http):
    http.add(
        "PATCH",
        "/api/v1/announcements/9/toggle-publish",
        FakeResponse(200, {"id": 9, "title": "Talk", "type": "SEMINAR", "published": True}),
    )
    assert announcements.toggle_publish(client, 9).published


def test_resource_create_is_multipart(client, http):
    http.add(
        "POST",
        "/api/resources",
        FakeResponse(200, {"id": 1, "title": "Paper", "type": "ARTICLE"}),
    )
    request = ResourceRequest(
        title="Paper", publication_date=date(2023, 4, 2), type=ResourceType.ARTICLE, author_ids=[4, 5]
    )
    created = resources.create_resource(client, request, ("paper.pdf", b"%PDF", "application/pdf"))

    _, _, kwargs = http.last
    assert created.type == ResourceType.ARTICLE
    assert kwargs["json"] is None
    assert ("authorIds", (None, "4")) in kwargs["files"] and ("authorIds", (None, "5")) in kwargs["files"]
    assert ("publicationDate", (None, "2023-04-02")) in kwargs["files"]
    assert kwargs["files"][-1] == ("file", ("paper.pdf", b"%PDF", "application/pdf"))
    assert encoded(http.last).headers["Content-Type"].startswith("multipart/form-data")


def test_resource_without_file_is_still_multipart(client, http):
    http.add("POST", "/api/resources", FakeResponse(200, {"id": 1, "title": "Paper"}))
    http.add("PUT", "/api/resources/1", FakeResponse(200, {"id": 1, "title": "Paper v2"}))
    request = ResourceRequest(title="Paper v2", publication_date=date(2023, 4, 2), type=ResourceType.REPORT)

    resources.create_resource(client, request)
    resources.update_resource(client, 1, request)

    for call in http.calls:
        sent = encoded(call)
        assert sent.headers["Content-Type"].startswith("multipart/form-data")
        assert b'name="title"' in sent.body
        assert b'name="file"' not in sent.body


def test_course_create_is_multipart_with_teacher(client, http):
    http.add("POST", "/api/courses", FakeResponse(200, {"id": 3, "title": "Algo"}))
    request = CourseRequest(title="Algo", description="d", teacher_id=12)
    course = courses.create_course(client, request, [("intro.pdf", b"%PDF", "application/pdf")])

    _, _, kwargs = http.last
    assert course.id == 3
    assert kwargs["json"] is None
    assert ("teacherId", (None, "12")) in kwargs["files"]
    assert ("files", ("intro.pdf", b"%PDF", "application/pdf")) in kwargs["files"]
    sent = encoded(http.last)
    assert sent.headers["Content-Type"].startswith("multipart/form-data")
    assert b'name="teacherId"' in sent.body


def test_course_update_stays_json(client, http):
    http.add("PUT", "/api/courses/3", FakeResponse(200, {"id": 3, "title": "Algo 2"}))
    courses.update_course(client, 3, CourseRequest(title="Algo 2", teacher_id=12))
    assert http.last[2]["json"] == {"title": "Algo 2", "description": "", "teacherId": 12}


def test_users_by_role_and_profile_update(client, http):
    users.get_users_by_role(client, Role.TEACHER)
    assert http.last[1] == "/api/v1/users/role/TEACHER"

    http.add("PUT", "/api/v1/users/profile", FakeResponse(200, {"id": 5, "username": "bob", "phoneNumber": "123"}))
    profile = users.update_profile(client, ProfileUpdate(phone_number="123"))
    assert profile.phone_number == "123"
    assert http.last[2]["json"] == {"phoneNumber": "123"}


def test_admin_stats(client, http):
    http.add("GET", "/api/v1/stats/admin", FakeResponse(200, {"users": 10, "activeUsers": 7}))
    assert stats.get_admin_stats(client).active_users == 7
