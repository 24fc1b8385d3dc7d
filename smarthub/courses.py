from smarthub.api_client import ApiClient, form_parts, parse
from smarthub.models import Course, CourseFile, CourseRequest, UserBasic

BASE = "/api/courses"


def list_courses(client: ApiClient):
    return client.get_list(BASE, Course)


def get_course(client: ApiClient, course_id: int) -> Course:
    return client.get_model(f"{BASE}/{course_id}", Course)


def search_courses(client: ApiClient, query: str):
    return client.get_list(f"{BASE}/search", Course, params={"query": query})


def get_my_courses(client: ApiClient):
    return client.get_list(f"{BASE}/my-courses", Course)


def get_teacher_courses(client: ApiClient, teacher_id: int):
    return client.get_list(f"{BASE}/teacher/{teacher_id}", Course)


def create_course(client: ApiClient, request: CourseRequest, uploads=()) -> Course:
    """Creation is multipart; ``uploads`` are sent as repeated ``files`` parts."""
    fields = [
        ("title", request.title),
        ("description", request.description or ""),
        ("teacherId", request.teacher_id),
    ]
    return parse(Course, client.post(BASE, files=form_parts(fields, name="files", uploads=uploads)))


def update_course(client: ApiClient, course_id: int, request: CourseRequest) -> Course:
    return parse(Course, client.put(f"{BASE}/{course_id}", json=request.wire()))


def delete_course(client: ApiClient, course_id: int):
    client.delete(f"{BASE}/{course_id}")


def enroll(client: ApiClient, course_id: int):
    client.post(f"{BASE}/{course_id}/enroll")


def is_enrolled(client: ApiClient, course_id: int) -> bool:
    body = client.get(f"{BASE}/{course_id}/check-enrollment")
    if isinstance(body, dict):
        return bool(body.get("isEnrolled", body.get("enrolled")))
    return bool(body)


def get_students(client: ApiClient, course_id: int):
    return client.get_list(f"{BASE}/{course_id}/students", UserBasic)


def add_student(client: ApiClient, course_id: int, student_id: int):
    client.post(f"{BASE}/{course_id}/students/{student_id}")


def remove_student(client: ApiClient, course_id: int, student_id: int):
    client.delete(f"{BASE}/{course_id}/students/{student_id}")


def get_files(client: ApiClient, course_id: int):
    return client.get_list(f"{BASE}/{course_id}/files", CourseFile)


def upload_files(client: ApiClient, course_id: int, uploads):
    """``uploads`` is a list of ``(file_name, bytes, content_type)`` tuples."""
    client.post(f"{BASE}/{course_id}/files", files=form_parts((), name="files", uploads=uploads))


def delete_file(client: ApiClient, file_id: int):
    client.delete(f"{BASE}/files/{file_id}")
