"""Client-side form checks run before any network call."""

from datetime import date

from smarthub.models import (
    AnnouncementRequest,
    CourseRequest,
    InternshipRequest,
    ProjectRequest,
    QuestionType,
    QuizGenerationRequest,
    QuizRequest,
    ResourceRequest,
)

MIN_TOPIC_LENGTH = 5
MAX_GENERATED_QUESTIONS = 50


class ValidationError(ValueError):
    def __init__(self, problems: list[str]):
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


def _blank(value) -> bool:
    return value is None or not str(value).strip()


def _raise_if(problems: list[str]):
    if problems:
        raise ValidationError(problems)


def _check_dates(problems: list[str], start: date | None, end: date | None):
    if start is None:
        problems.append("Start date is required.")
    if end is None:
        problems.append("End date is required.")
    if start is not None and end is not None and end <= start:
        problems.append("End date must be after start date.")


def validate_course(request: CourseRequest):
    problems = []
    if _blank(request.title):
        problems.append("Title is required.")
    if request.teacher_id is None:
        problems.append("A teacher is required.")
    _raise_if(problems)


def validate_project(request: ProjectRequest):
    problems = []
    if _blank(request.title):
        problems.append("Title is required.")
    if _blank(request.description):
        problems.append("Description is required.")
    _check_dates(problems, request.start_date, request.end_date)
    _raise_if(problems)


def validate_internship(request: InternshipRequest):
    problems = []
    if _blank(request.title):
        problems.append("Title is required.")
    if _blank(request.company):
        problems.append("Company is required.")
    if request.student_id is None:
        problems.append("A student must be selected.")
    _check_dates(problems, request.start_date, request.end_date)
    _raise_if(problems)


def validate_announcement(request: AnnouncementRequest):
    problems = []
    if _blank(request.title):
        problems.append("Title is required.")
    if _blank(request.content):
        problems.append("Content is required.")
    _raise_if(problems)


def validate_resource(request: ResourceRequest):
    problems = []
    if _blank(request.title):
        problems.append("Title is required.")
    if request.publication_date is None:
        problems.append("Publication date is required.")
    _raise_if(problems)


def validate_quiz(request: QuizRequest):
    problems = []
    if _blank(request.title):
        problems.append("Title is required.")
    if not request.questions:
        problems.append("A quiz needs at least one question.")

    for number, question in enumerate(request.questions, 1):
        label = f"Question {number}"
        if _blank(question.text):
            problems.append(f"{label}: text is required.")
        if question.type == QuestionType.OPEN_ENDED:
            continue
        options = [o.strip() for o in question.options]
        if len(options) < 2 or any(not o for o in options):
            problems.append(f"{label}: at least two non-empty options are required.")
        if len(set(options)) != len(options):
            problems.append(f"{label}: options must be unique.")
        if _blank(question.correct_answer):
            problems.append(f"{label}: a correct answer is required.")
            continue
        if question.type == QuestionType.MULTIPLE_CHOICE:
            expected = [p for p in question.correct_answer.split(";") if p]
        else:
            expected = [question.correct_answer]
        if any(answer.strip() not in options for answer in expected):
            problems.append(f"{label}: the correct answer must be one of the options.")
    _raise_if(problems)


def validate_generation(request: QuizGenerationRequest):
    problems = []
    if _blank(request.topic) or len(request.topic.strip()) < MIN_TOPIC_LENGTH:
        problems.append(f"Topic must be at least {MIN_TOPIC_LENGTH} characters long.")
    if not 1 <= request.question_count <= MAX_GENERATED_QUESTIONS:
        problems.append(f"Question count must be between 1 and {MAX_GENERATED_QUESTIONS}.")
    if not request.question_types:
        problems.append("Select at least one question type.")
    _raise_if(problems)
