from datetime import date, datetime

from smarthub.models import AnnouncementType, AttemptStatus, QuestionType, ResourceType, WorkStatus

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]

ATTEMPT_STATUS_LABELS = {
    AttemptStatus.IN_PROGRESS: "In progress",
    AttemptStatus.COMPLETED: "Completed",
    AttemptStatus.ABANDONED: "Abandoned",
}

QUESTION_TYPE_LABELS = {
    QuestionType.SINGLE_CHOICE: "Single choice",
    QuestionType.MULTIPLE_CHOICE: "Multiple choice",
    QuestionType.TRUE_FALSE: "True/False",
    QuestionType.OPEN_ENDED: "Open question",
}

WORK_STATUS_LABELS = {
    WorkStatus.PLANNED: "Planned",
    WorkStatus.IN_PROGRESS: "In progress",
    WorkStatus.COMPLETED: "Completed",
    WorkStatus.CANCELLED: "Cancelled",
}

ANNOUNCEMENT_TYPE_LABELS = {
    AnnouncementType.SEMINAR: "Seminar",
    AnnouncementType.WORKSHOP: "Workshop",
    AnnouncementType.DEFENSE: "Defense",
    AnnouncementType.JOB_OFFER: "Job offer",
    AnnouncementType.INTERNSHIP_OFFER: "Internship offer",
}

RESOURCE_TYPE_LABELS = {
    ResourceType.ARTICLE: "Article",
    ResourceType.THESIS: "Thesis",
    ResourceType.PUBLICATION: "Publication",
    ResourceType.REPORT: "Report",
    ResourceType.OTHER: "Other",
}


def _label(table, value) -> str:
    try:
        return table[value]
    except KeyError:
        return str(getattr(value, "value", value))


def attempt_status_label(status) -> str:
    return _label(ATTEMPT_STATUS_LABELS, status)


def question_type_label(question_type) -> str:
    return _label(QUESTION_TYPE_LABELS, question_type)


def work_status_label(status) -> str:
    return _label(WORK_STATUS_LABELS, status)


def announcement_type_label(announcement_type) -> str:
    return _label(ANNOUNCEMENT_TYPE_LABELS, announcement_type)


def resource_type_label(resource_type) -> str:
    return _label(RESOURCE_TYPE_LABELS, resource_type)


def format_countdown(seconds: int) -> str:
    seconds = max(0, int(seconds))
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}h {minutes}m {secs}s"
    return f"{minutes}m {secs}s"


def format_score(score) -> str:
    if score is None:
        return "Not graded"
    return f"{float(score):.2f}%"


def score_level(score) -> str:
    """Traffic-light bucket for a percentage score."""
    if score is None:
        return "neutral"
    if score >= 80:
        return "success"
    if score >= 60:
        return "warning"
    return "danger"


def answer_status(is_correct) -> str:
    if is_correct is None:
        return "Not graded"
    return "Correct" if is_correct else "Incorrect"


def format_compact_time(value) -> str:
    if not value:
        return ""
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        return f"{value.day} {MONTH_NAMES[value.month - 1]} {value.year}"
    else:
        try:
            dt = datetime.fromisoformat(str(value))
        except ValueError:
            return str(value)
    if dt.tzinfo:
        dt = dt.astimezone()
    return f"{dt.day} {MONTH_NAMES[dt.month - 1]} {dt.strftime('%H:%M')}"


def format_file_size(size) -> str:
    if not size:
        return ""
    size = float(size)
    for unit in ("B", "KB", "MB"):
        if size < 1024:
            return f"{size:.0f} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} GB"
