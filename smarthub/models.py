"""Typed view-models mirroring the SmartHub backend DTOs.

Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Role(str, Enum):
    STUDENT = "STUDENT"
    TEACHER = "TEACHER"
    ADMIN = "ADMIN"


class QuestionType(str, Enum):
    SINGLE_CHOICE = "SINGLE_CHOICE"
    MULTIPLE_CHOICE = "MULTIPLE_CHOICE"
    TRUE_FALSE = "TRUE_FALSE"
    OPEN_ENDED = "OPEN_ENDED"


class AttemptStatus(str, Enum):
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    ABANDONED = "ABANDONED"


class WorkStatus(str, Enum):
    """Lifecycle shared by projects and internships."""

    PLANNED = "PLANNED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class AnnouncementType(str, Enum):
    SEMINAR = "SEMINAR"
    WORKSHOP = "WORKSHOP"
    DEFENSE = "DEFENSE"
    JOB_OFFER = "JOB_OFFER"
    INTERNSHIP_OFFER = "INTERNSHIP_OFFER"


class ResourceType(str, Enum):
    ARTICLE = "ARTICLE"
    THESIS = "THESIS"
    PUBLICATION = "PUBLICATION"
    REPORT = "REPORT"
    OTHER = "OTHER"


class Difficulty(str, Enum):
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


class AgentStrategy(str, Enum):
    DIAGNOSTIC = "DIAGNOSTIC"
    REMEDIATION = "REMEDIATION"
    CHALLENGE = "CHALLENGE"
    REINFORCEMENT = "REINFORCEMENT"
    STANDARD = "STANDARD"


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


# --- users -----------------------------------------------------------------


class UserBasic(WireModel):
    id: int
    username: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[str] = None

    @property
    def display_name(self) -> str:
        full = " ".join(p for p in (self.first_name, self.last_name) if p)
        return full or self.username


class UserProfile(UserBasic):
    phone_number: Optional[str] = None
    active: Optional[bool] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_login: Optional[datetime] = None
    profile_image: Optional[str] = None


class ProfileUpdate(WireModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None


# --- courses ---------------------------------------------------------------


class CourseFile(WireModel):
    id: int
    file_name: str
    file_type: Optional[str] = None
    file_size: Optional[int] = None
    uploaded_date: Optional[datetime] = None
    uploaded_by_username: Optional[str] = None


class Course(WireModel):
    id: int
    title: str
    description: Optional[str] = ""
    teacher_id: Optional[int] = None
    teacher_name: Optional[str] = None
    created_date: Optional[datetime] = None
    students: list[UserBasic] = Field(default_factory=list)
    files: list[CourseFile] = Field(default_factory=list)
    student_count: int = 0
    file_count: int = 0


class CourseRequest(WireModel):
    title: str
    description: str = ""
    teacher_id: Optional[int] = None


# --- projects & internships ------------------------------------------------


class Project(WireModel):
    id: int
    title: str
    description: Optional[str] = ""
    students: list[UserBasic] = Field(default_factory=list)
    supervisor: Optional[UserBasic] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: WorkStatus = WorkStatus.PLANNED
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProjectRequest(WireModel):
    title: str
    description: str = ""
    student_ids: list[int] = Field(default_factory=list)
    start_date: date
    end_date: date
    status: Optional[WorkStatus] = None


class Internship(WireModel):
    id: int
    title: str
    description: Optional[str] = ""
    student: Optional[UserBasic] = None
    supervisor: Optional[UserBasic] = None
    company: Optional[str] = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: WorkStatus = WorkStatus.PLANNED
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class InternshipRequest(WireModel):
    title: str
    description: str = ""
    student_id: int
    supervisor_id: Optional[int] = None
    company: str
    start_date: date
    end_date: date
    status: Optional[WorkStatus] = None


# --- announcements & resources ---------------------------------------------


class Announcement(WireModel):
    id: int
    title: str
    content: str = ""
    type: AnnouncementType
    date: Optional[datetime] = None
    author: Optional[UserBasic] = None
    published: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AnnouncementRequest(WireModel):
    title: str
    content: str
    type: AnnouncementType
    date: datetime
    published: Optional[bool] = None


class Resource(WireModel):
    id: int
    title: str
    authors: list[UserBasic] = Field(default_factory=list)
    abstract_text: Optional[str] = ""
    publication_date: Optional[date] = None
    original_file_name: Optional[str] = None
    file_download_url: Optional[str] = None
    file_size: Optional[int] = None
    file_type: Optional[str] = None
    type: ResourceType = ResourceType.OTHER
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ResourceRequest(WireModel):
    title: str
    abstract_text: str = ""
    publication_date: date
    type: ResourceType
    author_ids: list[int] = Field(default_factory=list)


# --- quizzes ---------------------------------------------------------------


class Question(WireModel):
    id: int
    text: str
    type: QuestionType
    options: list[str] = Field(default_factory=list)
    correct_answer: Optional[str] = None
    quiz_id: Optional[int] = None


class Quiz(WireModel):
    id: int
    title: str
    description: Optional[str] = ""
    active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    questions: list[Question] = Field(default_factory=list)

    def question(self, question_id: int) -> Optional[Question]:
        for q in self.questions:
            if q.id == question_id:
                return q
        return None


class QuizSummary(WireModel):
    id: int
    title: str
    description: Optional[str] = ""
    active: bool = True
    created_at: Optional[datetime] = None
    question_count: int = 0


class QuestionRequest(WireModel):
    text: str
    type: QuestionType
    options: list[str] = Field(default_factory=list)
    correct_answer: str = ""


class QuizRequest(WireModel):
    title: str
    description: str = ""
    active: Optional[bool] = None
    questions: list[QuestionRequest] = Field(default_factory=list)

    @classmethod
    def from_quiz(cls, quiz: Quiz) -> "QuizRequest":
        return cls(
            title=quiz.title,
            description=quiz.description or "",
            active=quiz.active,
            questions=[
                QuestionRequest(
                    text=q.text,
                    type=q.type,
                    options=list(q.options),
                    correct_answer=q.correct_answer or "",
                )
                for q in quiz.questions
            ],
        )


class AnswerResult(WireModel):
    """An answer as returned by the backend after submission."""

    id: Optional[int] = None
    question_id: int
    question_text: Optional[str] = None
    answer_text: Optional[str] = ""
    is_correct: Optional[bool] = None
    correct_answer: Optional[str] = None


class QuizAttempt(WireModel):
    id: int
    student_id: Optional[int] = None
    student_name: Optional[str] = None
    quiz_id: int
    quiz_title: Optional[str] = None
    score: Optional[float] = None
    attempted_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    status: AttemptStatus = AttemptStatus.IN_PROGRESS
    answers: list[AnswerResult] = Field(default_factory=list)


class AnswerSubmission(WireModel):
    question_id: int
    answer_text: str


class AttemptSubmission(WireModel):
    quiz_id: int
    answers: list[AnswerSubmission] = Field(default_factory=list)


class QuizStatistics(WireModel):
    quiz_id: int
    quiz_title: Optional[str] = None
    average_score: Optional[float] = None
    max_score: Optional[float] = None
    total_attempts: int = 0
    question_count: int = 0
    completed_attempts: int = 0
    in_progress_attempts: int = 0


class AnswerStatistics(WireModel):
    question_id: int
    question_text: Optional[str] = None
    total_answers: int = 0
    correct_answers: int = 0
    incorrect_answers: int = 0
    correct_percentage: float = 0.0


class QuizGenerationRequest(WireModel):
    topic: str
    question_count: int = 10
    difficulty: Difficulty = Difficulty.MEDIUM
    question_types: list[QuestionType] = Field(
        default_factory=lambda: [QuestionType.SINGLE_CHOICE, QuestionType.TRUE_FALSE]
    )


# --- RAG / agent -----------------------------------------------------------


class AgentParameters(WireModel):
    strategy: AgentStrategy = AgentStrategy.STANDARD
    difficulty: Difficulty = Difficulty.MEDIUM
    question_count: int = 10
    question_types: list[str] = Field(
        default_factory=lambda: [QuestionType.SINGLE_CHOICE.value, QuestionType.MULTIPLE_CHOICE.value]
    )


class QuizRecommendation(WireModel):
    id: Optional[int] = None
    recommended_topic: str
    reason: Optional[str] = ""
    confidence_score: float = 0.0
    recommended_at: Optional[datetime] = None
    accepted: bool = False
    completed_at: Optional[datetime] = None


class NextQuizRecommendation(WireModel):
    recommended_topic: Optional[str] = None
    reason: Optional[str] = ""


class ProgressAnalysis(WireModel):
    user_id: int
    quiz_count: int = 0
    completed_count: int = 0
    success_rate: float = 0.0
    average_score: float = 0.0
    total_time_spent: float = 0.0
    last_active_date: Optional[datetime] = None
    topic_performance: dict[str, float] = Field(default_factory=dict)
    strong_topics: list[str] = Field(default_factory=list)
    weak_topics: list[str] = Field(default_factory=list)


class RagStatus(WireModel):
    ollama_connected: bool = False
    vectorization_active: bool = False
    total_documents: int = 0
    vectorized_documents: int = 0
    percentage_vectorized: float = 0.0
    system_ready: bool = False
    last_update: Optional[datetime] = None


# --- course quiz supervisor --------------------------------------------------


class QuizEligibility(WireModel):
    """Whether a student may take the supervised quiz of a course today."""

    user_id: Optional[int] = None
    course_id: Optional[int] = None
    course_title: Optional[str] = None
    # Jackson writes the boolean as ``eligible``; older builds use ``isEligible``
    eligible: bool = Field(default=False, validation_alias=AliasChoices("eligible", "isEligible"))
    reason: Optional[str] = None
    max_attempts_per_day: int = 3
    attempts_today: int = 0
    remaining_attempts_today: int = 3
    last_attempt_date: Optional[datetime] = None
    next_available_time: Optional[datetime] = None
    recommendation: Optional[str] = None
    suggestion: Optional[str] = None


class CourseQuizInitiation(WireModel):
    attempt_id: Optional[int] = None
    quiz_id: Optional[int] = None
    quiz: Optional[Quiz] = Field(default=None, validation_alias=AliasChoices("quizResponse", "quiz"))
    time_limit_minutes: int = 0
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    remaining_time_minutes: int = 0
    instructions: Optional[list[str]] = None
    warnings: Optional[list[str]] = None
    supervisor_enabled: bool = False

    @property
    def started(self) -> bool:
        return self.attempt_id is not None and self.quiz is not None


class QuizFeedback(WireModel):
    score: float = 0.0
    grade: Optional[str] = None
    strengths: Optional[list[str]] = None
    weaknesses: Optional[list[str]] = None
    suggestions: Optional[list[str]] = None


class CourseQuizResult(WireModel):
    attempt_id: Optional[int] = None
    score: float = 0.0
    time_spent_minutes: float = 0.0
    timed_out: bool = False
    passed: bool = False
    feedback: Optional[QuizFeedback] = None
    next_quiz_eligibility: Optional[QuizEligibility] = None
    certificate_eligible: bool = False


class CourseQuizStats(WireModel):
    user_id: Optional[int] = None
    course_id: Optional[int] = None
    total_attempts: int = 0
    completed_attempts: int = 0
    best_score: float = 0.0
    average_score: float = 0.0
    last_attempt_date: Optional[datetime] = None


class AdaptiveQuizResult(WireModel):
    status: str = "ERROR"
    message: Optional[str] = None
    strategy: Optional[str] = None
    quiz: Optional[Quiz] = None
    eligibility: Optional[QuizEligibility] = None


# --- stats -----------------------------------------------------------------


class PlatformStats(WireModel):
    """Counters returned by the stats endpoints; the backend adds keys freely."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    users: int = 0
    courses: int = 0
    projects: int = 0
    announcements: int = 0
    internships: int = 0
    resources: int = 0
    quizzes: int = 0
    quiz_attempts: int = 0
    active_users: int = 0
    teachers: int = 0
    students: int = 0
    admins: int = 0
