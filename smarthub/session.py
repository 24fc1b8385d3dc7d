import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from smarthub.api_client import ApiClient
from smarthub.models import Role, UserProfile

logger = logging.getLogger(__name__)


class AccessDenied(PermissionError):
    def __init__(self, required: tuple[Role, ...], actual: Role | None):
        self.required = required
        self.actual = actual
        names = " or ".join(r.value for r in required)
        super().__init__(f"This page requires the {names} role.")


def now_utc():
    return datetime.now(timezone.utc)


@dataclass
class Session:
    """Authenticated identity, created at login and dropped at logout."""

    token: str
    user: UserProfile
    created_at: datetime = field(default_factory=now_utc)

    @property
    def user_id(self) -> int:
        return self.user.id

    @property
    def role(self) -> Role | None:
        try:
            return Role(str(self.user.role).upper())
        except ValueError:
            return None

    def has_role(self, *roles: Role) -> bool:
        if not roles:
            return True
        return self.role in roles

    def require_role(self, *roles: Role):
        if not self.has_role(*roles):
            raise AccessDenied(tuple(roles), self.role)

    @property
    def is_student(self) -> bool:
        return self.role == Role.STUDENT

    @property
    def can_author(self) -> bool:
        """Teachers and admins create and edit content."""
        return self.role in (Role.TEACHER, Role.ADMIN)

    def client(self, base_url: str | None = None) -> ApiClient:
        return ApiClient(base_url=base_url, token=self.token)

    def __repr__(self):
        # keep the token out of logs and tracebacks
        return f"Session(user={self.user.username!r}, role={self.user.role!r})"
