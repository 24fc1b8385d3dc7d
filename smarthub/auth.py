import logging

from smarthub.api_client import ApiClient, AuthenticationError, parse
from smarthub.models import Role, UserProfile, WireModel
from smarthub.session import Session

logger = logging.getLogger(__name__)


class AuthPayload(WireModel):
    token: str | None = None
    username: str
    role: Role
    id: int | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class AuthEnvelope(WireModel):
    success: bool = False
    message: str | None = None
    data: AuthPayload | None = None


def _looks_like_jwt(token: str | None) -> bool:
    if not token or token in ("undefined", "null"):
        return False
    return token.count(".") == 2


def _session_from_envelope(body, failure_message: str) -> Session:
    if not isinstance(body, dict):
        raise AuthenticationError("No response from the server.")
    envelope = parse(AuthEnvelope, body)
    if not envelope.success:
        raise AuthenticationError(envelope.message or failure_message)
    payload = envelope.data
    if payload is None or not payload.token:
        raise AuthenticationError("Token missing from the server response.")
    if not _looks_like_jwt(payload.token):
        raise AuthenticationError("Malformed token received from the server.")
    if payload.id is None:
        raise AuthenticationError("User id missing from the server response.")
    user = UserProfile(
        id=payload.id,
        username=payload.username,
        email=payload.email,
        first_name=payload.first_name,
        last_name=payload.last_name,
        role=payload.role.value,
    )
    return Session(token=payload.token, user=user)


def login(client: ApiClient, username: str, password: str) -> Session:
    body = client.post("/api/auth/login", json={"username": username, "password": password})
    session = _session_from_envelope(body, "Login failed.")
    logger.info("User %s logged in as %s", session.user.username, session.user.role)
    return session


def register(
    client: ApiClient,
    username: str,
    email: str,
    password: str,
    first_name: str | None = None,
    last_name: str | None = None,
    role: Role = Role.STUDENT,
) -> Session:
    payload = {
        "username": username,
        "email": email,
        "password": password,
        "firstName": first_name,
        "lastName": last_name,
        "role": role.value,
    }
    body = client.post("/api/auth/register", json={k: v for k, v in payload.items() if v is not None})
    session = _session_from_envelope(body, "Registration failed.")
    logger.info("Registered user %s", session.user.username)
    return session


def refresh_profile(client: ApiClient, session: Session) -> Session:
    """Replace the login snapshot of the user with /users/me."""
    profile = client.get_model("/api/v1/users/me", UserProfile)
    session.user = profile
    return session


def forgot_password(client: ApiClient, email: str):
    client.post("/api/auth/forgot-password", json={"email": email})


def reset_password(client: ApiClient, token: str, new_password: str):
    client.post("/api/auth/reset-password", json={"token": token, "newPassword": new_password})
