import pytest

from smarthub import auth
from smarthub.api_client import AuthenticationError
from smarthub.models import Role

from conftest import FakeResponse

LOGIN = "/api/auth/login"


def envelope(success=True, token="xxx.yyy.zzz", message=None, **data):
    payload = {"username": "alice", "role": "STUDENT", "id": 42, "email": "alice@example.org", "token": token}
    payload.update(data)
    return {"success": success, "message": message, "data": payload}


def test_login_builds_session(client, http):
    http.add("POST", LOGIN, FakeResponse(200, envelope(firstName="Alice")))
    session = auth.login(client, "alice", "secret")
    assert session.token == "xxx.yyy.zzz"
    assert session.user_id == 42
    assert session.role == Role.STUDENT
    assert session.user.display_name == "Alice"
    assert http.last[2]["json"] == {"username": "alice", "password": "secret"}


def test_unsuccessful_envelope_raises_with_backend_message(client, http):
    http.add("POST", LOGIN, FakeResponse(200, envelope(success=False, message="Bad credentials")))
    with pytest.raises(AuthenticationError, match="Bad credentials"):
        auth.login(client, "alice", "wrong")


@pytest.mark.parametrize("token", [None, "", "undefined", "not-a-jwt"])
def test_missing_or_malformed_token_raises(client, http, token):
    http.add("POST", LOGIN, FakeResponse(200, envelope(token=token)))
    with pytest.raises(AuthenticationError):
        auth.login(client, "alice", "secret")


def test_empty_body_raises(client, http):
    http.add("POST", LOGIN, FakeResponse(204))
    with pytest.raises(AuthenticationError):
        auth.login(client, "alice", "secret")


def test_register_omits_blank_names(client, http):
    http.add("POST", "/api/auth/register", FakeResponse(200, envelope(role="TEACHER")))
    session = auth.register(client, "alice", "alice@example.org", "secret", role=Role.TEACHER)
    assert session.can_author
    assert http.last[2]["json"] == {
        "username": "alice",
        "email": "alice@example.org",
        "password": "secret",
        "role": "TEACHER",
    }


def test_refresh_profile_replaces_user(client, http):
    http.add("POST", LOGIN, FakeResponse(200, envelope()))
    session = auth.login(client, "alice", "secret")
    http.add("GET", "/api/v1/users/me", FakeResponse(200, {"id": 42, "username": "alice", "phoneNumber": "555"}))
    auth.refresh_profile(client, session)
    assert session.user.phone_number == "555"


def test_password_reset_payloads(client, http):
    auth.forgot_password(client, "alice@example.org")
    assert http.last[1] == "/api/auth/forgot-password"
    assert http.last[2]["json"] == {"email": "alice@example.org"}

    auth.reset_password(client, "reset-token", "n3w-secret")
    assert http.last[1] == "/api/auth/reset-password"
    assert http.last[2]["json"] == {"token": "reset-token", "newPassword": "n3w-secret"}
