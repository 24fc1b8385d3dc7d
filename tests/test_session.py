import pytest

from smarthub.models import Role, UserProfile
from smarthub.session import AccessDenied, Session


def make_session(role="STUDENT"):
    return Session(token="aaa.bbb.ccc", user=UserProfile(id=5, username="bob", role=role))


def test_role_is_parsed_case_insensitively():
    assert make_session("teacher").role == Role.TEACHER
    assert make_session("unknown").role is None


def test_has_role_without_arguments_accepts_anyone():
    assert make_session().has_role()


def test_require_role_raises_access_denied():
    session = make_session("STUDENT")
    with pytest.raises(AccessDenied) as info:
        session.require_role(Role.TEACHER, Role.ADMIN)
    assert info.value.actual == Role.STUDENT
    assert "TEACHER or ADMIN" in str(info.value)


def test_authoring_rights():
    assert not make_session("STUDENT").can_author
    assert make_session("TEACHER").can_author
    assert make_session("ADMIN").can_author
    assert make_session("STUDENT").is_student


def test_client_carries_token():
    client = make_session().client(base_url="http://backend.test")
    assert client.token == "aaa.bbb.ccc"
    assert client.base_url == "http://backend.test"


def test_repr_hides_token():
    assert "aaa.bbb.ccc" not in repr(make_session())
