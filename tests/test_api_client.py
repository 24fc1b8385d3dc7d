import pytest
import requests

from smarthub.api_client import (
    GENERIC_ERROR,
    NETWORK_ERROR,
    ApiClient,
    AuthenticationError,
    Err,
    HttpError,
    NetworkError,
    Ok,
    ResponseFormatError,
    call,
    parse_list,
)
from smarthub.models import Course

from conftest import TOKEN, FakeHttp, FakeResponse


def test_sends_bearer_token_and_drops_empty_params(client, http):
    http.add("GET", "/api/courses", FakeResponse(200, []))
    client.get("/api/courses", params={"a": 1, "b": None, "c": ""})
    method, path, kwargs = http.last
    assert (method, path) == ("GET", "/api/courses")
    assert kwargs["headers"]["Authorization"] == f"Bearer {TOKEN}"
    assert kwargs["params"] == {"a": 1}


def test_anonymous_client_has_no_auth_header():
    http = FakeHttp()
    ApiClient(base_url="http://backend.test", http=http).get("/api/ping")
    assert "Authorization" not in http.last[2]["headers"]


def test_base_url_comes_from_settings(monkeypatch):
    monkeypatch.setenv("SMARTHUB_API_URL", "https://hub.example.org/")
    assert ApiClient(http=FakeHttp()).url("/api/x") == "https://hub.example.org/api/x"


def test_default_base_url():
    assert ApiClient(http=FakeHttp()).base_url == "http://localhost:8080"


def test_401_raises_authentication_error(client, http):
    http.add("GET", "/api/v1/users/me", FakeResponse(401, {"error": "Token expired"}))
    with pytest.raises(AuthenticationError) as info:
        client.get("/api/v1/users/me")
    assert info.value.status == 401
    assert info.value.message == "Token expired"


def test_http_error_uses_backend_message(client, http):
    http.add("POST", "/api/courses", FakeResponse(400, {"message": "Title already used"}))
    with pytest.raises(HttpError) as info:
        client.post("/api/courses", json={})
    assert info.value.message == "Title already used"
    assert info.value.status == 400


def test_http_error_without_body_falls_back_to_generic(client, http):
    http.add("DELETE", "/api/courses/3", FakeResponse(500, text="<html>oops</html>"))
    with pytest.raises(HttpError) as info:
        client.delete("/api/courses/3")
    assert info.value.message == GENERIC_ERROR


def test_connection_failure_raises_network_error(client, http):
    http.add("GET", "/api/courses", requests.ConnectionError("refused"))
    with pytest.raises(NetworkError) as info:
        client.get("/api/courses")
    assert info.value.message == NETWORK_ERROR
    assert info.value.status is None


def test_no_content_returns_none(client, http):
    http.add("DELETE", "/api/courses/3", FakeResponse(204))
    assert client.delete("/api/courses/3") is None


def test_plain_text_body_is_returned(client, http):
    http.add("GET", "/api/hello", FakeResponse(200, text="pong"))
    assert client.get("/api/hello") == "pong"


def test_get_model_rejects_wrong_shape(client, http):
    http.add("GET", "/api/courses/1", FakeResponse(200, {"unexpected": True}))
    with pytest.raises(ResponseFormatError):
        client.get_model("/api/courses/1", Course)


def test_parse_list_handles_none_and_rejects_objects():
    assert parse_list(Course, None) == []
    with pytest.raises(ResponseFormatError):
        parse_list(Course, {"id": 1})


def test_call_wraps_success_and_failure(client, http):
    http.add("GET", "/api/courses", FakeResponse(200, [{"id": 1, "title": "Algebra"}]))
    ok = call(client.get_list, "/api/courses", Course)
    assert isinstance(ok, Ok)
    assert ok.value[0].title == "Algebra"

    http.add("GET", "/api/courses", FakeResponse(503, {"message": "Maintenance"}))
    err = call(client.get_list, "/api/courses", Course)
    assert isinstance(err, Err)
    assert err.message == "Maintenance"
    assert isinstance(err.error, HttpError)


def test_call_lets_programming_errors_through():
    def broken():
        raise KeyError("bug")

    with pytest.raises(KeyError):
        call(broken)
