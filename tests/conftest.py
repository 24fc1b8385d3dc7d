import json
from urllib.parse import urlsplit

import pytest
import requests

from smarthub.api_client import ApiClient
from smarthub.config import get_settings

TOKEN = "aaa.bbb.ccc"


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        if body is not None:
            self.text = json.dumps(body)
        else:
            self.text = text or ""
        self.content = self.text.encode("utf-8")

    def json(self):
        return json.loads(self.text)


class FakeHttp:
    """Stands in for ``requests.Session``; routes are keyed by (method, path).

    A route may be a response, an exception to raise, a list consumed in
    order, or a callable ``(method, path, kwargs) -> response``.
    """

    def __init__(self):
        self.calls = []
        self.routes = {}

    def add(self, method, path, response):
        self.routes[(method, path)] = response

    def request(self, method, url, **kwargs):
        path = urlsplit(url).path
        self.calls.append((method, path, kwargs))
        route = self.routes.get((method, path), FakeResponse(204))
        if isinstance(route, list):
            route = route.pop(0)
        if callable(route) and not isinstance(route, FakeResponse):
            route = route(method, path, kwargs)
        if isinstance(route, Exception):
            raise route
        return route

    def calls_to(self, method, path):
        return [c for c in self.calls if c[0] == method and c[1] == path]

    @property
    def last(self):
        return self.calls[-1]


def encoded(call):
    """Prepare a recorded call the way ``requests`` would put it on the wire."""
    method, path, kwargs = call
    return requests.Request(
        method,
        "http://backend.test" + path,
        params=kwargs.get("params"),
        json=kwargs.get("json"),
        data=kwargs.get("data"),
        files=kwargs.get("files"),
    ).prepare()


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    monkeypatch.delenv("SMARTHUB_API_URL", raising=False)
    monkeypatch.delenv("SMARTHUB_QUIZ_TIME_LIMIT_MINUTES", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def http():
    return FakeHttp()


@pytest.fixture
def client(http):
    return ApiClient(base_url="http://backend.test", token=TOKEN, http=http)


@pytest.fixture
def quiz_payload():
    return {
        "id": 7,
        "title": "Data structures",
        "description": "Trees and lists",
        "active": True,
        "questions": [
            {"id": 1, "text": "Pick one", "type": "SINGLE_CHOICE", "options": ["A", "B", "C"], "correctAnswer": "B"},
            {"id": 2, "text": "Pick many", "type": "MULTIPLE_CHOICE", "options": ["X", "Y", "Z"], "correctAnswer": "X;Z"},
            {"id": 3, "text": "Explain", "type": "OPEN_ENDED", "options": []},
        ],
    }
