import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from smarthub.config import get_settings

logger = logging.getLogger(__name__)

GENERIC_ERROR = "An unexpected error occurred. Please try again."
NETWORK_ERROR = "The SmartHub server could not be reached. Check your connection and try again."

M = TypeVar("M", bound=BaseModel)
T = TypeVar("T")


class ApiError(Exception):
    """Base class for every failure surfaced by the REST client."""

    def __init__(self, message: str | None = None, status: int | None = None):
        self.message = message or GENERIC_ERROR
        self.status = status
        super().__init__(self.message)


class NetworkError(ApiError):
    pass


class HttpError(ApiError):
    pass


class AuthenticationError(HttpError):
    pass


class ResponseFormatError(ApiError):
    pass


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: ApiError

    @property
    def message(self) -> str:
        return self.error.message


def call(fn: Callable[..., T], *args, **kwargs) -> Ok[T] | Err:
    """Run a service call and fold REST failures into an ``Err``."""
    try:
        return Ok(fn(*args, **kwargs))
    except ApiError as exc:
        logger.warning("API call %s failed: %s (status=%s)", getattr(fn, "__name__", fn), exc.message, exc.status)
        return Err(exc)


def _backend_message(response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        for key in ("message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return None


def parse(model: type[M], payload: Any) -> M:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        logger.error("Unexpected %s payload: %s", model.__name__, exc)
        raise ResponseFormatError(f"Unexpected response from server ({model.__name__}).") from exc


def parse_list(model: type[M], payload: Any) -> list[M]:
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise ResponseFormatError(f"Expected a list of {model.__name__} from server.")
    return [parse(model, item) for item in payload]


def form_parts(fields, name: str = "file", uploads=()) -> list:
    """Multipart parts for ``requests``' ``files=``: text fields plus uploads.

    Text fields go in as file-less parts so the body stays multipart even
    without an upload. ``uploads`` holds ``(file_name, bytes, content_type)``.
    """
    parts = [(key, (None, str(value))) for key, value in fields]
    parts.extend(
        (name, (file_name, content, content_type or "application/octet-stream"))
        for file_name, content, content_type in uploads
    )
    return parts


class ApiClient:
    """Thin wrapper around ``requests`` for the SmartHub backend."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        http: requests.Session | None = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.api_timeout
        self.token = token
        self.http = http or requests.Session()

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self) -> dict:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def request(self, method: str, path: str, *, params=None, json=None, data=None, files=None) -> Any:
        if params:
            params = {k: v for k, v in params.items() if v is not None and v != ""}
        url = self.url(path)
        logger.debug("%s %s params=%s", method, url, params)
        try:
            response = self.http.request(
                method,
                url,
                params=params or None,
                json=json,
                data=data,
                files=files,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise NetworkError(NETWORK_ERROR) from exc

        if response.status_code >= 400:
            message = _backend_message(response)
            logger.warning("%s %s -> %s %s", method, url, response.status_code, message or "")
            if response.status_code == 401:
                raise AuthenticationError(message or "Your session has expired. Please log in again.", response.status_code)
            raise HttpError(message, response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    def get(self, path: str, params=None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json=None, params=None, data=None, files=None) -> Any:
        return self.request("POST", path, params=params, json=json, data=data, files=files)

    def put(self, path: str, json=None, params=None, data=None, files=None) -> Any:
        return self.request("PUT", path, params=params, json=json, data=data, files=files)

    def patch(self, path: str, json=None, params=None) -> Any:
        return self.request("PATCH", path, params=params, json=json)

    def delete(self, path: str, params=None) -> None:
        self.request("DELETE", path, params=params)

    def get_model(self, path: str, model: type[M], params=None) -> M:
        return parse(model, self.get(path, params=params))

    def get_list(self, path: str, model: type[M], params=None) -> list[M]:
        return parse_list(model, self.get(path, params=params))
