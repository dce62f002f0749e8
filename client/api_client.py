"""
Resilient HTTP client for the meal planner backend.

This module is the single place where the client talks HTTP. Resource wrappers
(grocery_list_api, meal_plan_api, recipe_api) build on ApiClient.request() and
never call requests directly.

Request lifecycle:
1. Resolve a bearer token according to the auth mode
   - "required": a token must be available, otherwise an AUTH error is raised
     before any request is sent
   - "optional": attach a token if there is one, proceed as a guest otherwise
   - "none": never attach credentials
2. Send the request (JSON-encoding dict/list bodies) with a timeout
3. On 401, when a token was used or required: refresh the session once and re-send
   once with the new token. A failed refresh, a missing token or a second 401 is an
   AUTH error. There is no refresh loop.
4. Convert the response: 204/empty -> None, JSON -> parsed, anything else -> text.
   Non-2xx responses become classified AppErrors.

Steps 1-4 form a single attempt; the whole attempt is wrapped by with_retry()
when retries are enabled (500+, 408, 429 and network errors are retried with
exponential backoff).

Terminal errors are reported once to the ErrorReporter with {"url", "method"}
context and then raised unchanged.

# NOTE: Timeouts are given in milliseconds throughout the client and converted
    to seconds only when handed to requests.
"""

import json
import logging
import time
from typing import Any, Callable, Dict, Literal, Optional
from urllib.parse import quote

import requests

from client.config import ClientConfig
from client.errors import (
    AppError,
    api_error,
    auth_error,
    categorize_error,
    validation_error,
)
from client.reporting import ErrorReporter, LoggingErrorReporter, report_error
from client.retry import NO_RETRY, RetryPolicy, with_retry
from client.session import SessionProvider, StaticSessionProvider

logger = logging.getLogger(__name__)

AuthMode = Literal["required", "optional", "none"]
AUTH_MODES = ("required", "optional", "none")


def _has_header(headers: Dict[str, str], name: str) -> bool:
    name = name.lower()
    return any(key.lower() == name for key in headers)


def _encode_body(body: Any) -> Any:
    """JSON-encode plain objects; pass bytes, strings and file-like bodies through."""
    if body is None:
        return None
    if isinstance(body, (dict, list, tuple)):
        return json.dumps(body)
    return body


def _is_json_response(response: requests.Response) -> bool:
    content_type = response.headers.get("Content-Type", "")
    return "application/json" in content_type.lower() or "+json" in content_type.lower()


def _parse_json_or_none(response: requests.Response) -> Any:
    if not response.content or not _is_json_response(response):
        return None
    try:
        return response.json()
    except ValueError:
        return None


def extract_error_message(response: requests.Response, payload: Any = None) -> str:
    """
    Best-effort error message from a failed response.

    Looks at a JSON body's "message" and "error" fields, then FastAPI's "detail"
    (string or list of validation errors), then the raw body text, and finally
    the HTTP reason phrase.
    """
    if isinstance(payload, dict):
        for key in ("message", "error"):
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
        detail = payload.get("detail")
        if isinstance(detail, str) and detail.strip():
            return detail.strip()
        if isinstance(detail, list) and detail and isinstance(detail[0], dict):
            msg = detail[0].get("msg")
            if isinstance(msg, str) and msg.strip():
                return msg.strip()
    elif payload is None:
        text = (response.text or "").strip()
        if text:
            return text
    return response.reason or "API request failed"


def extract_validation_field(payload: Any) -> Optional[str]:
    """Offending field from FastAPI's 422 body: the last name in detail[0].loc."""
    if not isinstance(payload, dict):
        return None
    detail = payload.get("detail")
    if not isinstance(detail, list) or not detail or not isinstance(detail[0], dict):
        return None
    loc = detail[0].get("loc") or []
    names = [part for part in loc if isinstance(part, str) and part not in ("body", "query", "path")]
    return names[-1] if names else None


def error_from_response(response: requests.Response) -> AppError:
    """Classify a non-2xx response (422 -> VALIDATION, anything else -> API)."""
    payload = _parse_json_or_none(response)
    message = extract_error_message(response, payload)
    if response.status_code == 422:
        return validation_error(message, field=extract_validation_field(payload), status_code=422)
    return api_error(response.status_code, message)


def parse_response(response: requests.Response) -> Any:
    """Body of a successful response: None for 204/empty, parsed JSON, or text."""
    if response.status_code == 204 or not response.content:
        return None
    if _is_json_response(response):
        try:
            return response.json()
        except ValueError:
            logger.warning("Response declared JSON but could not be parsed: %s", response.url)
            return response.text
    return response.text


class ApiClient:
    """
    HTTP client with auth modes, one-shot session refresh, retries and error reporting.

    Args:
        base_url: Backend URL (default: ClientConfig.get_api_url())
        session_provider: Source of bearer tokens (default: guest session)
        reporter: Sink for terminal errors (default: LoggingErrorReporter)
        retry_policy: Backoff policy (default: RetryPolicy())
        http: requests.Session used for all calls (default: a new Session)
        sleep: Sleep function in seconds, used between retries
        timeout_ms: Default per-request timeout in milliseconds

    Example:
        with ApiClient(session_provider=StaticSessionProvider(token)) as client:
            grocery_list = client.get("/grocery-list")
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        session_provider: Optional[SessionProvider] = None,
        reporter: Optional[ErrorReporter] = None,
        retry_policy: Optional[RetryPolicy] = None,
        http: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
        timeout_ms: Optional[int] = None,
    ):
        self.base_url = (base_url or ClientConfig.get_api_url()).rstrip("/")
        self.session_provider = session_provider or StaticSessionProvider()
        self.reporter = reporter if reporter is not None else LoggingErrorReporter()
        self.retry_policy = retry_policy or RetryPolicy()
        self.http = http if http is not None else requests.Session()
        if timeout_ms is not None and timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be positive: {timeout_ms!r}")
        self.timeout_ms = timeout_ms if timeout_ms is not None else ClientConfig.get_timeout_ms()
        self._sleep = sleep

    @classmethod
    def from_env(cls, reporter: Optional[ErrorReporter] = None, **kwargs) -> "ApiClient":
        """Client configured from API_URL, API_TIMEOUT_MS and API_ACCESS_TOKEN."""
        kwargs.setdefault("session_provider", StaticSessionProvider(ClientConfig.get_access_token()))
        return cls(
            base_url=ClientConfig.get_api_url(),
            reporter=reporter,
            timeout_ms=ClientConfig.get_timeout_ms(),
            **kwargs,
        )

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
        auth: AuthMode = "required",
        timeout: Optional[int] = None,
        retries: bool = True,
    ) -> Any:
        """
        Send a request and return the decoded response body.

        Args:
            path: Path relative to base_url, e.g. "/grocery-list/meals"
            method: HTTP method
            body: dict/list (sent as JSON) or raw bytes/str/file-like
            headers: Extra headers; an explicit Content-Type is respected
            auth: "required", "optional" or "none"
            timeout: Timeout in milliseconds (default: self.timeout_ms)
            retries: Whether to retry retryable failures

        Returns:
            None for 204/empty responses, parsed JSON, or response text

        Raises:
            AppError: Classified error (already reported)
        """
        if auth not in AUTH_MODES:
            raise ValueError(f"Unknown auth mode: {auth!r}")
        if timeout is not None and timeout <= 0:
            raise ValueError(f"Timeout must be a positive number of milliseconds: {timeout!r}")

        method = method.upper()
        url = self.url_for(path)
        timeout_ms = timeout if timeout is not None else self.timeout_ms
        policy = self.retry_policy if retries else NO_RETRY

        def attempt() -> Any:
            return self._attempt(method, url, body, headers or {}, auth, timeout_ms)

        try:
            return with_retry(attempt, policy, self._sleep)
        except Exception as e:
            error = categorize_error(e)
            report_error(self.reporter, error, {"url": url, "method": method})
            if error is e:
                raise
            raise error from e

    def get(self, path: str, **options) -> Any:
        return self.request(path, method="GET", **options)

    def post(self, path: str, body: Any = None, **options) -> Any:
        return self.request(path, method="POST", body=body, **options)

    def put(self, path: str, body: Any = None, **options) -> Any:
        return self.request(path, method="PUT", body=body, **options)

    def patch(self, path: str, body: Any = None, **options) -> Any:
        return self.request(path, method="PATCH", body=body, **options)

    def delete(self, path: str, **options) -> Any:
        return self.request(path, method="DELETE", **options)

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _attempt(
        self,
        method: str,
        url: str,
        body: Any,
        headers: Dict[str, str],
        auth: AuthMode,
        timeout_ms: int,
    ) -> Any:
        token = self._resolve_token(auth)
        response = self._send(method, url, body, headers, token, timeout_ms)

        if response.status_code == 401 and auth != "none" and (token or auth == "required"):
            logger.info("401 from %s %s, refreshing session", method, url)
            token = self._refresh_token()
            response = self._send(method, url, body, headers, token, timeout_ms)
            if response.status_code == 401:
                raise auth_error(extract_error_message(response, _parse_json_or_none(response)))

        if 200 <= response.status_code < 300:
            return parse_response(response)
        raise error_from_response(response)

    def _resolve_token(self, auth: AuthMode) -> Optional[str]:
        if auth == "none":
            return None
        try:
            token = self.session_provider.get_access_token()
        except Exception as e:
            if auth == "required":
                raise auth_error(f"Could not read session: {e}") from e
            logger.warning("Could not read session, continuing as guest: %s", e)
            return None
        if not token and auth == "required":
            raise auth_error("Authentication required")
        return token or None

    def _refresh_token(self) -> str:
        try:
            token = self.session_provider.refresh_session()
        except Exception as e:
            raise auth_error(f"Session refresh failed: {e}") from e
        if not token:
            raise auth_error("Session expired")
        return token

    def _send(
        self,
        method: str,
        url: str,
        body: Any,
        headers: Dict[str, str],
        token: Optional[str],
        timeout_ms: int,
    ) -> requests.Response:
        request_headers = dict(headers)
        if not _has_header(request_headers, "Content-Type"):
            request_headers["Content-Type"] = "application/json"
        if token:
            request_headers["Authorization"] = f"Bearer {token}"

        logger.debug("%s %s", method, url)
        try:
            return self.http.request(
                method,
                url,
                data=_encode_body(body),
                headers=request_headers,
                timeout=timeout_ms / 1000,
            )
        except requests.exceptions.Timeout as e:
            raise api_error(408, f"Request timed out after {timeout_ms}ms") from e
        except requests.exceptions.RequestException as e:
            raise categorize_error(e) from e


def encode_path_segment(value: Any) -> str:
    """Quote a value for use as a single URL path segment."""
    return quote(str(value), safe="")
