"""
Shared fixtures.

Every test starts with empty in-memory stores, no database, the default token
verifier and an events log inside the test's tmp directory.
"""

import json
from http import HTTPStatus
from typing import Any, Dict, List, Optional

import pytest
import requests

from api.auth import set_token_verifier
from groceries import db, events, meal_plans, recipes, store


def _reset_state() -> None:
    store.clear_store()
    meal_plans.clear_meal_plans()
    recipes.clear_recipes()


@pytest.fixture(autouse=True)
def isolated_state(tmp_path, monkeypatch):
    """Empty stores and a per-test events log."""
    monkeypatch.setattr(events, "EVENT_LOG_FILE", tmp_path / "events.log")
    _reset_state()
    yield
    db.configure_database(None)
    set_token_verifier(None)
    _reset_state()


@pytest.fixture
def events_file(tmp_path):
    """Path of the events log used by the current test."""
    return tmp_path / "events.log"


def read_events(path) -> List[Dict[str, Any]]:
    if not path.exists():
        return []
    with open(path, "r", encoding="utf-8") as f:
        return [json.loads(line) for line in f if line.strip()]


@pytest.fixture
def logged_events(events_file):
    """Callable returning the events written so far."""
    return lambda: read_events(events_file)


# ---------------------------------------------------------------------------
# HTTP fakes for client tests
# ---------------------------------------------------------------------------

def build_response(
    status: int,
    body: Any = None,
    text: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
) -> requests.Response:
    """Real requests.Response with a JSON body, a text body or no body."""
    response = requests.Response()
    response.status_code = status
    response.reason = HTTPStatus(status).phrase
    response.encoding = "utf-8"
    if body is not None:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    elif text is not None:
        response._content = text.encode("utf-8")
        response.headers["Content-Type"] = "text/plain; charset=utf-8"
    else:
        response._content = b""
    response.headers.update(headers or {})
    return response


class FakeHttpSession:
    """
    Stand-in for requests.Session.

    Returns (or raises) the queued results in order and records every call.
    """

    def __init__(self):
        self.results: List[Any] = []
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def queue(self, *results) -> "FakeHttpSession":
        self.results.extend(results)
        return self

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self.results:
            raise AssertionError(f"Unexpected request: {method} {url}")
        result = self.results.pop(0)
        if isinstance(result, BaseException):
            raise result
        return result

    def close(self):
        self.closed = True

    def auth_headers(self) -> List[Optional[str]]:
        """Authorization header of each call (None when absent)."""
        return [call["headers"].get("Authorization") for call in self.calls]


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def http():
    return FakeHttpSession()


@pytest.fixture
def sleeps():
    """List collecting every sleep (in seconds) requested by the client."""
    return []
