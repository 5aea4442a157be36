"""
Pytest configuration and shared fixtures.
"""

import json
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import pytest
import requests

from matchfeed.client import MatchfeedClient
from matchfeed.logger import get_logger, reset_logger

BASE_URL = "http://backend.test"

_MISSING = object()


def make_response(
    status: int = 200,
    json_body: Any = _MISSING,
    text: Optional[str] = None,
    content: Optional[bytes] = None,
    headers: Optional[Dict[str, str]] = None,
    url: str = BASE_URL,
) -> requests.Response:
    """Build a real requests.Response without touching the network."""
    resp = requests.Response()
    resp.status_code = status
    resp.url = url
    resp.reason = "OK" if status < 400 else "Error"
    if json_body is not _MISSING:
        resp._content = json.dumps(json_body).encode("utf-8")
        resp.headers["Content-Type"] = "application/json"
    elif text is not None:
        resp._content = text.encode("utf-8")
        resp.headers["Content-Type"] = "text/plain"
    else:
        resp._content = content or b""
    resp.encoding = "utf-8"
    for key, value in (headers or {}).items():
        resp.headers[key] = value
    return resp


class FakeSession:
    """
    Stand-in for requests.Session that answers from a route table.

    Each route maps a path to a Response, an exception instance, a list of
    those (consumed in order), or a callable(params, data) returning one.
    """

    def __init__(self, routes: Optional[Dict[str, Any]] = None):
        self.routes: Dict[str, Any] = dict(routes or {})
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def request(self, method, url, timeout=None, params=None, data=None):
        path = urlparse(url).path
        self.calls.append({"method": method, "path": path, "params": params, "data": data, "timeout": timeout})
        if path not in self.routes:
            return make_response(404, text="not found", url=url)
        route = self.routes[path]
        if isinstance(route, list):
            if not route:
                raise AssertionError(f"No more responses queued for {path}")
            route = route.pop(0)
        if callable(route) and not isinstance(route, requests.Response):
            route = route(params or {}, data or {})
        if isinstance(route, BaseException):
            raise route
        route.url = url
        return route

    def close(self):
        self.closed = True

    def calls_to(self, path: str) -> List[Dict[str, Any]]:
        return [c for c in self.calls if c["path"] == path]


@pytest.fixture(autouse=True)
def quiet_logger(tmp_path):
    """Route the global logger to a temp dir with no console output."""
    reset_logger()
    logger = get_logger(log_dir=tmp_path / "logs", enable_console=False)
    yield logger
    reset_logger()


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(session) -> MatchfeedClient:
    return MatchfeedClient(BASE_URL, timeout=5, session=session)


@pytest.fixture
def profile_payload() -> Dict[str, Any]:
    """User-data body with two of five photo slots set."""
    return {
        "name": "Ada",
        "bio": "Likes climbing",
        "blobkeys": ["key-1", "", "key-3", "", ""],
        "profileLink": "https://social.example/ada",
    }


@pytest.fixture
def empty_profile_payload() -> Dict[str, Any]:
    return {"name": "Grace", "bio": "", "blobkeys": ["", "", "", "", ""]}
