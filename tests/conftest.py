import json
import time

import pytest
import requests

from vibeboard.config.settings import Settings
from vibeboard.models.session_models import CredentialBundle, SessionUser

SECRET = "test-session-secret-0123456789abcdef"


def make_response(status_code, body=None, text=None):
    r = requests.Response()
    r.status_code = status_code
    r.encoding = "utf-8"
    if body is not None:
        r._content = json.dumps(body).encode()
        r.headers["Content-Type"] = "application/json"
    else:
        r._content = (text or "").encode()
    return r


class FakeHTTP:
    """
    Stand-in for requests.Session. Responses are queued per (method, url);
    a queued exception is raised instead of returned.
    """

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, method, url, response):
        self.routes.setdefault((method, url), []).append(response)

    def _dispatch(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        queue = self.routes.get((method, url))
        if not queue:
            raise AssertionError(f"Unexpected {method} {url}")
        result = queue[0] if len(queue) == 1 else queue.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    def get(self, url, **kwargs):
        return self._dispatch("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._dispatch("POST", url, **kwargs)

    def count(self, method, url):
        return len([c for c in self.calls if c[0] == method and c[1] == url])


@pytest.fixture
def settings():
    return Settings(
        client_id="test-client-id",
        client_secret="test-client-secret",
        redirect_uri="http://127.0.0.1:3000/api/auth/callback",
        session_secret=SECRET,
    )


@pytest.fixture
def http():
    return FakeHTTP()


@pytest.fixture
def bundle():
    return CredentialBundle(
        access_token="access-1",
        refresh_token="refresh-1",
        expires_at=int(time.time()) + 3600,
        user=SessionUser(id="user-1", name="Test User", email="test@example.com"),
    )
