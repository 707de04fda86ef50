# vibeboard/services/session_store.py
import logging
import secrets
from typing import Dict, List, Optional, Tuple

import redis

logger = logging.getLogger(__name__)


class SessionStore:
    """
    Key-value storage for the signed session token.

    Stores are request-scoped. Backends that talk to the browser collect
    cookie writes and flush them in apply(response).
    """

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str, max_age: int) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError

    def apply(self, response) -> None:
        pass


class MemorySessionStore(SessionStore):
    def __init__(self):
        self.data: Dict[str, str] = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value, max_age):
        self.data[key] = value

    def delete(self, key):
        self.data.pop(key, None)


class _CookieWriter:
    """Pending Set-Cookie operations for the current response."""

    def __init__(self, secure: bool):
        self.secure = secure
        self.pending: List[Tuple[str, Optional[str], int]] = []

    def set_cookie(self, name: str, value: str, max_age: int) -> None:
        self.pending.append((name, value, max_age))

    def delete_cookie(self, name: str) -> None:
        self.pending.append((name, None, 0))

    def flush(self, response) -> None:
        for name, value, max_age in self.pending:
            if value is None:
                response.delete_cookie(name, path="/", secure=self.secure, httponly=True, samesite="lax")
            else:
                response.set_cookie(
                    key=name,
                    value=value,
                    max_age=max_age,
                    path="/",
                    secure=self.secure,
                    httponly=True,
                    samesite="lax",
                )
        self.pending = []


class CookieSessionStore(SessionStore):
    """
    The token itself lives in an HTTP-only cookie named after the key.
    Writes are visible to later reads within the same request.
    """

    def __init__(self, cookies: Dict[str, str], secure: bool = False):
        self.cookies = dict(cookies)
        self.writer = _CookieWriter(secure)

    def get(self, key):
        return self.cookies.get(key)

    def set(self, key, value, max_age):
        self.cookies[key] = value
        self.writer.set_cookie(key, value, max_age)

    def delete(self, key):
        self.cookies.pop(key, None)
        self.writer.delete_cookie(key)

    def apply(self, response):
        self.writer.flush(response)


SESSION_ID_COOKIE = "sid"


class RedisSessionStore(SessionStore):
    """
    Server-side table: the token is kept in Redis under "<sid>:<key>",
    the browser only carries a random sid cookie.
    """

    def __init__(self, redis_client, session_id: Optional[str] = None, secure: bool = False):
        self.redis = redis_client
        self.writer = _CookieWriter(secure)
        self.is_new = session_id is None
        self.session_id = session_id or secrets.token_urlsafe(32)

    def _key(self, key: str) -> str:
        return f"{self.session_id}:{key}"

    def get(self, key):
        if self.is_new:
            return None
        try:
            return self.redis.get(self._key(key))
        except redis.RedisError as e:
            # unreachable store reads as "no session"
            logger.error(f"Redis session read failed: {e}")
            return None

    def set(self, key, value, max_age):
        self.redis.set(self._key(key), value, ex=max_age)
        self.writer.set_cookie(SESSION_ID_COOKIE, self.session_id, max_age)
        self.is_new = False

    def delete(self, key):
        self.redis.delete(self._key(key))
        self.writer.delete_cookie(SESSION_ID_COOKIE)

    def apply(self, response):
        self.writer.flush(response)
