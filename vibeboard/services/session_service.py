# vibeboard/services/session_service.py
import logging
import time
from typing import Callable, Optional

import jwt
import requests
from pydantic import ValidationError

from vibeboard.config.settings import Settings
from vibeboard.models.session_models import CredentialBundle
from vibeboard.services.session_store import SessionStore
from vibeboard.services.spotify_auth_service import SpotifyAuthClient, SpotifyAuthError

JWT_ALGORITHM = "HS256"
SESSION_KEY = "session"
SESSION_MAX_AGE = 60 * 60 * 24 * 30       # 30 days

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Owns the Credential Bundle: signs it into a JWT, reads it back and
    silently refreshes the Spotify access token when it went stale.

    Verification and refresh failures never leave this class; callers only
    see a bundle / token or None.
    """

    def __init__(self, settings: Settings, store: SessionStore, auth_client: SpotifyAuthClient,
                 clock: Callable[[], float] = time.time):
        self.settings = settings
        self.store = store
        self.auth_client = auth_client
        self.clock = clock

    def create_session(self, bundle: CredentialBundle) -> None:
        now = int(time.time())
        payload = bundle.model_dump()
        payload["iat"] = now
        payload["exp"] = now + SESSION_MAX_AGE

        token = jwt.encode(payload, self.settings.session_secret, algorithm=JWT_ALGORITHM)
        self.store.set(SESSION_KEY, token, max_age=SESSION_MAX_AGE)

    def get_session(self) -> Optional[CredentialBundle]:
        token = self.store.get(SESSION_KEY)
        if not token:
            return None

        try:
            payload = jwt.decode(token, self.settings.session_secret, algorithms=[JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            logger.info("Session token expired")
            return None
        except jwt.InvalidSignatureError:
            logger.warning("Session token signature mismatch")
            return None
        except jwt.InvalidTokenError as e:
            logger.warning(f"Malformed session token: {e}")
            return None

        try:
            return CredentialBundle(**payload)
        except ValidationError as e:
            logger.warning(f"Session payload is not a credential bundle: {e.error_count()} errors")
            return None

    def get_valid_session(self) -> Optional[CredentialBundle]:
        """Session whose access token is usable now, refreshing it once if stale."""
        session = self.get_session()
        if not session:
            return None

        if self.clock() < session.expires_at:
            return session

        # Stale: exactly one refresh attempt, no retry
        try:
            refreshed = self.auth_client.refresh_access_token(session.refresh_token)
        except SpotifyAuthError as e:
            logger.info(f"Token refresh rejected ({e.status_code}), session is logged out")
            return None
        except requests.RequestException as e:
            logger.warning(f"Token refresh failed: {e}")
            return None

        updated = session.model_copy(update={
            "access_token": refreshed.access_token,
            "expires_at": int(self.clock()) + refreshed.expires_in,
            # Spotify does not always rotate the refresh token
            "refresh_token": refreshed.refresh_token or session.refresh_token,
        })
        self.create_session(updated)
        return updated

    def get_access_token(self) -> Optional[str]:
        session = self.get_valid_session()
        return session.access_token if session else None

    def destroy_session(self) -> None:
        self.store.delete(SESSION_KEY)
