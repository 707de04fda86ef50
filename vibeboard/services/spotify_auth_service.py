# vibeboard/services/spotify_auth_service.py
import logging
from urllib.parse import urlencode

import requests

from vibeboard.config.settings import Settings
from vibeboard.models.session_models import TokenResponse

AUTHORIZE_URL = "https://accounts.spotify.com/authorize"
TOKEN_URL = "https://accounts.spotify.com/api/token"

SPOTIFY_SCOPES = " ".join([
    "user-top-read",
    "user-read-recently-played",
    "user-library-read",
    "user-read-playback-state",
])

logger = logging.getLogger(__name__)


class SpotifyAuthError(Exception):
    """Token endpoint answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Spotify token endpoint error ({status_code}): {body}")


class SpotifyAuthClient:
    """
    Authorization-code flow against accounts.spotify.com.
    Client id / secret go in HTTP Basic auth, grant parameters are form-encoded.
    """

    def __init__(self, settings: Settings, http=None):
        self.settings = settings
        self.http = http or requests.Session()

    def build_authorize_url(self, state: str) -> str:
        params = {
            "client_id": self.settings.client_id,
            "response_type": "code",
            "redirect_uri": self.settings.redirect_uri,
            "scope": SPOTIFY_SCOPES,
            "state": state,
        }
        return f"{AUTHORIZE_URL}?{urlencode(params)}"

    def exchange_code(self, code: str) -> TokenResponse:
        return self._request_token({
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self.settings.redirect_uri,
        })

    def refresh_access_token(self, refresh_token: str) -> TokenResponse:
        return self._request_token({
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
        })

    def _request_token(self, payload: dict) -> TokenResponse:
        r = self.http.post(
            TOKEN_URL,
            data=payload,
            auth=(self.settings.client_id, self.settings.client_secret),
            timeout=self.settings.http_timeout,
        )

        if not 200 <= r.status_code < 300:
            logger.error(f"Token request ({payload['grant_type']}) failed: {r.status_code} {r.text}")
            raise SpotifyAuthError(r.status_code, r.text)

        try:
            return TokenResponse(**r.json())
        except ValueError:
            # not JSON, or JSON without access_token / expires_in
            logger.error(f"Token request ({payload['grant_type']}) returned an unusable body")
            raise SpotifyAuthError(r.status_code, r.text)
