# vibeboard/api/auth_api.py
import logging
import time
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import RedirectResponse

from vibeboard.api.deps import build_spotify_client, get_auth_client, get_session_manager
from vibeboard.models.session_models import CredentialBundle, SessionUser
from vibeboard.services.session_service import SessionManager
from vibeboard.services.spotify_auth_service import SpotifyAuthClient, SpotifyAuthError
from vibeboard.services.spotify_client import SpotifyAPIError

router = APIRouter()

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"


def _login_redirect(error: Optional[str] = None) -> RedirectResponse:
    url = f"{LOGIN_PATH}?{urlencode({'error': error})}" if error else LOGIN_PATH
    return RedirectResponse(url=url, status_code=307)


def safe_return_path(state: Optional[str]) -> str:
    """Only local paths are allowed as post-login targets."""
    if not state or not state.startswith("/") or state.startswith("//") or "\\" in state:
        return "/"
    return state


@router.get(
    "/login",
    summary="Spotify Login",
    description="Redirects to Spotify's authorize page. callbackUrl is carried in state.",
)
def login(
    callbackUrl: str = Query("/", description="Where to go after login"),
    auth_client: SpotifyAuthClient = Depends(get_auth_client),
):
    url = auth_client.build_authorize_url(state=safe_return_path(callbackUrl))
    return RedirectResponse(url=url, status_code=307)


@router.get(
    "/callback",
    summary="Spotify OAuth Callback",
    description="Exchanges the code for tokens, fetches the profile and creates the session.",
)
def callback(
    request: Request,
    code: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    error: Optional[str] = Query(None),
    auth_client: SpotifyAuthClient = Depends(get_auth_client),
    sessions: SessionManager = Depends(get_session_manager),
):
    if error:
        return _login_redirect(error)

    if not code:
        return _login_redirect("no_code")

    try:
        # 1. code -> tokens
        try:
            tokens = auth_client.exchange_code(code)
        except SpotifyAuthError:
            return _login_redirect("token_exchange_failed")

        # 2. identity snapshot
        try:
            profile = build_spotify_client(request, tokens.access_token).get_profile()
        except SpotifyAPIError as e:
            logger.error(f"Profile fetch failed: {e.status_code}")
            return _login_redirect("profile_fetch_failed")

        # 3. signed session
        sessions.create_session(CredentialBundle(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token or "",
            expires_at=int(time.time()) + tokens.expires_in,
            user=SessionUser(id=profile.id, name=profile.display_name, email=profile.email),
        ))
    except Exception as e:
        logger.error(f"Auth callback error: {e}")
        return _login_redirect("unknown")

    logger.info(f"Session created for Spotify user {profile.id}")
    return RedirectResponse(url=safe_return_path(state), status_code=307)


@router.get("/logout", summary="Logout")
def logout(sessions: SessionManager = Depends(get_session_manager)):
    sessions.destroy_session()
    return _login_redirect()
