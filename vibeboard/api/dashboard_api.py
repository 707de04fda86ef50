# vibeboard/api/dashboard_api.py
import logging

import requests
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response
from pydantic import ValidationError

from vibeboard.api.deps import build_spotify_client, get_session_manager
from vibeboard.models.dashboard_models import DashboardResponse
from vibeboard.models.session_models import SessionUser
from vibeboard.services.dashboard_service import load_dashboard
from vibeboard.services.session_service import SessionManager
from vibeboard.services.spotify_client import SpotifyAPIError

router = APIRouter()

logger = logging.getLogger(__name__)


@router.get(
    "/dashboard",
    summary="Dashboard data",
    description=(
        "Top tracks / artists, vibe profile, library size, playlists, "
        "recently liked songs and current playback in one payload. "
        "Redirects to /login when there is no usable access token."
    ),
    response_model=DashboardResponse,
)
def dashboard(request: Request, sessions: SessionManager = Depends(get_session_manager)):
    session = sessions.get_valid_session()
    if not session:
        return RedirectResponse(url="/login", status_code=307)

    client = build_spotify_client(request, session.access_token)
    return load_dashboard(client, session.user)


@router.get("/now-playing", summary="Currently playing track")
def now_playing(request: Request, sessions: SessionManager = Depends(get_session_manager)):
    access_token = sessions.get_access_token()
    if not access_token:
        return JSONResponse({"error": "Unauthorized"}, status_code=401)

    try:
        data = build_spotify_client(request, access_token).get_currently_playing()
    except (SpotifyAPIError, requests.RequestException, ValidationError) as e:
        logger.error(f"Error fetching currently playing: {e}")
        return JSONResponse({"error": "Failed to fetch currently playing"}, status_code=500)

    if data is None:
        return Response(status_code=204)

    return JSONResponse(data.model_dump(mode="json"))


@router.get("/me", summary="Logged-in identity", response_model=SessionUser)
def me(sessions: SessionManager = Depends(get_session_manager)):
    session = sessions.get_session()
    if not session:
        return JSONResponse({"error": "Unauthorized"}, status_code=401)
    return session.user
