# vibeboard/api/deps.py
import redis
from fastapi import Depends, Request

from vibeboard.config.settings import Settings
from vibeboard.services.session_service import SessionManager
from vibeboard.services.session_store import (
    SESSION_ID_COOKIE,
    CookieSessionStore,
    RedisSessionStore,
    SessionStore,
)
from vibeboard.services.spotify_auth_service import SpotifyAuthClient
from vibeboard.services.spotify_client import SpotifyClient


def get_redis_client(settings: Settings):
    return redis.Redis(
        host=settings.redis_host,
        port=settings.redis_port,
        password=settings.redis_password,
        decode_responses=True
    )


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session_store(request: Request, settings: Settings = Depends(get_settings)) -> SessionStore:
    """
    One store per request, remembered on request.state so the middleware
    in main.py can flush its cookie writes onto whatever response goes out.
    """
    store = getattr(request.state, "session_store", None)
    if store is not None:
        return store

    if settings.session_backend == "redis":
        store = RedisSessionStore(
            request.app.state.redis,
            session_id=request.cookies.get(SESSION_ID_COOKIE),
            secure=settings.secure_cookies,
        )
    else:
        store = CookieSessionStore(request.cookies, secure=settings.secure_cookies)

    request.state.session_store = store
    return store


def get_auth_client(request: Request, settings: Settings = Depends(get_settings)) -> SpotifyAuthClient:
    return SpotifyAuthClient(settings, http=request.app.state.http)


def get_session_manager(
    settings: Settings = Depends(get_settings),
    store: SessionStore = Depends(get_session_store),
    auth_client: SpotifyAuthClient = Depends(get_auth_client),
) -> SessionManager:
    return SessionManager(settings, store, auth_client)


def build_spotify_client(request: Request, access_token: str) -> SpotifyClient:
    settings = request.app.state.settings
    return SpotifyClient(access_token, http=request.app.state.http, timeout=settings.http_timeout)
