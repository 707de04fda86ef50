# vibeboard/main.py
import logging
from typing import Optional

import requests
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

# === Import Routers ===
from vibeboard.api.auth_api import router as auth_router
from vibeboard.api.dashboard_api import router as dashboard_router
from vibeboard.api.deps import get_redis_client
from vibeboard.config.settings import Settings
from vibeboard.models.dashboard_models import StatusResponse

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, http=None) -> FastAPI:
    """
    App factory. Settings are read once here; missing configuration
    raises ConfigError before the server accepts any request.

        uvicorn vibeboard.main:create_app --factory
    """
    settings = settings or Settings.from_env()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Vibeboard Backend",
        description=(
            "Backend for: "
            "• Spotify OAuth (authorization code) "
            "• Signed session with silent token refresh "
            "• Listening dashboard + genre vibe profile"
        ),
        version="1.0.0"
    )

    app.state.settings = settings
    app.state.http = http or requests.Session()
    if settings.session_backend == "redis":
        app.state.redis = get_redis_client(settings)

    # === CORS Middleware ===
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # === Session cookies: flush the request's store onto the response ===
    @app.middleware("http")
    async def commit_session(request: Request, call_next):
        response = await call_next(request)
        store = getattr(request.state, "session_store", None)
        if store is not None:
            store.apply(response)
        return response

    # === Spotify OAuth ===
    app.include_router(auth_router, prefix="/api/auth", tags=["Auth"])

    # === Dashboard data ===
    app.include_router(dashboard_router, prefix="/api", tags=["Dashboard"])

    @app.get("/", response_model=StatusResponse)
    def root():
        return {
            "status": "ok",
            "message": "Vibeboard backend running with Spotify OAuth + signed sessions"
        }

    logger.info(f"Vibeboard started ({settings.environment}, session backend: {settings.session_backend})")
    return app
