import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel


class ConfigError(Exception):
    """Raised at startup when required configuration is missing or unusable."""


def load_env():
    if os.getenv("ENVIRONMENT") == "production":
        return

    base_dir = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    env_path = os.path.join(base_dir, ".env")

    if os.path.exists(env_path):
        load_dotenv(env_path)


MIN_SECRET_LENGTH = 32

REQUIRED_VARS = {
    "client_id": "SPOTIFY_CLIENT_ID",
    "client_secret": "SPOTIFY_CLIENT_SECRET",
    "redirect_uri": "SPOTIFY_REDIRECT_URI",
    "session_secret": "SESSION_SECRET",
}


class Settings(BaseModel):
    # Spotify
    client_id: str
    client_secret: str
    redirect_uri: str

    # Session
    session_secret: str
    session_backend: str = "cookie"
    environment: str = "development"

    # Redis (only for SESSION_BACKEND=redis)
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: Optional[str] = None

    http_timeout: float = 10.0
    cors_origins: List[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    @property
    def secure_cookies(self) -> bool:
        return self.environment == "production"

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build the settings once at startup.
        Missing Spotify credentials or session secret are a misconfiguration,
        there is no fallback value.
        """
        load_env()

        values = {field: os.getenv(var) for field, var in REQUIRED_VARS.items()}
        missing = [REQUIRED_VARS[field] for field, value in values.items() if not value]
        if missing:
            raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

        origins = os.getenv("CORS_ORIGINS")
        if origins:
            values["cors_origins"] = [o.strip() for o in origins.split(",") if o.strip()]

        values["session_backend"] = os.getenv("SESSION_BACKEND", "cookie")
        values["environment"] = os.getenv("ENVIRONMENT", "development")
        values["redis_host"] = os.getenv("REDIS_HOST", "localhost")
        values["redis_password"] = os.getenv("REDIS_PASSWORD")
        values["log_level"] = os.getenv("LOG_LEVEL", "INFO")

        try:
            values["redis_port"] = int(os.getenv("REDIS_PORT", "6379"))
            values["http_timeout"] = float(os.getenv("HTTP_TIMEOUT", "10"))
        except ValueError as e:
            raise ConfigError(f"Invalid numeric setting: {e}")

        settings = cls(**values)
        settings.validate_secrets()
        return settings

    def validate_secrets(self) -> None:
        if len(self.session_secret) < MIN_SECRET_LENGTH:
            raise ConfigError(f"SESSION_SECRET must be at least {MIN_SECRET_LENGTH} characters")

        if self.session_backend not in ("cookie", "redis"):
            raise ConfigError(f"Unknown SESSION_BACKEND: {self.session_backend}")
