import os
from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    gemini_temperature: float = 0.4
    gemini_max_output_tokens: int = 4096
    cors_origins: list[str] = [
        "http://localhost:5000",
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False

    # Session cookie shared with the authentication service
    session_secret: str = "dev-only-secret-not-for-production"
    session_cookie: str = "globalcoach_session"
    session_max_age_days: int = 30
    session_https_only: bool = False

    # slowapi limit strings
    search_rate_limit: str = "20/minute"
    ai_rate_limit: str = "10/minute"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
