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
    max_upload_size_mb: int = 10
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://localhost:8080",
    ]
    debug: bool = False

    # Persistence collaborator
    database_url: str = "sqlite+aiosqlite:///./data/jobs.db"

    # Bounds on external calls (seconds); a timeout counts as a failure
    extraction_timeout_seconds: float = 45.0
    enrichment_timeout_seconds: float = 20.0
    briefing_timeout_seconds: float = 30.0
    url_fetch_timeout_seconds: float = 15.0
    url_max_bytes: int = 2_000_000  # stop reading the page body after this many bytes
    url_max_chars: int = 15000  # page text is cut before it reaches the LLM

    # Idle intake sessions are dropped after this long
    session_ttl_minutes: int = 60

    rate_limit_enabled: bool = True
    import_rate_limit: str = "10/minute"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
