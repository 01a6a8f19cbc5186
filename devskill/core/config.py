"""
Service configuration.

Values come from environment variables (a local .env file is loaded first)
with defaults matching the editor extension's settings (idle threshold, analysis size bounds).
"""

import os
from dotenv import load_dotenv
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List

load_dotenv()

DEFAULT_IDLE_THRESHOLD_MS = 60_000
DEFAULT_MIN_ANALYSIS_CHARS = 100
DEFAULT_MAX_ANALYSIS_BYTES = 1024 * 1024  # 1 MiB
DEFAULT_CORS_ORIGINS = "http://localhost:5173"  # Vite default port
DEFAULT_MAX_SESSIONS = 1000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the tracking backend."""

    idle_threshold_ms: int = DEFAULT_IDLE_THRESHOLD_MS
    min_analysis_chars: int = DEFAULT_MIN_ANALYSIS_CHARS
    max_analysis_bytes: int = DEFAULT_MAX_ANALYSIS_BYTES
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: [DEFAULT_CORS_ORIGINS])
    max_sessions: int = DEFAULT_MAX_SESSIONS
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("DEVSKILL_CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
        return cls(
            idle_threshold_ms=_int_env("DEVSKILL_IDLE_THRESHOLD_MS", DEFAULT_IDLE_THRESHOLD_MS),
            min_analysis_chars=_int_env("DEVSKILL_MIN_ANALYSIS_CHARS", DEFAULT_MIN_ANALYSIS_CHARS),
            max_analysis_bytes=_int_env("DEVSKILL_MAX_ANALYSIS_BYTES", DEFAULT_MAX_ANALYSIS_BYTES),
            log_level=os.getenv("DEVSKILL_LOG_LEVEL", "INFO").upper(),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            max_sessions=_int_env("DEVSKILL_MAX_SESSIONS", DEFAULT_MAX_SESSIONS),
            host=os.getenv("DEVSKILL_HOST", DEFAULT_HOST),
            port=_int_env("DEVSKILL_PORT", DEFAULT_PORT),
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings.from_env()
