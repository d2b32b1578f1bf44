"""
Environment-driven settings for the echo API service.

Values are read once via load_settings() and carried around as an immutable
Settings object; nothing else in the service reads the environment directly.
"""
import os
from dataclasses import dataclass, field
from typing import List, Optional

CACHE_MODES = ("eager", "lazy")
SCHEMA_MODES = ("derived", "manual")
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "TRACE")


def _env_bool(name: str, default: bool = False) -> bool:
    """Parse boolean-like environment variable values."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return str(raw).strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: Optional[List[str]] = None) -> List[str]:
    """Parse a comma-separated list environment variable, ignoring empties."""
    raw = os.getenv(name)
    if raw is None:
        return list(default or [])
    parts = [p.strip() for p in raw.split(",")]
    return [p for p in parts if p]


def _env_int(name: str, default: int) -> int:
    """Parse an integer environment variable; non-numeric values yield -1 so validation rejects them."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return -1


def _env_str(name: str, default: str) -> str:
    return (os.getenv(name) or default).strip().lower()


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class Settings:
    """Runtime settings for the HTTP service.

    Attributes:
      host: Interface the server binds to.
      port: TCP port the server binds to.
      cache_mode: 'eager' serializes the OpenAPI document before serving,
        'lazy' serializes each encoding on first request.
      schema_mode: 'derived' uses the pydantic-generated Foo schema,
        'manual' uses the explicitly constructed one.
      log_level: Level name applied to the application logger.
      cors_*: CORS middleware configuration.
    """
    host: str = "0.0.0.0"
    port: int = 3000
    cache_mode: str = "eager"
    schema_mode: str = "derived"
    log_level: str = "INFO"
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = True
    cors_allow_methods: List[str] = field(default_factory=lambda: ["*"])
    cors_allow_headers: List[str] = field(default_factory=lambda: ["*"])


# PUBLIC_INTERFACE
def load_settings() -> Settings:
    """Build Settings from environment variables.

    Environment variables:
      - HOST, PORT: bind address (default 0.0.0.0:3000)
      - OPENAPI_CACHE_MODE: 'eager' | 'lazy' (default 'eager')
      - OPENAPI_SCHEMA_MODE: 'derived' | 'manual' (default 'derived')
      - LOG_LEVEL: logger level name (default INFO)
      - CORS_ALLOW_ORIGINS, CORS_ALLOW_CREDENTIALS, CORS_ALLOW_METHODS, CORS_ALLOW_HEADERS

    Values are not validated here; see config.startup_checks.validate_settings.
    """
    return Settings(
        host=(os.getenv("HOST") or "0.0.0.0").strip(),
        port=_env_int("PORT", 3000),
        cache_mode=_env_str("OPENAPI_CACHE_MODE", "eager"),
        schema_mode=_env_str("OPENAPI_SCHEMA_MODE", "derived"),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
        cors_allow_origins=_env_list("CORS_ALLOW_ORIGINS", default=["*"]),
        cors_allow_credentials=_env_bool("CORS_ALLOW_CREDENTIALS", default=True),
        cors_allow_methods=_env_list("CORS_ALLOW_METHODS", default=["*"]),
        cors_allow_headers=_env_list("CORS_ALLOW_HEADERS", default=["*"]),
    )
