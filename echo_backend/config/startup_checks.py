from echo_backend.config.settings import CACHE_MODES, LOG_LEVELS, SCHEMA_MODES, Settings
from echo_backend.services.logger import log_info


# PUBLIC_INTERFACE
def validate_settings(settings: Settings) -> None:
    """
    Validate settings before the application is built.

    This function performs:
      1) Cache mode check: OPENAPI_CACHE_MODE must be 'eager' or 'lazy'.
      2) Schema mode check: OPENAPI_SCHEMA_MODE must be 'derived' or 'manual'.
      3) Port check: PORT must be an integer in 1..65535.
      4) Log level check: LOG_LEVEL must be a name uvicorn accepts.
      5) Logs the effective configuration.

    Raises:
      RuntimeError with a helpful message if configuration is invalid.
    """
    if settings.cache_mode not in CACHE_MODES:
        raise RuntimeError(
            f"Configuration error: OPENAPI_CACHE_MODE={settings.cache_mode!r} is not supported.\n"
            "To fix: set OPENAPI_CACHE_MODE='eager' (serialize at startup) or 'lazy' (serialize on first request)."
        )

    if settings.schema_mode not in SCHEMA_MODES:
        raise RuntimeError(
            f"Configuration error: OPENAPI_SCHEMA_MODE={settings.schema_mode!r} is not supported.\n"
            "To fix: set OPENAPI_SCHEMA_MODE='derived' or 'manual'."
        )

    if not 1 <= settings.port <= 65535:
        raise RuntimeError(
            "Configuration error: PORT must be an integer between 1 and 65535.\n"
            "To fix: set PORT=<port>, or unset it to use the default 3000."
        )

    if settings.log_level not in LOG_LEVELS:
        raise RuntimeError(
            f"Configuration error: LOG_LEVEL={settings.log_level!r} is not supported.\n"
            "To fix: set LOG_LEVEL to one of CRITICAL, ERROR, WARNING, INFO, DEBUG or TRACE."
        )

    log_info(
        "startup.config",
        event="startup_config",
        host=settings.host,
        port=settings.port,
        cache_mode=settings.cache_mode,
        schema_mode=settings.schema_mode,
        log_level=settings.log_level,
        cors_allow_origins=settings.cors_allow_origins,
        cors_allow_credentials=settings.cors_allow_credentials,
        cors_allow_methods=settings.cors_allow_methods,
        cors_allow_headers=settings.cors_allow_headers,
    )
