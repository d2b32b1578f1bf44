"""
Entrypoint for the echo API service: python -m echo_backend.api

Settings are validated and the application, including its serialized OpenAPI
document, is fully built before uvicorn is started. Any failure on the way is
logged and ends the process with status 1 without opening a socket.
"""

import uvicorn

from echo_backend.api.main import create_app
from echo_backend.config.settings import load_settings
from echo_backend.config.startup_checks import validate_settings
from echo_backend.services.logger import log_error, log_info


# PUBLIC_INTERFACE
def main() -> None:
    """Validate configuration, build the app and serve it on HOST:PORT."""
    settings = load_settings()
    try:
        validate_settings(settings)
        app = create_app(settings)
    except RuntimeError as exc:
        log_error("startup.failed", event="startup_failed", error=str(exc))
        raise SystemExit(1) from exc

    log_info("startup.listen", event="listen", host=settings.host, port=settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
