from typing import Mapping, Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from echo_backend.api.routes.docs import router as docs_router
from echo_backend.api.routes.v1 import router as v1_router
from echo_backend.config.settings import Settings, load_settings
from echo_backend.services.document_cache import DocumentCache, Serializer
from echo_backend.services.logger import log_info, log_warning, set_level
from echo_backend.services.openapi_document import DocumentConfig, build_openapi_document


async def _log_validation_error(request: Request, exc: RequestValidationError):
    log_warning(
        "request.validation_failed",
        event="validation_failed",
        path=request.url.path,
        method=request.method,
        errors=len(exc.errors()),
    )
    return await request_validation_exception_handler(request, exc)


# PUBLIC_INTERFACE
def create_app(
    settings: Optional[Settings] = None,
    serializers: Optional[Mapping[str, Serializer]] = None,
    document_config: Optional[DocumentConfig] = None,
) -> FastAPI:
    """Build the FastAPI application and its OpenAPI document cache.

    Steps:
      1) Register the v1 router under /v1 and the document routes.
      2) Assemble the OpenAPI document once from the registered routes.
      3) Store a DocumentCache on app.state.document_cache.
      4) In 'eager' cache mode, serialize every encoding before returning.

    Parameters:
      settings: Runtime settings; read from the environment when omitted.
      serializers: Optional encoding -> serializer overrides for the cache.
      document_config: Static document configuration; defaults derive the
        schema mode from settings.

    Returns:
      The configured FastAPI app.

    Raises:
      DocumentAssemblyError / DocumentSerializationError when the document
      cannot be built. Both are fatal: the app must not be served.
    """
    settings = settings or load_settings()
    set_level(settings.log_level)
    config = document_config or DocumentConfig(schema_mode=settings.schema_mode)

    app = FastAPI(
        title=config.title,
        description=config.description,
        version=config.version,
        openapi_url=None,
        docs_url=None,
        redoc_url=None,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    app.add_exception_handler(RequestValidationError, _log_validation_error)

    app.include_router(v1_router, prefix="/v1")
    app.include_router(docs_router)

    @app.get("/health", include_in_schema=False)
    def health_check():
        """Return 200 OK with minimal diagnostics; never touches the document cache."""
        return {
            "status": "ok",
            "app": "echo-api",
            "version": app.version,
            "cache_mode": settings.cache_mode,
        }

    document = build_openapi_document(app.routes, config)
    cache = DocumentCache(document, serializers=serializers)
    if settings.cache_mode == "eager":
        cache.materialize()
    app.state.document_cache = cache
    app.state.settings = settings
    # Keep FastAPI's own openapi() consistent with what is served.
    app.openapi = cache.document

    log_info(
        "startup.app_ready",
        event="app_ready",
        cache_mode=settings.cache_mode,
        schema_mode=config.schema_mode,
        paths=sorted(document.get("paths", {})),
    )
    return app
