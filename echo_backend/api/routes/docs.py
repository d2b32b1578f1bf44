from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.openapi.docs import get_redoc_html
from fastapi.responses import HTMLResponse

from echo_backend.api.deps.document import get_document_cache
from echo_backend.api.deps.request_context import request_context
from echo_backend.services.document_cache import (
    DocumentCache,
    DocumentEncoding,
    DocumentSerializationError,
)

OPENAPI_JSON_URL = "/openapi.json"
OPENAPI_YAML_URL = "/openapi.yaml"
REDOC_URL = "/redoc"

_MEDIA_TYPES = {
    DocumentEncoding.JSON: "application/json",
    DocumentEncoding.YAML: "application/yaml",
}

router = APIRouter()


def _serve(cache: DocumentCache, encoding: DocumentEncoding) -> Response:
    try:
        body = cache.get_serialized(encoding)
    except DocumentSerializationError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="API document is unavailable",
        ) from exc
    return Response(content=body, media_type=_MEDIA_TYPES[encoding])


# PUBLIC_INTERFACE
@router.get(OPENAPI_JSON_URL, include_in_schema=False)
def serve_json(
    cache: DocumentCache = Depends(get_document_cache),
    context: Dict[str, Any] = Depends(request_context),
) -> Response:
    """Serve the OpenAPI document as JSON."""
    return _serve(cache, DocumentEncoding.JSON)


# PUBLIC_INTERFACE
@router.get(OPENAPI_YAML_URL, include_in_schema=False)
def serve_yaml(
    cache: DocumentCache = Depends(get_document_cache),
    context: Dict[str, Any] = Depends(request_context),
) -> Response:
    """Serve the OpenAPI document as YAML."""
    return _serve(cache, DocumentEncoding.YAML)


# PUBLIC_INTERFACE
@router.get(REDOC_URL, include_in_schema=False, response_class=HTMLResponse)
def redoc(request: Request) -> HTMLResponse:
    """Render the ReDoc reference page for the JSON document."""
    return get_redoc_html(openapi_url=OPENAPI_JSON_URL, title=f"{request.app.title} - ReDoc")
