from typing import Any, Dict, Optional
import uuid

from fastapi import Header, Request, Response


def _ensure_request_id(incoming: Optional[str]) -> str:
    """Return a valid request id: re-use incoming if present, otherwise generate."""
    rid = (incoming or "").strip()
    if not rid:
        return str(uuid.uuid4())
    return rid


# PUBLIC_INTERFACE
def request_context(
    request: Request,
    response: Response,
    x_request_id: Optional[str] = Header(default=None, alias="X-Request-ID"),
) -> Dict[str, Any]:
    """Capture the request id, attach it to request.state and the response headers.

    The id tags the debug log line written for each /v1/foo echo and lets a
    client match a served OpenAPI document to the request that fetched it.

    Headers:
      - X-Request-ID: Optional request id supplied by the client; generated if missing.

    Returns:
      Dict context with key: request_id.
    """
    req_id = _ensure_request_id(x_request_id)
    request.state.request_id = req_id
    response.headers["X-Request-ID"] = req_id
    return {"request_id": req_id}
