from typing import Any, Dict

from fastapi import APIRouter, Depends

from echo_backend.api.deps.request_context import request_context
from echo_backend.models.schemas import Foo
from echo_backend.services.logger import log_debug

router = APIRouter()


# PUBLIC_INTERFACE
@router.post(
    "/foo",
    operation_id="foo",
    tags=["bar"],
    summary="Echo a Foo record",
    description="Example method",
    response_model=Foo,
    response_model_exclude_unset=True,
    response_description="successful operation",
)
def foo(payload: Foo, context: Dict[str, Any] = Depends(request_context)) -> Foo:
    """Return the decoded record unchanged.

    Bodies that do not match Foo are rejected by request validation with 422
    before this handler runs.
    """
    log_debug("v1.foo", event="echo", request_id=context.get("request_id"))
    return payload
