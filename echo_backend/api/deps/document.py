from fastapi import Request

from echo_backend.services.document_cache import DocumentCache


# PUBLIC_INTERFACE
def get_document_cache(request: Request) -> DocumentCache:
    """Return the DocumentCache owned by the application serving this request.

    The cache is created once by create_app() and stored on app.state; handlers
    only ever read from it.
    """
    cache = getattr(request.app.state, "document_cache", None)
    if cache is None:
        raise RuntimeError("Application has no document cache; build it with create_app()")
    return cache
