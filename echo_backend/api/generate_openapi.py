import os
from typing import List, Optional

from echo_backend.api.main import create_app
from echo_backend.config.settings import Settings, load_settings
from echo_backend.config.startup_checks import validate_settings
from echo_backend.services.document_cache import DocumentEncoding

_FILENAMES = {
    DocumentEncoding.JSON: "openapi.json",
    DocumentEncoding.YAML: "openapi.yaml",
}


# PUBLIC_INTERFACE
def generate_openapi(output_dir: str = "interfaces", settings: Optional[Settings] = None) -> List[str]:
    """
    Write openapi.json and openapi.yaml to output_dir (interfaces/ by default).

    The files hold exactly the bytes the service serves, taken from the same
    DocumentCache a running app would use.

    Returns:
        The full paths of the written files, JSON first.

    Raises:
        RuntimeError if the settings are invalid; nothing is written then.
    """
    settings = settings or load_settings()
    validate_settings(settings)
    app = create_app(settings)
    cache = app.state.document_cache
    os.makedirs(output_dir, exist_ok=True)
    written = []
    for encoding, filename in _FILENAMES.items():
        output_path = os.path.join(output_dir, filename)
        with open(output_path, "wb") as f:
            f.write(cache.get_serialized(encoding))
        written.append(output_path)
    return written


if __name__ == "__main__":
    for path in generate_openapi():
        print(f"Wrote OpenAPI document to {path}")
