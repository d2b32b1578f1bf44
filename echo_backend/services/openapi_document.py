from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from fastapi.openapi.utils import get_openapi
from starlette.routing import BaseRoute

from echo_backend.models.manual_schema import SCHEMA_NAME, describe_foo_schema
from echo_backend.services.logger import time_block


class DocumentAssemblyError(RuntimeError):
    """Raised when the static API description cannot be assembled."""


def _default_tags() -> List[Dict[str, str]]:
    return [{"name": "bar", "description": "Example operations."}]


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class DocumentConfig:
    """Static configuration of the published API description."""
    title: str = "Example API"
    version: str = "1.0.0"
    description: str = "Really cool description"
    license_name: str = "Apache-2.0"
    license_url: str = "https://www.apache.org/licenses/LICENSE-2.0.html"
    server_url: str = "https://api.example.com"
    security_scheme_name: str = "my_auth_key"
    security_header_name: str = "X-MY-KEY"
    security_description: str = "The **Api key**."
    tags: List[Dict[str, str]] = field(default_factory=_default_tags)
    schema_mode: str = "derived"


def _security_schemes(config: DocumentConfig) -> Dict[str, Any]:
    return {
        config.security_scheme_name: {
            "type": "apiKey",
            "name": config.security_header_name,
            "in": "header",
            "description": config.security_description,
        }
    }


# PUBLIC_INTERFACE
def build_openapi_document(routes: Sequence[BaseRoute], config: DocumentConfig) -> Dict[str, Any]:
    """Assemble the OpenAPI document for the given routes.

    Paths come from the routes that are included in the schema; info, servers,
    tags and security schemes come from config. The Foo schema body is taken
    from the configured schema mode so the derived and manual variants publish
    under the same name.

    Parameters:
      routes: Application routes (typically app.routes).
      config: Static document configuration.

    Returns:
      The ApiDocument as a plain JSON-compatible dict.

    Raises:
      DocumentAssemblyError if the schema mode is unknown or no route references Foo.
    """
    with time_block("openapi.assemble", schema_mode=config.schema_mode):
        try:
            foo_schema = describe_foo_schema(config.schema_mode)
        except ValueError as exc:
            raise DocumentAssemblyError(str(exc)) from exc

        document = get_openapi(
            title=config.title,
            version=config.version,
            description=config.description,
            routes=list(routes),
            tags=[dict(tag) for tag in config.tags],
            servers=[{"url": config.server_url}],
            license_info={"name": config.license_name, "url": config.license_url},
            separate_input_output_schemas=False,
        )

        components = document.setdefault("components", {})
        schemas = components.get("schemas") or {}
        if SCHEMA_NAME not in schemas:
            raise DocumentAssemblyError(
                f"No registered route references the {SCHEMA_NAME} schema; "
                "check that the v1 router is included before assembling the document."
            )
        schemas[SCHEMA_NAME] = foo_schema
        components["schemas"] = schemas
        components["securitySchemes"] = _security_schemes(config)
    return document
