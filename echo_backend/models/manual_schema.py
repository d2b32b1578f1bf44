"""
Explicitly constructed JSON schema for Foo.

The 'manual' schema mode publishes this body instead of the one pydantic
derives from the model. Both describe the same shape; keep them in sync when
Foo changes.
"""
import copy
from typing import Any, Dict

from echo_backend.models.schemas import FOO_EXAMPLE, Foo

SCHEMA_NAME = "Foo"


def _integer(minimum: int, maximum: int, title: str, description: str) -> Dict[str, Any]:
    return {
        "type": "integer",
        "minimum": minimum,
        "maximum": maximum,
        "title": title,
        "description": description,
    }


def _nullable_string(title: str, description: str) -> Dict[str, Any]:
    return {
        "anyOf": [{"type": "string"}, {"type": "null"}],
        "default": None,
        "title": title,
        "description": description,
    }


def _number_array(title: str, description: str) -> Dict[str, Any]:
    return {
        "type": "array",
        "items": {"type": "number"},
        "title": title,
        "description": description,
    }


# PUBLIC_INTERFACE
def build_foo_schema() -> Dict[str, Any]:
    """Build the Foo schema body without reflecting over the model.

    Returns:
      A JSON-schema dict with title, properties a/b/c, the required list and
      the documented example.
    """
    return {
        "title": SCHEMA_NAME,
        "description": "Example record echoed back by the API.",
        "type": "object",
        "properties": {
            "a": _integer(0, 255, "A", "Unsigned 8-bit integer."),
            "b": _nullable_string("B", "Optional text value."),
            "c": _number_array("C", "List of floating-point values."),
        },
        "required": ["a", "c"],
        "examples": [copy.deepcopy(FOO_EXAMPLE)],
    }


# PUBLIC_INTERFACE
def describe_foo_schema(mode: str) -> Dict[str, Any]:
    """Return the Foo schema body for the given schema mode.

    Parameters:
      mode: 'derived' (pydantic-generated) or 'manual' (build_foo_schema).

    Raises:
      ValueError for any other mode.
    """
    if mode == "derived":
        return Foo.model_json_schema(ref_template="#/components/schemas/{model}")
    if mode == "manual":
        return build_foo_schema()
    raise ValueError(f"Unknown schema mode: {mode!r}")
