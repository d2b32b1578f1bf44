"""
Pydantic schema definitions for the example echo API.

Foo is the single record type exchanged by /v1/foo and the only schema
published under components.schemas in the OpenAPI document.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

FOO_EXAMPLE = {"a": 1, "b": "foo", "c": [0.0, 0.1, 0.2]}


# PUBLIC_INTERFACE
class Foo(BaseModel):
    """Example record echoed back by the API.

    Attributes:
      a: Small unsigned integer (0-255).
      b: Optional free-form text.
      c: Sequence of floating-point values.
    """
    model_config = ConfigDict(strict=True, json_schema_extra={"examples": [FOO_EXAMPLE]})

    a: int = Field(..., ge=0, le=255, description="Unsigned 8-bit integer.")
    b: Optional[str] = Field(default=None, description="Optional text value.")
    c: List[float] = Field(..., description="List of floating-point values.")

    @classmethod
    def example(cls) -> "Foo":
        """Return the documented example instance."""
        return cls(**FOO_EXAMPLE)
