"""
At-most-once serialization of the OpenAPI document.

A DocumentCache owns a private copy of the assembled document and hands out
its JSON and YAML encodings as immutable bytes. Each encoding is computed at
most once per cache: concurrent first callers wait on a per-encoding lock
while one of them serializes, and the result is published only once it is
complete. A failed serialization is remembered and re-raised, never retried.
"""
from __future__ import annotations

import copy
import json
import threading
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Union

import yaml

from echo_backend.services.logger import log_error, time_block

Serializer = Callable[[Dict[str, Any]], bytes]


class DocumentSerializationError(RuntimeError):
    """Raised when the OpenAPI document cannot be encoded."""


# PUBLIC_INTERFACE
class DocumentEncoding(str, Enum):
    """Supported encodings of the published document."""
    JSON = "json"
    YAML = "yaml"


def _to_json(document: Dict[str, Any]) -> bytes:
    return json.dumps(document, ensure_ascii=False).encode("utf-8")


def _to_yaml(document: Dict[str, Any]) -> bytes:
    return yaml.safe_dump(document, sort_keys=False, allow_unicode=True).encode("utf-8")


DEFAULT_SERIALIZERS: Mapping[DocumentEncoding, Serializer] = {
    DocumentEncoding.JSON: _to_json,
    DocumentEncoding.YAML: _to_yaml,
}


# PUBLIC_INTERFACE
class DocumentCache:
    """Thread-safe, memoized serialized forms of one ApiDocument.

    Parameters:
      document: The assembled OpenAPI document. A deep copy is taken so later
        changes to the caller's dict are not observed.
      serializers: Optional mapping of encoding -> callable(dict) -> bytes,
        replacing the defaults (compact JSON, YAML).
    """

    def __init__(
        self,
        document: Dict[str, Any],
        serializers: Optional[Mapping[Union[DocumentEncoding, str], Serializer]] = None,
    ) -> None:
        self._document = copy.deepcopy(document)
        chosen = DEFAULT_SERIALIZERS if serializers is None else serializers
        self._serializers: Dict[DocumentEncoding, Serializer] = {
            DocumentEncoding(key): fn for key, fn in chosen.items()
        }
        self._values: Dict[DocumentEncoding, bytes] = {}
        self._failures: Dict[DocumentEncoding, DocumentSerializationError] = {}
        self._locks: Dict[DocumentEncoding, threading.Lock] = {
            encoding: threading.Lock() for encoding in self._serializers
        }

    def document(self) -> Dict[str, Any]:
        """Return a copy of the cached document."""
        return copy.deepcopy(self._document)

    def computed(self, encoding: Union[DocumentEncoding, str]) -> bool:
        """True once the encoding has been serialized successfully."""
        return self._resolve(encoding) in self._values

    # PUBLIC_INTERFACE
    def get_serialized(self, encoding: Union[DocumentEncoding, str]) -> bytes:
        """Return the document in the given encoding, serializing it on first use.

        Every caller for an encoding receives the same bytes object for the
        lifetime of the cache.

        Raises:
          ValueError for an unknown encoding.
          DocumentSerializationError if the serializer failed (now or on the first attempt).
        """
        key = self._resolve(encoding)
        value = self._values.get(key)
        if value is not None:
            return value

        with self._locks[key]:
            value = self._values.get(key)
            if value is not None:
                return value
            failure = self._failures.get(key)
            if failure is not None:
                raise failure
            value = self._serialize(key)
            self._values[key] = value
        return value

    # PUBLIC_INTERFACE
    def materialize(self) -> None:
        """Serialize every encoding now (eager strategy).

        Raises:
          DocumentSerializationError on the first encoding that fails.
        """
        for encoding in self._serializers:
            self.get_serialized(encoding)

    def _resolve(self, encoding: Union[DocumentEncoding, str]) -> DocumentEncoding:
        try:
            key = DocumentEncoding(encoding)
        except ValueError:
            raise ValueError(f"Unsupported document encoding: {encoding!r}") from None
        if key not in self._serializers:
            raise ValueError(f"No serializer configured for encoding: {key.value!r}")
        return key

    def _serialize(self, encoding: DocumentEncoding) -> bytes:
        serializer = self._serializers[encoding]
        try:
            with time_block("openapi.serialize", encoding=encoding.value):
                value = serializer(self._document)
            if isinstance(value, str):
                value = value.encode("utf-8")
            if not isinstance(value, bytes) or not value:
                raise TypeError(f"serializer returned {type(value).__name__}, expected non-empty bytes")
        except Exception as exc:
            failure = DocumentSerializationError(
                f"Failed to serialize OpenAPI document as {encoding.value}: {exc}"
            )
            self._failures[encoding] = failure
            log_error("openapi.serialize_failed", event="serialize_failed", encoding=encoding.value, error=str(exc))
            raise failure from exc
        return value
