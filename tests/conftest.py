"""
Shared fixtures for the echo API tests.

Serializers are wrapped in CountingSerializer so tests can assert how often
the document cache actually encoded the document.
"""

from __future__ import annotations

import threading
import time

import pytest
from fastapi.testclient import TestClient

from echo_backend.api.main import create_app
from echo_backend.config.settings import Settings
from echo_backend.services.document_cache import DEFAULT_SERIALIZERS, DocumentEncoding

_ENV_VARS = (
    "HOST",
    "PORT",
    "OPENAPI_CACHE_MODE",
    "OPENAPI_SCHEMA_MODE",
    "LOG_LEVEL",
    "CORS_ALLOW_ORIGINS",
    "CORS_ALLOW_CREDENTIALS",
    "CORS_ALLOW_METHODS",
    "CORS_ALLOW_HEADERS",
)


class CountingSerializer:
    """Serializer wrapper recording the number of invocations."""

    def __init__(self, fn, delay: float = 0.0):
        self._fn = fn
        self._delay = delay
        self._lock = threading.Lock()
        self.calls = 0

    def __call__(self, document):
        with self._lock:
            self.calls += 1
        if self._delay:
            time.sleep(self._delay)
        return self._fn(document)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Isolate tests from the developer's environment."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def counting_serializers():
    return {
        DocumentEncoding.JSON: CountingSerializer(DEFAULT_SERIALIZERS[DocumentEncoding.JSON]),
        DocumentEncoding.YAML: CountingSerializer(DEFAULT_SERIALIZERS[DocumentEncoding.YAML]),
    }


@pytest.fixture
def lazy_app(counting_serializers):
    return create_app(Settings(cache_mode="lazy"), serializers=counting_serializers)


@pytest.fixture
def client():
    with TestClient(create_app(Settings())) as test_client:
        yield test_client


@pytest.fixture
def lazy_client(lazy_app):
    with TestClient(lazy_app) as test_client:
        yield test_client
