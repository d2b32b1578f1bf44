"""
HTTP-level tests for the echo route, the document routes, ReDoc and health.
"""

from __future__ import annotations

import json

import pytest
import yaml
from fastapi.testclient import TestClient

from echo_backend.api.main import create_app
from echo_backend.config.settings import Settings
from echo_backend.services.document_cache import DocumentEncoding

EXAMPLE = {"a": 1, "b": "foo", "c": [0.0, 0.1, 0.2]}


class TestEchoRoute:
    def test_echo_round_trip(self, client):
        response = client.post("/v1/foo", json=EXAMPLE)

        assert response.status_code == 200
        assert response.json() == EXAMPLE

    def test_integer_values_in_float_list_are_accepted(self, client):
        response = client.post("/v1/foo", json={"a": 3, "c": [1, 0.5]})

        assert response.status_code == 200
        assert response.json() == {"a": 3, "c": [1.0, 0.5]}

    def test_optional_field_is_not_added_to_response(self, client):
        response = client.post("/v1/foo", json={"a": 255, "c": []})

        assert response.status_code == 200
        assert response.json() == {"a": 255, "c": []}

    def test_request_id_is_propagated(self, client):
        response = client.post("/v1/foo", json=EXAMPLE, headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"

    def test_request_id_is_generated_when_missing(self, client):
        response = client.post("/v1/foo", json=EXAMPLE)

        assert response.headers["X-Request-ID"]

    @pytest.mark.parametrize(
        "body",
        [
            {"a": "not-a-number"},
            {"a": 256, "c": []},
            {"a": -1, "c": []},
            {"a": 1, "c": ["x"]},
            {"b": "foo", "c": []},
            {"a": "1", "c": []},
            {"a": 1, "c": ["0.5"]},
            {"a": 1, "b": 2, "c": []},
        ],
    )
    def test_malformed_body_is_client_error(self, client, body):
        response = client.post("/v1/foo", json=body)

        assert response.status_code == 422

    def test_decode_failure_never_touches_document_cache(self, lazy_client, counting_serializers):
        response = lazy_client.post("/v1/foo", json={"a": "not-a-number"})

        assert response.status_code == 422
        cache = lazy_client.app.state.document_cache
        assert not cache.computed(DocumentEncoding.JSON)
        assert not cache.computed(DocumentEncoding.YAML)
        assert all(serializer.calls == 0 for serializer in counting_serializers.values())

    def test_successful_echo_never_touches_document_cache(self, lazy_client, counting_serializers):
        lazy_client.post("/v1/foo", json=EXAMPLE)

        assert all(serializer.calls == 0 for serializer in counting_serializers.values())


class TestDocumentRoutes:
    def test_openapi_json(self, client):
        response = client.get("/openapi.json")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert "/v1/foo" in response.json()["paths"]

    def test_openapi_yaml_matches_json(self, client):
        json_body = client.get("/openapi.json").json()
        response = client.get("/openapi.yaml")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/yaml")
        assert yaml.safe_load(response.content) == json_body

    def test_repeated_fetches_are_byte_identical(self, client):
        first = client.get("/openapi.json").content
        second = client.get("/openapi.json").content

        assert first == second
        assert first == client.app.state.document_cache.get_serialized("json")

    def test_lazy_mode_serializes_on_first_request_only(self, lazy_client, counting_serializers):
        assert counting_serializers[DocumentEncoding.JSON].calls == 0

        bodies = [lazy_client.get("/openapi.json").content for _ in range(5)]

        assert len(set(bodies)) == 1
        assert counting_serializers[DocumentEncoding.JSON].calls == 1
        assert counting_serializers[DocumentEncoding.YAML].calls == 0

    def test_eager_mode_serializes_before_first_request(self, counting_serializers):
        app = create_app(Settings(cache_mode="eager"), serializers=counting_serializers)

        assert all(serializer.calls == 1 for serializer in counting_serializers.values())
        with TestClient(app) as test_client:
            test_client.get("/openapi.json")
            test_client.get("/openapi.yaml")
        assert all(serializer.calls == 1 for serializer in counting_serializers.values())

    def test_lazy_serialization_failure_is_server_error_and_not_retried(self):
        calls = []

        def broken(document):
            calls.append(1)
            raise ValueError("boom")

        app = create_app(Settings(cache_mode="lazy"), serializers={"json": broken, "yaml": broken})
        with TestClient(app) as test_client:
            assert test_client.get("/openapi.json").status_code == 500
            assert test_client.get("/openapi.json").status_code == 500
            assert test_client.post("/v1/foo", json=EXAMPLE).status_code == 200

        assert len(calls) == 1

    def test_app_openapi_matches_served_document(self, client):
        served = json.loads(client.get("/openapi.json").content)

        assert client.app.openapi() == served


class TestAuxiliaryRoutes:
    def test_redoc_page_references_json_document(self, client):
        response = client.get("/redoc")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "/openapi.json" in response.text
        assert "redoc" in response.text.lower()

    def test_health(self, lazy_client, counting_serializers):
        response = lazy_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "app": "echo-api",
            "version": "1.0.0",
            "cache_mode": "lazy",
        }
        assert all(serializer.calls == 0 for serializer in counting_serializers.values())

    def test_builtin_docs_routes_are_disabled(self, client):
        assert client.get("/docs").status_code == 404
