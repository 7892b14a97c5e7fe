"""
Tests for service bootstrap: authorizer selection, request context and the
/graphql endpoint served through FastAPI.
"""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from opentelemetry.sdk.trace.export import ConsoleSpanExporter

from config.settings import Settings
from main import create_app, create_authorizer
from products_subgraph.authz.authorizer import GrantAuthorizer, OsoCloudAuthorizer
from products_subgraph.telemetry import create_exporter, setup_tracing


@pytest.fixture
def local_settings(tmp_path):
    grants = tmp_path / "grants.yaml"
    grants.write_text(
        "grants:\n"
        "  - actor: {type: User, id: alice}\n"
        "    action: read\n"
        "    resource: {type: Product, id: converse-1}\n"
        "  - actor: {type: User, id: alice}\n"
        "    action: edit\n"
        "    resource: {type: Product, id: converse-1}\n"
    )
    return Settings(authz_backend="local", authz_grants_path=str(grants), variation_latency=0)


@pytest.fixture
def client(local_settings):
    with TestClient(create_app(local_settings)) as c:
        yield c


# ---------------------------------------------------------------------------
# create_authorizer
# ---------------------------------------------------------------------------

class TestCreateAuthorizer:
    def test_local_backend(self, local_settings):
        assert isinstance(create_authorizer(local_settings), GrantAuthorizer)

    @pytest.mark.asyncio
    async def test_local_backend_defaults_to_packaged_grants(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        app_settings = Settings(authz_backend="local")
        assert app_settings.authz_grants_path is None

        authorizer = create_authorizer(app_settings)
        assert await authorizer.authorize(
            {"type": "User", "id": "alice"}, "read", {"type": "Product", "id": "converse-1"}) is True

    def test_oso_backend(self):
        authorizer = create_authorizer(Settings(authz_backend="oso", oso_auth="key", oso_url="https://oso.test"))
        assert isinstance(authorizer, OsoCloudAuthorizer)
        assert authorizer.url == "https://oso.test"

    def test_oso_backend_requires_api_key(self):
        with pytest.raises(RuntimeError):
            create_authorizer(Settings(authz_backend="oso", oso_auth=None))


# ---------------------------------------------------------------------------
# /graphql endpoint
# ---------------------------------------------------------------------------

class TestGraphQLEndpoint:
    def test_user_header_is_used_for_authorization(self, client):
        response = client.post(
            "/graphql",
            json={"query": '{ product(id: "converse-1") { name } }'},
            headers={"x-user-id": "alice"},
        )
        assert response.status_code == 200
        assert response.json()["data"] == {"product": {"name": "Converse Chuck Taylor"}}

    def test_missing_header_is_unauthenticated(self, client):
        response = client.post("/graphql", json={"query": '{ product(id: "converse-1") { name } }'})
        body = response.json()
        assert body["data"] == {"product": {"name": None}}
        assert body["errors"][0]["message"] == "Authentication required"

    def test_mutation_then_query(self, client):
        headers = {"x-user-id": "alice"}
        response = client.post(
            "/graphql",
            json={"query": 'mutation { product(id: "converse-1") { changeName(name: "Chuck 70") } }'},
            headers=headers,
        )
        assert response.json()["data"] == {"product": {"changeName": "Chuck 70"}}

        response = client.post("/graphql", json={"query": '{ product(id: "converse-1") { name } }'}, headers=headers)
        assert response.json()["data"] == {"product": {"name": "Chuck 70"}}

    def test_service_sdl(self, client):
        response = client.post("/graphql", json={"query": "{ _service { sdl } }"})
        assert "@authz" in response.json()["data"]["_service"]["sdl"]


# ---------------------------------------------------------------------------
# Telemetry
# ---------------------------------------------------------------------------

class TestTelemetry:
    def test_disabled_by_default(self):
        assert setup_tracing(None, "localhost", 4318) == []

    def test_console_exporter(self):
        assert isinstance(create_exporter("console", "localhost", 4318), ConsoleSpanExporter)

    def test_unknown_exporter(self):
        with pytest.raises(ValueError):
            create_exporter("jaeger", "localhost", 4318)
