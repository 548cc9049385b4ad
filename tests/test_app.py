import pytest
from fastapi.testclient import TestClient

from storefront.core.config import DEV_JWT_SECRET, Settings
from storefront.main import app
from storefront.version import VERSION


def test_health_and_info(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/api/health").json() == {"status": "ok"}
    assert client.get("/v1/_info").json() == {"service": "storefront", "version": VERSION}


def test_metrics_exposed(client):
    client.get("/health")
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "http_request" in resp.text


def test_unknown_route(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Route not found"}


def test_unexpected_error_is_generic_500():
    from storefront.api.deps import get_db

    def broken_db():
        raise RuntimeError("connection string leaked here")
        yield  # pragma: no cover

    app.dependency_overrides[get_db] = broken_db
    try:
        resp = TestClient(app, raise_server_exceptions=False).get("/api/products")
    finally:
        app.dependency_overrides.clear()
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}


def test_production_requires_real_secret():
    with pytest.raises(RuntimeError):
        Settings(ENVIRONMENT="production", JWT_SECRET=DEV_JWT_SECRET).check_production()
    Settings(ENVIRONMENT="production", JWT_SECRET="a-real-secret").check_production()
    Settings(ENVIRONMENT="development", JWT_SECRET=DEV_JWT_SECRET).check_production()
