"""Integration tests for API routes."""

import base64

import pytest

from fakes import FIXED_NOW, ISSUER_CREDENTIALS
from ui import auth
from config import Config
from ui.app import create_app


def _auth_header(username=ISSUER_CREDENTIALS[0], password=ISSUER_CREDENTIALS[1]):
    """Create basic auth header."""
    credentials = base64.b64encode(f"{username}:{password}".encode()).decode()
    return {"Authorization": f"Basic {credentials}"}


class TestHealthRoutes:
    """Tests for health endpoints."""

    @pytest.mark.asyncio
    async def test_health_endpoint(self, client):
        """GET /health returns health status."""
        response = await client.get("/api/v1/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data
        assert len(data["checks"]) == 4

    @pytest.mark.asyncio
    async def test_heartbeat_endpoint(self, client):
        """GET /heartbeat returns uptime and zones."""
        response = await client.get("/api/v1/heartbeat")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["zones"] == ["e", "s"]
        assert "uptime_s" in data


class TestKeyRoutes:
    """Tests for ApiKey endpoints."""

    @pytest.mark.asyncio
    async def test_create_requires_auth(self, client):
        """POST /keys requires authentication."""
        response = await client.post("/api/v1/keys", json={"type": "sk", "env": "test", "marketplace_id": "12"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_create_rejects_wrong_credentials(self, client):
        """Wrong password is rejected."""
        response = await client.post("/api/v1/keys", json={"type": "sk", "env": "test", "marketplace_id": "12"},
                                     headers=_auth_header(password="wrong"))
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_create_and_parse(self, client):
        """Generated keys parse back through the API."""
        response = await client.post("/api/v1/keys", json={"type": "sk", "env": "live", "marketplace_id": "12"},
                                     headers=_auth_header())
        assert response.status_code == 200
        key = response.json()["key"]
        assert key.startswith("sk_live_")

        response = await client.post("/api/v1/keys/parse", json={"key": key})
        assert response.status_code == 200
        assert response.json() == {
            "type": "seck",
            "env": "live",
            "marketplace_id": "12",
            "zone": "e",
            "has_valid_format": True,
            "base_key": "seck_live_",
        }

    @pytest.mark.asyncio
    async def test_create_invalid_type(self, client):
        """Token errors are mapped to 400."""
        response = await client.post("/api/v1/keys",
                                     json={"type": "tooLongType", "env": "test", "marketplace_id": "12"},
                                     headers=_auth_header())
        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "InvalidType"
        assert data["context"] == {"type": "tooLongType"}

    @pytest.mark.asyncio
    async def test_parse_invalid_key(self, client):
        """Invalid keys are reported, not rejected."""
        response = await client.post("/api/v1/keys/parse", json={"key": "garbage"})
        assert response.status_code == 200
        assert response.json()["has_valid_format"] is False
        assert response.json()["base_key"] is None


class TestObjectIdRoutes:
    """Tests for object id endpoints."""

    @pytest.mark.asyncio
    async def test_create_requires_auth(self, client):
        """POST /object-ids requires authentication."""
        response = await client.post("/api/v1/object-ids", json={"prefix": "ast", "marketplace_id": "12"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_create_and_extract(self, client):
        """Generated ids are decoded through the API."""
        response = await client.post("/api/v1/object-ids",
                                     json={"prefix": "ast", "marketplace_id": "12", "env": "live"},
                                     headers=_auth_header())
        assert response.status_code == 200
        object_id = response.json()["id"]
        assert len(object_id) == 24

        response = await client.get(f"/api/v1/object-ids/{object_id}")
        assert response.status_code == 200
        assert response.json() == {
            "object": "ast",
            "marketplace_id": "12",
            "zone": "E",
            "is_live": True,
            "timestamp": FIXED_NOW,
        }

    @pytest.mark.asyncio
    async def test_create_prefix_too_long(self, client):
        """LengthError is mapped to 400."""
        response = await client.post("/api/v1/object-ids",
                                     json={"prefix": "abcdefghijkl", "marketplace_id": "12"},
                                     headers=_auth_header())
        assert response.status_code == 400
        assert response.json()["error"] == "LengthError"

    @pytest.mark.asyncio
    async def test_extract_malformed_id(self, client):
        """Malformed ids give 400 DecodeError."""
        response = await client.get("/api/v1/object-ids/ast_notanid")
        assert response.status_code == 400
        assert response.json()["error"] == "DecodeError"


class TestIssuerCredentials:
    """Tests for issuer credential loading."""

    def test_load_from_environment(self):
        """Both variables are read."""
        environ = {auth.USERNAME_ENV: "issuer", auth.PASSWORD_ENV: "pw"}
        assert auth.load_issuer_credentials(environ) == ("issuer", "pw")

    @pytest.mark.parametrize("environ", [{}, {auth.USERNAME_ENV: "issuer"}, {auth.PASSWORD_ENV: "pw"},
                                         {auth.USERNAME_ENV: "", auth.PASSWORD_ENV: ""}])
    def test_missing_credentials(self, environ):
        """There is no default issuer account."""
        with pytest.raises(RuntimeError):
            auth.load_issuer_credentials(environ)

    def test_app_refuses_to_start_without_credentials(self, monkeypatch):
        """create_app fails when TOKENS_ISSUER_* is unset."""
        monkeypatch.delenv(auth.USERNAME_ENV, raising=False)
        monkeypatch.delenv(auth.PASSWORD_ENV, raising=False)
        with pytest.raises(RuntimeError):
            create_app(Config())

    @pytest.mark.asyncio
    async def test_former_default_credentials_rejected(self, client):
        """admin/admin123 is not accepted."""
        response = await client.post("/api/v1/keys",
                                     json={"type": "sk", "env": "test", "marketplace_id": "12"},
                                     headers=_auth_header("admin", "admin123"))
        assert response.status_code == 401
