"""Tests for shared/http.py."""

import httpx
import pytest

from shared.exceptions import NetworkFailureError, RemoteRejectionError
from shared.http import ApiClient, bearer_headers, get_api_client, reset_api_client


class TestBearerHeaders:
    def test_without_token(self):
        assert bearer_headers(None) == {"Content-Type": "application/json"}

    def test_with_token(self):
        headers = bearer_headers("abc")
        assert headers["Authorization"] == "Bearer abc"


class TestApiClient:
    def test_url_for_joins_path(self):
        client = ApiClient(base_url="http://api.test/")
        assert client.url_for("/api/auth/login") == "http://api.test/api/auth/login"
        assert client.url_for("api/staff") == "http://api.test/api/staff"

    @pytest.mark.asyncio
    async def test_returns_decoded_body(self, api, backend):
        backend.on("GET", "/api/ping", json={"success": True, "value": 3})

        data = await api.get("/api/ping")

        assert data == {"success": True, "value": 3}

    @pytest.mark.asyncio
    async def test_sends_bearer_token_and_json(self, api, backend):
        backend.on("POST", "/api/echo", json={"success": True})

        await api.post("/api/echo", token="tok", json={"a": 1})

        request = backend.last_request
        assert request.headers["Authorization"] == "Bearer tok"
        assert backend.body() == {"a": 1}

    @pytest.mark.asyncio
    async def test_no_authorization_header_without_token(self, api, backend):
        backend.on("GET", "/api/ping", json={"success": True})

        await api.get("/api/ping")

        assert "Authorization" not in backend.last_request.headers

    @pytest.mark.asyncio
    async def test_sends_query_params(self, api, backend):
        backend.on("GET", "/api/staff", json={"success": True})

        await api.get("/api/staff", params={"page": 2, "search": "ada"})

        assert backend.last_request.url.params["page"] == "2"
        assert backend.last_request.url.params["search"] == "ada"

    @pytest.mark.asyncio
    async def test_rejection_uses_backend_message(self, api, backend):
        backend.on("POST", "/api/auth/login", status=401, json={"success": False, "message": "Invalid credentials"})

        with pytest.raises(RemoteRejectionError) as exc_info:
            await api.post("/api/auth/login", error_message="Login failed")

        assert exc_info.value.message == "Invalid credentials"
        assert exc_info.value.status_code == 401
        assert exc_info.value.payload["success"] is False

    @pytest.mark.asyncio
    async def test_rejection_falls_back_to_operation_message(self, api, backend):
        backend.on("POST", "/api/auth/login", status=500, json={"success": False})

        with pytest.raises(RemoteRejectionError, match="Login failed"):
            await api.post("/api/auth/login", error_message="Login failed")

    @pytest.mark.asyncio
    async def test_rejection_with_empty_body(self, api, backend):
        backend.on("DELETE", "/api/things/1", status=502)

        with pytest.raises(RemoteRejectionError) as exc_info:
            await api.delete("/api/things/1", error_message="Failed to delete")

        assert exc_info.value.message == "Failed to delete"
        assert exc_info.value.payload == {}

    @pytest.mark.asyncio
    async def test_transport_error_becomes_network_failure(self, api, backend):
        backend.on("GET", "/api/ping", error=httpx.ConnectError("connection refused"))

        with pytest.raises(NetworkFailureError) as exc_info:
            await api.get("/api/ping")

        assert exc_info.value.message == "Unable to reach the server. Please try again."
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_non_object_body_is_wrapped(self, api, backend):
        backend.on("GET", "/api/staff/departments", json=["CS", "EE"])

        data = await api.get("/api/staff/departments")

        assert data == {"data": ["CS", "EE"]}

    @pytest.mark.asyncio
    async def test_empty_success_body(self, api, backend):
        backend.on("PUT", "/api/resources/1/view")

        assert await api.put("/api/resources/1/view") == {}


class TestApiClientSingleton:
    def test_get_api_client_caches(self):
        assert get_api_client() is get_api_client()

    def test_reset_api_client(self):
        first = get_api_client()
        reset_api_client()
        assert get_api_client() is not first
