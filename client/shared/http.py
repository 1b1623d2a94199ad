"""
JSON client for the Unibro REST backend.

Every call issues exactly one HTTP request and either returns the decoded
JSON body or raises a UnibroError carrying a display-ready message.
Raw httpx exceptions and status codes never leak to callers.
"""

import logging
from typing import Any, Optional

import httpx

from .config import get_settings
from .exceptions import NetworkFailureError, RemoteRejectionError

logger = logging.getLogger(__name__)


def bearer_headers(token: Optional[str]) -> dict[str, str]:
    """Build request headers, adding the bearer token when one is given."""
    headers = {"Content-Type": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


class ApiClient:
    """
    Thin async wrapper over httpx for the backend's JSON API.

    No retries are attempted. The timeout comes from settings and
    defaults to none, so a hung request stays pending.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Backend origin. Defaults to settings.api_url.
            http_client: Preconfigured httpx client (tests inject one
                         backed by httpx.MockTransport).
            timeout: Request timeout in seconds. Defaults to
                     settings.request_timeout.
        """
        settings = get_settings()
        self._base_url = (base_url or settings.api_url).rstrip("/")
        if timeout is None:
            timeout = settings.request_timeout
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    def url_for(self, path: str) -> str:
        """Absolute URL for a backend path such as ``/api/auth/login``."""
        return f"{self._base_url}/{path.lstrip('/')}"

    async def request(
        self,
        method: str,
        path: str,
        *,
        token: Optional[str] = None,
        json: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, Any]] = None,
        error_message: str = "Request failed",
    ) -> dict[str, Any]:
        """
        Send one request and return the decoded JSON body.

        Args:
            method: HTTP method
            path: Backend path, joined to the base URL
            token: Bearer token to send, if any
            json: JSON request body
            params: Query string parameters
            error_message: Fallback message when the backend gives none

        Returns:
            Decoded JSON object (empty dict for an empty or non-JSON body)

        Raises:
            RemoteRejectionError: Non-2xx response
            NetworkFailureError: No response was received
        """
        try:
            response = await self._client.request(
                method,
                self.url_for(path),
                headers=bearer_headers(token),
                json=json,
                params=params,
            )
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed without a response: {e}")
            raise NetworkFailureError(str(e)) from e

        data = self._decode(response)

        if not response.is_success:
            message = data.get("message") or error_message
            logger.debug(f"{method} {path} rejected with {response.status_code}: {message}")
            raise RemoteRejectionError(message, response.status_code, payload=data)

        return data

    async def get(self, path: str, **kwargs) -> dict[str, Any]:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs) -> dict[str, Any]:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs) -> dict[str, Any]:
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs) -> dict[str, Any]:
        return await self.request("DELETE", path, **kwargs)

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    @staticmethod
    def _decode(response: httpx.Response) -> dict[str, Any]:
        if not response.content:
            return {}
        try:
            data = response.json()
        except ValueError:
            logger.debug(f"Non-JSON response body from {response.request.url}")
            return {}
        return data if isinstance(data, dict) else {"data": data}


# Module-level instance getter
_client_instance: Optional[ApiClient] = None


def get_api_client() -> ApiClient:
    """Get the API client singleton."""
    global _client_instance
    if _client_instance is None:
        _client_instance = ApiClient()
    return _client_instance


def reset_api_client() -> None:
    """Reset the API client singleton (for testing)."""
    global _client_instance
    _client_instance = None
