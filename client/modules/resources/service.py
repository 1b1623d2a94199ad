"""
Resource lifecycle service.

Client for /api/resources/*: upload, listing, deletion, counters and the
admin moderation endpoints. The backend enforces authorization and status
transitions; this client only short-circuits calls made without a token.
"""

import logging
from typing import Any, Optional

from shared.exceptions import AuthRequiredError, NetworkFailureError, RemoteRejectionError
from shared.http import ApiClient, get_api_client
from shared.models import ApiResponse

from modules.session.interfaces import ITokenProvider

from .exceptions import MissingRejectionReasonError
from .interfaces import IResourceService
from .models import (
    AdminResourcesResponse,
    CounterKind,
    CounterResult,
    MyResources,
    MyResourcesResponse,
    PendingResourcesResponse,
    ResourceFilters,
    ResourceListing,
    ResourceResponse,
)

logger = logging.getLogger(__name__)

RESOURCES_PATH = "/api/resources"

ADMIN_AUTH_MESSAGE = "Admin authentication required"


class ResourceService(IResourceService):
    """Implementation of the resource lifecycle client."""

    def __init__(self, tokens: ITokenProvider, api: Optional[ApiClient] = None):
        """
        Initialize the resource service.

        Args:
            tokens: Source of the bearer token (usually the SessionStore)
            api: Backend client. Defaults to the shared ApiClient.
        """
        self._tokens = tokens
        self._api = api or get_api_client()

    def _require_token(self, message: str) -> str:
        token = self._tokens.get_stored_token()
        if not token:
            raise AuthRequiredError(message)
        return token

    async def upload(self, metadata: dict[str, Any]) -> ResourceResponse:
        token = self._require_token("Please login to upload resources")
        data = await self._api.post(
            f"{RESOURCES_PATH}/upload",
            token=token,
            json=metadata,
            error_message="Failed to upload resource",
        )
        return ResourceResponse.model_validate(data)

    async def list_resources(self, filters: Optional[ResourceFilters] = None) -> ResourceListing:
        params = filters.to_params() if filters is not None else None
        data = await self._api.get(
            RESOURCES_PATH,
            token=self._tokens.get_stored_token(),
            params=params or None,
            error_message="Failed to fetch resources",
        )
        return ResourceListing.model_validate(data)

    async def list_mine(self) -> MyResources:
        token = self._require_token("Please login to view your posts")
        data = await self._api.get(
            f"{RESOURCES_PATH}/my-posts",
            token=token,
            error_message="Failed to fetch your resources",
        )
        return MyResourcesResponse.model_validate(data).resources

    async def delete(self, resource_id: str) -> ApiResponse:
        token = self._require_token("Please login to delete resources")
        data = await self._api.delete(
            f"{RESOURCES_PATH}/{resource_id}",
            token=token,
            error_message="Failed to delete resource",
        )
        logger.info(f"Deleted resource {resource_id}")
        return ApiResponse.model_validate(data)

    async def increment_download(self, resource_id: str) -> CounterResult:
        return await self._increment(resource_id, CounterKind.DOWNLOAD)

    async def increment_view(self, resource_id: str) -> CounterResult:
        return await self._increment(resource_id, CounterKind.VIEW)

    async def list_pending(self) -> PendingResourcesResponse:
        token = self._require_token(ADMIN_AUTH_MESSAGE)
        data = await self._api.get(
            f"{RESOURCES_PATH}/pending",
            token=token,
            error_message="Failed to fetch pending resources",
        )
        return PendingResourcesResponse.model_validate(data)

    async def approve(self, resource_id: str) -> ResourceResponse:
        token = self._require_token(ADMIN_AUTH_MESSAGE)
        data = await self._api.put(
            f"{RESOURCES_PATH}/{resource_id}/approve",
            token=token,
            error_message="Failed to approve resource",
        )
        logger.info(f"Approved resource {resource_id}")
        return ResourceResponse.model_validate(data)

    async def reject(self, resource_id: str, reason: str) -> ResourceResponse:
        if not reason or not reason.strip():
            raise MissingRejectionReasonError()
        token = self._require_token(ADMIN_AUTH_MESSAGE)
        data = await self._api.put(
            f"{RESOURCES_PATH}/{resource_id}/reject",
            token=token,
            json={"reason": reason.strip()},
            error_message="Failed to reject resource",
        )
        logger.info(f"Rejected resource {resource_id}")
        return ResourceResponse.model_validate(data)

    async def list_all(self, status: str = "all") -> AdminResourcesResponse:
        token = self._require_token(ADMIN_AUTH_MESSAGE)
        data = await self._api.get(
            f"{RESOURCES_PATH}/admin/all",
            token=token,
            params={"status": status},
            error_message="Failed to fetch resources",
        )
        return AdminResourcesResponse.model_validate(data)

    async def _increment(self, resource_id: str, counter: CounterKind) -> CounterResult:
        try:
            await self._api.put(
                f"{RESOURCES_PATH}/{resource_id}/{counter.value}",
                token=self._tokens.get_stored_token(),
                error_message=f"Failed to increment {counter.value} count",
            )
        except (RemoteRejectionError, NetworkFailureError) as e:
            # Counters are advisory; never block viewing or downloading
            logger.warning(f"Failed to increment {counter.value} count for {resource_id}: {e.message}")
            return CounterResult.failed(e.message, resource_id=resource_id, counter=counter)
        return CounterResult.ok(resource_id=resource_id, counter=counter)
