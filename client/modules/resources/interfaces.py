"""
Resource module interface.

Workflows depend on IResourceService rather than the concrete client.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from shared.models import ApiResponse

from .models import (
    AdminResourcesResponse,
    CounterResult,
    MyResources,
    PendingResourcesResponse,
    ResourceFilters,
    ResourceListing,
    ResourceResponse,
)


@runtime_checkable
class IResourceService(Protocol):
    """
    Interface for resource CRUD and moderation calls.

    Authenticated calls fail locally with AuthRequiredError when no
    token is stored; the backend is never contacted in that case.
    """

    async def upload(self, metadata: dict[str, Any]) -> ResourceResponse:
        """Create a resource; it starts in pending status."""
        ...

    async def list_resources(self, filters: Optional[ResourceFilters] = None) -> ResourceListing:
        """Approved resources matching the filters, grouped by year."""
        ...

    async def list_mine(self) -> MyResources:
        """The caller's own resources grouped by status."""
        ...

    async def delete(self, resource_id: str) -> ApiResponse:
        """Remove a resource. Confirmation is the caller's job."""
        ...

    async def increment_download(self, resource_id: str) -> CounterResult:
        """Best-effort download counter bump. Never raises on remote failure."""
        ...

    async def increment_view(self, resource_id: str) -> CounterResult:
        """Best-effort view counter bump. Never raises on remote failure."""
        ...

    async def list_pending(self) -> PendingResourcesResponse:
        """All pending resources (admin)."""
        ...

    async def approve(self, resource_id: str) -> ResourceResponse:
        """Move a resource from pending to approved (admin)."""
        ...

    async def reject(self, resource_id: str, reason: str) -> ResourceResponse:
        """
        Move a resource from pending to rejected (admin).

        Raises:
            MissingRejectionReasonError: If the reason is blank
        """
        ...

    async def list_all(self, status: str = "all") -> AdminResourcesResponse:
        """Moderation stats and resources filtered by status (admin)."""
        ...
