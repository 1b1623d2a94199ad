"""
Staff module interface.
"""

from typing import Optional, Protocol, runtime_checkable

from shared.models import ApiResponse

from modules.storage.models import LocalFile

from .models import StaffMember, StaffPage, StaffResponse


@runtime_checkable
class IStaffService(Protocol):
    """Interface for the staff directory client."""

    async def list_departments(self) -> list[str]:
        ...

    async def list_staff(
        self,
        page: int = 1,
        limit: Optional[int] = None,
        search: str = "",
        department: str = "",
    ) -> StaffPage:
        """One page of staff matching the search and department filter."""
        ...

    async def create(self, member: StaffMember) -> StaffResponse:
        ...

    async def update(self, staff_id: str, member: StaffMember) -> StaffResponse:
        ...

    async def delete(self, staff_id: str) -> ApiResponse:
        ...

    async def save_with_image(
        self,
        member: StaffMember,
        image: Optional[LocalFile] = None,
        staff_id: Optional[str] = None,
    ) -> StaffResponse:
        """Upload the profile image if given, then create or update."""
        ...
