"""
Staff directory service.

Public listing of faculty members plus the admin-only create, edit and
delete calls. Profile images go to blob storage before the record is
saved so the record only ever points at an uploaded image.
"""

import logging
from typing import Optional

from shared.config import get_settings
from shared.exceptions import AuthRequiredError
from shared.http import ApiClient, get_api_client
from shared.models import ApiResponse

from modules.session.interfaces import ITokenProvider
from modules.storage.models import LocalFile
from modules.storage.service import BlobStorageService, get_blob_storage_service

from .exceptions import MissingStaffNameError, StaffImageUploadError
from .interfaces import IStaffService
from .models import (
    DepartmentsResponse,
    StaffListResponse,
    StaffMember,
    StaffPage,
    StaffResponse,
)

logger = logging.getLogger(__name__)

STAFF_PATH = "/api/staff"


class StaffService(IStaffService):
    """Implementation of the staff directory client."""

    def __init__(
        self,
        tokens: ITokenProvider,
        api: Optional[ApiClient] = None,
        blobs: Optional[BlobStorageService] = None,
    ):
        self._tokens = tokens
        self._api = api or get_api_client()
        self._blobs = blobs

    @property
    def blobs(self) -> BlobStorageService:
        if self._blobs is None:
            self._blobs = get_blob_storage_service()
        return self._blobs

    def _require_token(self, message: str) -> str:
        token = self._tokens.get_stored_token()
        if not token:
            raise AuthRequiredError(message)
        return token

    async def list_departments(self) -> list[str]:
        data = await self._api.get(
            f"{STAFF_PATH}/departments",
            error_message="Failed to fetch departments",
        )
        return DepartmentsResponse.model_validate(data).data

    async def list_staff(
        self,
        page: int = 1,
        limit: Optional[int] = None,
        search: str = "",
        department: str = "",
    ) -> StaffPage:
        params = {
            "page": page,
            "limit": limit or get_settings().staff_page_size,
            "search": search,
            "department": department,
        }
        data = await self._api.get(
            STAFF_PATH,
            params=params,
            error_message="Failed to fetch staff",
        )
        response = StaffListResponse.model_validate(data)
        return StaffPage(
            items=response.data,
            page=page,
            has_more=response.pagination.has_more,
        )

    async def create(self, member: StaffMember) -> StaffResponse:
        return await self._save(member, staff_id=None)

    async def update(self, staff_id: str, member: StaffMember) -> StaffResponse:
        return await self._save(member, staff_id=staff_id)

    async def delete(self, staff_id: str) -> ApiResponse:
        token = self._require_token("Please login as admin to delete staff")
        data = await self._api.delete(
            f"{STAFF_PATH}/{staff_id}",
            token=token,
            error_message="Failed to delete staff member",
        )
        logger.info(f"Deleted staff member {staff_id}")
        return ApiResponse.model_validate(data)

    async def save_with_image(
        self,
        member: StaffMember,
        image: Optional[LocalFile] = None,
        staff_id: Optional[str] = None,
    ) -> StaffResponse:
        """
        Store a new profile image, then create or update the record.

        Raises:
            AuthRequiredError: No token stored (checked before the upload)
            StaffImageUploadError: The image was refused or could not be stored
        """
        self._require_token("Please login as admin to add/edit staff")

        if image is not None:
            uploaded = await self.blobs.upload_staff_image(image)
            if not uploaded.success:
                raise StaffImageUploadError(uploaded.error or "Failed to upload image")
            member = member.model_copy(update={"image": uploaded.image_url})

        return await self._save(member, staff_id=staff_id)

    async def _save(self, member: StaffMember, staff_id: Optional[str]) -> StaffResponse:
        if not member.name.strip():
            raise MissingStaffNameError()
        token = self._require_token("Please login as admin to add/edit staff")

        if staff_id:
            data = await self._api.put(
                f"{STAFF_PATH}/{staff_id}",
                token=token,
                json=member.to_payload(),
                error_message="Failed to save staff member",
            )
            logger.info(f"Updated staff member {staff_id}")
        else:
            data = await self._api.post(
                STAFF_PATH,
                token=token,
                json=member.to_payload(),
                error_message="Failed to save staff member",
            )
            logger.info(f"Added staff member '{member.name}'")
        return StaffResponse.model_validate(data)
