"""
Multi-step resource workflows.

These compose the resource service, blob storage and the session into
the flows users actually go through: uploading a file, deleting one of
their posts, moderating the pending queue, and opening or downloading
a resource.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from shared.exceptions import AuthRequiredError
from shared.models import ApiResponse

from modules.session.interfaces import ITokenProvider
from modules.storage.models import DownloadResult, LocalFile
from modules.storage.service import BlobStorageService

from .exceptions import (
    FileStorageError,
    MissingFieldsError,
    MissingFileError,
    TitleMismatchError,
    UnverifiedUserError,
)
from .interfaces import IResourceService
from .models import (
    CounterResult,
    ModerationStats,
    Resource,
    ResourceDraft,
    ResourceResponse,
    ResourceStatus,
)
from .validation import validate_upload_file

logger = logging.getLogger(__name__)


class ResourceUploader:
    """
    Upload flow: validate locally, store the file, then post metadata.

    Every validation happens before the first network call.
    """

    def __init__(
        self,
        resources: IResourceService,
        blobs: BlobStorageService,
        session: ITokenProvider,
    ):
        self._resources = resources
        self._blobs = blobs
        self._session = session

    async def upload(self, draft: ResourceDraft, file: Optional[LocalFile]) -> ResourceResponse:
        """
        Upload a file and create its pending resource.

        Raises:
            MissingFileError: No file selected
            FileTooLargeError / UnsupportedFileTypeError: File rejected locally
            MissingFieldsError: Required metadata blank
            AuthRequiredError: Not signed in
            UnverifiedUserError: Email not verified
            FileStorageError: The file could not be stored
            RemoteRejectionError / NetworkFailureError: Metadata call failed
        """
        if file is None:
            raise MissingFileError()
        validate_upload_file(file)

        missing = draft.missing_fields()
        if missing:
            raise MissingFieldsError(missing)

        user = self._session.get_stored_user()
        if user is None or not self._session.get_stored_token():
            raise AuthRequiredError("Please login to upload resources")
        if not user.is_verified:
            raise UnverifiedUserError()

        stored = await self._blobs.upload_file(file, draft.resource_type.folder)
        if not stored.success:
            raise FileStorageError(stored.error or "Failed to upload file")

        metadata = {
            **draft.to_wire(),
            "fileUrl": stored.file_url,
            "fileName": stored.file_name,
            "fileSize": stored.file_size,
            "fileType": stored.file_type,
            "storagePath": stored.storage_path,
            "uploaderName": user.full_name,
            "uploaderEmail": user.email,
        }
        response = await self._resources.upload(metadata)
        logger.info(f"Uploaded {draft.resource_type.value} '{draft.title}' for review")
        return response


def requires_confirmation(resource: Resource) -> bool:
    """Whether deleting this resource needs the typed title."""
    return resource.requires_delete_confirmation


class ResourceDeleter:
    """
    Owner-side delete with the confirmation gate.

    Rejected resources are deleted straight away. Pending and approved
    ones require the exact title (surrounding whitespace ignored).
    """

    def __init__(self, resources: IResourceService):
        self._resources = resources

    async def delete(self, resource: Resource, confirmation: Optional[str] = None) -> ApiResponse:
        """
        Raises:
            TitleMismatchError: Confirmation missing or different from the title
        """
        if requires_confirmation(resource):
            if confirmation is None or confirmation.strip() != resource.title.strip():
                raise TitleMismatchError()
        return await self._resources.delete(resource.id)


class ModerationQueue:
    """
    Admin view of pending resources and dashboard stats.

    Local copies move through Resource.with_status, so a resource never
    returns to pending and a rejected copy always carries its reason.
    Dashboard counts follow each decision without another round trip.
    """

    def __init__(self, resources: IResourceService):
        self._resources = resources
        self.pending: list[Resource] = []
        self.stats = ModerationStats()
        self.decided: dict[str, Resource] = {}

    async def load(self) -> list[Resource]:
        response = await self._resources.list_pending()
        self.pending = list(response.resources)
        return self.pending

    async def refresh_stats(self) -> ModerationStats:
        response = await self._resources.list_all()
        self.stats = response.stats
        return self.stats

    async def approve(self, resource: Resource) -> Resource:
        approved = resource.with_status(ResourceStatus.APPROVED)
        response = await self._resources.approve(resource.id)
        return self._settle(self._prefer_remote(response, approved))

    async def reject(self, resource: Resource, reason: str) -> Resource:
        rejected = resource.with_status(ResourceStatus.REJECTED, reason)
        response = await self._resources.reject(resource.id, rejected.rejection_reason)
        result = self._prefer_remote(response, rejected)
        if not result.rejection_reason:
            result = result.model_copy(update={"rejection_reason": rejected.rejection_reason})
        return self._settle(result)

    @staticmethod
    def _prefer_remote(response: ResourceResponse, local: Resource) -> Resource:
        remote = response.resource
        if remote is not None and remote.status == local.status:
            return remote
        return local

    def _settle(self, resource: Resource) -> Resource:
        self.pending = [item for item in self.pending if item.id != resource.id]
        self.decided[resource.id] = resource
        self.stats = self.stats.after_decision(resource.status)
        return resource


class ResourceViewer:
    """
    Opening and downloading resources.

    The counter bump runs first and its outcome is returned alongside,
    but it never changes whether the primary action happens.
    """

    def __init__(self, resources: IResourceService, blobs: BlobStorageService):
        self._resources = resources
        self._blobs = blobs

    async def view(self, resource: Resource) -> tuple[str, CounterResult]:
        """Record a view and return the preview URL."""
        counter = await self._resources.increment_view(resource.id)
        return self._blobs.get_preview_url(resource.file_url), counter

    async def download(
        self,
        resource: Resource,
        dest_dir: Union[str, Path] = ".",
    ) -> tuple[DownloadResult, CounterResult]:
        """Record a download and save the file under ``dest_dir``."""
        counter = await self._resources.increment_download(resource.id)
        file_name = resource.file_name or f"{resource.title}.pdf"
        result = await self._blobs.download(resource.file_url, file_name, dest_dir)
        return result, counter
