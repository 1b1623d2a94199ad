"""
Blob storage service.

Uploads and downloads files directly against the Supabase Storage bucket,
independently of the metadata API. Nothing here retries or raises: every
failure comes back as ``success=False`` with an ``error`` for the caller
to surface.
"""

import logging
import secrets
import string
import time
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlparse

import httpx
from supabase import Client

from shared.config import get_settings
from shared.database import get_supabase_client
from shared.models import OperationResult

from .models import DownloadResult, LocalFile, UploadedFile, UploadedImage

logger = logging.getLogger(__name__)

STAFF_FOLDER = "staff-profiles"
CACHE_CONTROL_SECONDS = "3600"
ALLOWED_IMAGE_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/webp"})

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


def unique_object_name(original_name: str, prefix: str = "") -> str:
    """``<prefix><ms-timestamp>-<random>.<ext>`` for a new storage object."""
    ext = original_name.rsplit(".", 1)[-1] if "." in original_name else "bin"
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(6))
    return f"{prefix}{int(time.time() * 1000)}-{suffix}.{ext}"


class BlobStorageService:
    """Client for the platform's object storage bucket."""

    def __init__(
        self,
        client: Optional[Client] = None,
        bucket: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        max_image_size_mb: Optional[int] = None,
    ):
        """
        Initialize the blob storage service.

        Args:
            client: Supabase client. Defaults to the shared anon client.
            bucket: Bucket name. Defaults to settings.storage_bucket.
            http_client: Used to fetch public URLs for download.
            max_image_size_mb: Staff image limit. Defaults to settings.
        """
        settings = get_settings()
        self._client = client or get_supabase_client()
        self._bucket = bucket or settings.storage_bucket
        self._http = http_client or httpx.AsyncClient(timeout=settings.request_timeout)
        self._max_image_bytes = (max_image_size_mb or settings.max_staff_image_size_mb) * 1024 * 1024

    @property
    def bucket(self) -> str:
        return self._bucket

    def _objects(self):
        return self._client.storage.from_(self._bucket)

    async def upload_file(self, file: LocalFile, folder: str = "resources") -> UploadedFile:
        """
        Upload a resource file.

        No validation happens here; the caller checks size and type first.
        """
        path = f"{folder}/{unique_object_name(file.name)}"
        try:
            public_url = self._put(path, file)
        except Exception as e:
            logger.error(f"Storage upload of {file.name} failed: {e}")
            return UploadedFile.failed(str(e) or "Failed to upload file")

        return UploadedFile.ok(
            file_url=public_url,
            file_name=file.name,
            file_size=file.size_mb,
            file_type=file.content_type,
            storage_path=path,
        )

    async def upload_staff_image(self, file: LocalFile) -> UploadedImage:
        """Upload a staff profile picture (JPEG, PNG or WebP, size-limited)."""
        if file.content_type not in ALLOWED_IMAGE_TYPES:
            return UploadedImage.failed("Only JPEG, PNG, and WebP images are allowed")
        if file.size > self._max_image_bytes:
            limit_mb = self._max_image_bytes // (1024 * 1024)
            return UploadedImage.failed(f"Image size must be less than {limit_mb}MB")

        path = f"{STAFF_FOLDER}/{unique_object_name(file.name, prefix='staff-')}"
        try:
            public_url = self._put(path, file)
        except Exception as e:
            logger.error(f"Staff image upload failed: {e}")
            return UploadedImage.failed(str(e) or "Failed to upload image")

        return UploadedImage.ok(image_url=public_url, storage_path=path)

    async def remove(self, path_or_url: str) -> OperationResult:
        """Delete an object given its storage path or its public URL."""
        path = path_or_url
        if "http" in path_or_url:
            path = self.extract_storage_path(path_or_url) or path_or_url

        try:
            self._objects().remove([path])
        except Exception as e:
            logger.error(f"Storage delete of {path} failed: {e}")
            return OperationResult.failed(str(e) or "Failed to delete file")
        return OperationResult.ok()

    async def delete_staff_image(self, storage_path: str) -> OperationResult:
        try:
            self._objects().remove([storage_path])
        except Exception as e:
            logger.error(f"Staff image delete failed: {e}")
            return OperationResult.failed(str(e) or "Failed to delete image")
        return OperationResult.ok()

    def extract_storage_path(self, file_url: Optional[str]) -> Optional[str]:
        """
        Storage path of a public URL, e.g. ``resources/123-abc.pdf``.

        Returns None when the URL does not point into this bucket.
        """
        if not file_url:
            return None
        parts = urlparse(file_url).path.split(f"/{self._bucket}/", 1)
        if len(parts) > 1 and parts[1]:
            return parts[1]
        return None

    def get_download_url(self, file_url: str, file_name: str = "download") -> str:
        """Public URL that makes the storage server send a download disposition."""
        return str(httpx.URL(file_url).copy_set_param("download", file_name))

    def get_preview_url(self, file_url: str) -> str:
        return file_url

    async def download(
        self,
        file_url: Optional[str],
        file_name: str = "download.pdf",
        dest_dir: Union[str, Path] = ".",
    ) -> DownloadResult:
        """Fetch a file and save it as ``dest_dir/file_name``."""
        if not file_url:
            return DownloadResult.failed("No file URL")
        target = Path(dest_dir) / Path(file_name).name
        try:
            response = await self._http.get(file_url)
            response.raise_for_status()
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(response.content)
        except (httpx.HTTPError, OSError) as e:
            logger.error(f"Download of {file_url} failed: {e}")
            return DownloadResult.failed(str(e) or "Failed to download file")
        return DownloadResult.ok(path=target)

    async def file_exists(self, file_path: str) -> bool:
        folder, _, name = file_path.partition("/")
        try:
            entries = self._objects().list(folder, {"search": name})
        except Exception as e:
            logger.error(f"File exists check failed: {e}")
            return False
        return bool(entries)

    async def aclose(self) -> None:
        await self._http.aclose()

    def _put(self, path: str, file: LocalFile) -> str:
        self._objects().upload(
            path,
            file.content,
            {
                "cache-control": CACHE_CONTROL_SECONDS,
                "upsert": "false",
                "content-type": file.content_type,
            },
        )
        return self._objects().get_public_url(path)


# Module-level instance getter
_service_instance: Optional[BlobStorageService] = None


def get_blob_storage_service() -> BlobStorageService:
    """Get the blob storage service singleton."""
    global _service_instance
    if _service_instance is None:
        _service_instance = BlobStorageService()
    return _service_instance


def reset_blob_storage_service() -> None:
    """Reset the blob storage service singleton (for testing)."""
    global _service_instance
    _service_instance = None
