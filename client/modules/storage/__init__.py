"""
Blob storage module.

Thin wrapper over the Supabase Storage bucket used for resource files
and staff profile images.

Public API:
- BlobStorageService: upload, remove, download and URL helpers
- LocalFile: A file selected for upload
- UploadedFile / UploadedImage / DownloadResult: Operation results
"""

from .models import LocalFile, UploadedFile, UploadedImage, DownloadResult, format_size_mb
from .service import BlobStorageService, get_blob_storage_service, reset_blob_storage_service

__all__ = [
    "BlobStorageService",
    "get_blob_storage_service",
    "reset_blob_storage_service",
    "LocalFile",
    "UploadedFile",
    "UploadedImage",
    "DownloadResult",
    "format_size_mb",
]
