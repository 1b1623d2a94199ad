"""
Local checks on files selected for upload.
"""

import re
from typing import Optional

from shared.config import get_settings

from modules.storage.models import LocalFile

from .exceptions import FileTooLargeError, UnsupportedFileTypeError

ALLOWED_MIME_TYPES = frozenset(
    {
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/vnd.ms-powerpoint",
        "application/vnd.openxmlformats-officedocument.presentationml.presentation",
        "application/vnd.ms-excel",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "text/plain",
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/gif",
        "image/webp",
        "application/zip",
        "application/x-rar-compressed",
        "application/x-7z-compressed",
    }
)

ALLOWED_EXTENSIONS = re.compile(
    r"\.(pdf|doc|docx|ppt|pptx|txt|xls|xlsx|zip|rar|7z|jpg|jpeg|png|gif|webp)$",
    re.IGNORECASE,
)


def validate_upload_file(file: LocalFile, max_size_mb: Optional[int] = None) -> None:
    """
    Check size and type of a resource file.

    A file passes the type check if either its MIME type or its
    extension is allowed.

    Raises:
        FileTooLargeError: Larger than the configured limit (50 MB by default)
        UnsupportedFileTypeError: Neither MIME type nor extension allowed
    """
    limit_mb = max_size_mb or get_settings().max_upload_size_mb
    if file.size > limit_mb * 1024 * 1024:
        raise FileTooLargeError(file.size, limit_mb)

    if file.content_type not in ALLOWED_MIME_TYPES and not ALLOWED_EXTENSIONS.search(file.name):
        raise UnsupportedFileTypeError(file.name, file.content_type)
