"""
Blob storage data models.
"""

import mimetypes
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field

from shared.models import OperationResult


class LocalFile(BaseModel):
    """A file selected for upload."""

    name: str = Field(..., description="Original file name")
    content: bytes = Field(..., description="File contents")
    content_type: str = Field(default="application/octet-stream", description="MIME type")

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def size_mb(self) -> str:
        """Size formatted the way the platform displays it, e.g. "1.50 MB"."""
        return format_size_mb(self.size)

    @property
    def extension(self) -> str:
        return self.name.rsplit(".", 1)[-1] if "." in self.name else ""

    @classmethod
    def from_path(cls, path: Union[str, Path], content_type: Optional[str] = None) -> "LocalFile":
        """Read a file from disk, guessing its MIME type from the name."""
        path = Path(path)
        guessed, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            content=path.read_bytes(),
            content_type=content_type or guessed or "application/octet-stream",
        )


class UploadedFile(OperationResult):
    """Result of uploading a resource file."""

    file_url: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[str] = None
    file_type: Optional[str] = None
    storage_path: Optional[str] = None


class UploadedImage(OperationResult):
    """Result of uploading a staff profile image."""

    image_url: Optional[str] = None
    storage_path: Optional[str] = None


class DownloadResult(OperationResult):
    """Result of saving a remote file locally."""

    path: Optional[Path] = None


def format_size_mb(size_bytes: int) -> str:
    return f"{size_bytes / (1024 * 1024):.2f} MB"
