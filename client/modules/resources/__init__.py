"""
Resources module.

Upload, listing, counters and moderation of academic resources.

Public API:
- IResourceService / ResourceService: Client for /api/resources
- ResourceUploader, ResourceDeleter, ModerationQueue, ResourceViewer: Workflows
- Resource, ResourceDraft, ResourceFilters and response models
- Resource exceptions
"""

from .interfaces import IResourceService
from .models import (
    Resource,
    ResourceDraft,
    ResourceFilters,
    ResourceStatus,
    ResourceType,
    ResourceListing,
    MyResources,
    ModerationStats,
    CounterKind,
    CounterResult,
)
from .service import ResourceService
from .workflow import (
    ResourceUploader,
    ResourceDeleter,
    ModerationQueue,
    ResourceViewer,
    requires_confirmation,
)
from .exceptions import (
    MissingFileError,
    MissingFieldsError,
    FileTooLargeError,
    UnsupportedFileTypeError,
    TitleMismatchError,
    MissingRejectionReasonError,
    InvalidStatusTransitionError,
    UnverifiedUserError,
    FileStorageError,
)

__all__ = [
    # Interface
    "IResourceService",
    "ResourceService",
    # Models
    "Resource",
    "ResourceDraft",
    "ResourceFilters",
    "ResourceStatus",
    "ResourceType",
    "ResourceListing",
    "MyResources",
    "ModerationStats",
    "CounterKind",
    "CounterResult",
    # Workflows
    "ResourceUploader",
    "ResourceDeleter",
    "ModerationQueue",
    "ResourceViewer",
    "requires_confirmation",
    # Exceptions
    "MissingFileError",
    "MissingFieldsError",
    "FileTooLargeError",
    "UnsupportedFileTypeError",
    "TitleMismatchError",
    "MissingRejectionReasonError",
    "InvalidStatusTransitionError",
    "UnverifiedUserError",
    "FileStorageError",
]
