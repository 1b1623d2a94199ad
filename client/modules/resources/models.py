"""
Resource module data models.

A resource is an uploaded academic file moving through moderation:
pending, then either approved or rejected.
"""

import re
from datetime import datetime
from enum import Enum
from typing import ClassVar, Optional, Union

from pydantic import AliasChoices, BaseModel, Field

from shared.models import ApiResponse, OperationResult, WireModel

from .exceptions import InvalidStatusTransitionError, MissingRejectionReasonError


class ResourceType(str, Enum):
    """Kinds of academic material."""

    ASSIGNMENTS = "Assignments"
    QUIZZES = "Quizzes"
    PROJECTS = "Projects"
    PRESENTATIONS = "Presentations"
    NOTES = "Notes"
    PAST_PAPERS = "Past Papers"

    @property
    def folder(self) -> str:
        """Storage folder for files of this type, e.g. ``past-papers``."""
        return re.sub(r"\s+", "-", self.value.lower())


class ResourceStatus(str, Enum):
    """Moderation status."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


ALLOWED_TRANSITIONS: dict[ResourceStatus, frozenset[ResourceStatus]] = {
    ResourceStatus.PENDING: frozenset({ResourceStatus.APPROVED, ResourceStatus.REJECTED}),
    ResourceStatus.APPROVED: frozenset(),
    ResourceStatus.REJECTED: frozenset(),
}


class Resource(WireModel):
    """An uploaded academic file and its moderation state."""

    id: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("_id", "id"),
        serialization_alias="_id",
    )
    title: str = ""
    course_name: Optional[str] = None
    description: Optional[str] = None
    resource_type: Optional[ResourceType] = None
    department: Optional[str] = None
    semester: Optional[Union[str, int]] = None
    section: Optional[str] = None
    batch: Optional[str] = None
    year: Optional[int] = None
    file_url: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[str] = None
    file_type: Optional[str] = None
    storage_path: Optional[str] = None
    thumbnail_url: Optional[str] = None
    pages: int = 0
    download_count: int = 0
    view_count: int = 0
    uploader_name: Optional[str] = None
    uploader_email: Optional[str] = None
    status: ResourceStatus = ResourceStatus.PENDING
    rejection_reason: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def requires_delete_confirmation(self) -> bool:
        """Rejected resources are deleted without asking for the title."""
        return self.status != ResourceStatus.REJECTED

    def can_transition(self, target: ResourceStatus) -> bool:
        return target in ALLOWED_TRANSITIONS[self.status]

    def with_status(self, target: ResourceStatus, reason: Optional[str] = None) -> "Resource":
        """
        Copy of this resource moved to ``target``.

        Raises:
            InvalidStatusTransitionError: If the move is not pending → approved/rejected
            MissingRejectionReasonError: If rejecting without a reason
        """
        if not self.can_transition(target):
            raise InvalidStatusTransitionError(self.status.value, target.value)
        update: dict = {"status": target}
        if target == ResourceStatus.REJECTED:
            if not reason or not reason.strip():
                raise MissingRejectionReasonError()
            update["rejection_reason"] = reason.strip()
        return self.model_copy(update=update)


class ResourceDraft(WireModel):
    """Metadata entered by the uploader before the file is stored."""

    title: str
    course_name: str
    description: str
    resource_type: ResourceType
    department: str = "General"
    semester: Union[str, int] = "N/A"
    section: str
    batch: str
    year: int = Field(default_factory=lambda: datetime.now().year)
    pages: int = 0
    thumbnail_url: str = ""

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("course_name", "title", "description", "section", "batch")

    def missing_fields(self) -> list[str]:
        return [name for name in self.REQUIRED_FIELDS if not str(getattr(self, name)).strip()]


class ResourceFilters(WireModel):
    """Query filters for listing approved resources."""

    resource_type: Optional[ResourceType] = None
    department: Optional[str] = None
    search: Optional[str] = None
    year: Optional[Union[int, str]] = None

    def to_params(self) -> dict[str, str]:
        """Query string parameters; "All" years means no year filter."""
        params = {k: str(v) for k, v in self.to_wire().items()}
        if params.get("year") == "All":
            del params["year"]
        return params


class ResourceResponse(ApiResponse):
    """Response carrying a single resource (upload, approve, reject)."""

    resource: Optional[Resource] = None


class ResourceListing(ApiResponse):
    """Approved resources grouped by year."""

    resources: dict[str, list[Resource]] = Field(default_factory=dict)

    def all(self) -> list[Resource]:
        return [item for group in self.resources.values() for item in group]


class MyResources(BaseModel):
    """The caller's own uploads, grouped by status."""

    pending: list[Resource] = Field(default_factory=list)
    approved: list[Resource] = Field(default_factory=list)
    rejected: list[Resource] = Field(default_factory=list)


class MyResourcesResponse(ApiResponse):
    resources: MyResources = Field(default_factory=MyResources)


class PendingResourcesResponse(ApiResponse):
    resources: list[Resource] = Field(default_factory=list)


class ModerationStats(BaseModel):
    """Counts shown on the admin dashboard."""

    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0

    def after_decision(self, status: ResourceStatus) -> "ModerationStats":
        """Counts once one pending resource has moved to ``status``."""
        update = {"pending": max(self.pending - 1, 0)}
        update[status.value] = getattr(self, status.value) + 1
        return self.model_copy(update=update)


class AdminResourcesResponse(ApiResponse):
    stats: ModerationStats = Field(default_factory=ModerationStats)
    resources: list[Resource] = Field(default_factory=list)


class CounterKind(str, Enum):
    DOWNLOAD = "download"
    VIEW = "view"


class CounterResult(OperationResult):
    """Outcome of a best-effort counter increment."""

    resource_id: str
    counter: CounterKind
