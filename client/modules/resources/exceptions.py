"""
Resource module exceptions.

Validation errors here are raised before any network call is made.
"""

from typing import Optional

from shared.exceptions import AuthorizationError, ExternalServiceError, ValidationError


class MissingFileError(ValidationError):
    """Raised when an upload is submitted without a file."""

    def __init__(self):
        super().__init__("Please select a file to upload", code="MISSING_FILE")


class MissingFieldsError(ValidationError):
    """Raised when required upload metadata is blank."""

    def __init__(self, fields: list[str]):
        super().__init__(
            "Please fill in all required fields",
            code="MISSING_FIELDS",
            details={"fields": fields},
        )


class FileTooLargeError(ValidationError):
    """Raised when a file exceeds the upload size limit."""

    def __init__(self, size: int, limit_mb: int):
        super().__init__(
            f"File size must be less than {limit_mb}MB",
            code="FILE_TOO_LARGE",
            details={"size": size, "limit_mb": limit_mb},
        )


class UnsupportedFileTypeError(ValidationError):
    """Raised when a file is neither an allowed MIME type nor an allowed extension."""

    def __init__(self, file_name: str, content_type: Optional[str] = None):
        super().__init__(
            "Please select a valid file type (PDF, DOC, PPT, Images, ZIP, etc.)",
            code="UNSUPPORTED_FILE_TYPE",
            details={"file_name": file_name, "content_type": content_type},
        )


class TitleMismatchError(ValidationError):
    """Raised when the typed delete confirmation does not match the title."""

    def __init__(self):
        super().__init__("File name does not match. Please try again.", code="TITLE_MISMATCH")


class MissingRejectionReasonError(ValidationError):
    """Raised when a resource is rejected without a reason."""

    def __init__(self):
        super().__init__("Please provide a rejection reason", code="MISSING_REJECTION_REASON")


class InvalidStatusTransitionError(ValidationError):
    """Raised on any status move other than pending → approved/rejected."""

    def __init__(self, current: str, target: str):
        super().__init__(
            f"Cannot move a {current} resource to {target}",
            code="INVALID_STATUS_TRANSITION",
            details={"current": current, "target": target},
        )


class UnverifiedUserError(AuthorizationError):
    """Raised when an unverified account tries to upload."""

    def __init__(self):
        super().__init__(
            "Please verify your email before uploading resources",
            code="EMAIL_NOT_VERIFIED",
        )


class FileStorageError(ExternalServiceError):
    """Raised when the file could not be stored before posting metadata."""

    def __init__(self, message: str = "Failed to upload file"):
        super().__init__(message, service="storage", code="FILE_STORAGE_FAILED")
