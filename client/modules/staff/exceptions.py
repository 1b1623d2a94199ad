"""
Staff directory exceptions.
"""

from shared.exceptions import ExternalServiceError, ValidationError


class StaffImageUploadError(ExternalServiceError):
    """Raised when a profile image could not be stored before saving the record."""

    def __init__(self, message: str = "Failed to upload image"):
        super().__init__(message, service="storage", code="STAFF_IMAGE_UPLOAD_FAILED")


class MissingStaffNameError(ValidationError):
    """Raised when a staff record is saved without a name."""

    def __init__(self):
        super().__init__("Staff member name is required", code="MISSING_STAFF_NAME")
