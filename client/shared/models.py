"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models stay in their respective module directories.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """
    Base for models exchanged with the backend.

    The backend speaks camelCase JSON; Python code uses snake_case.
    Fields the client does not know about are preserved so that a
    round trip through local storage never drops data.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_wire(self) -> dict:
        """Serialize to the backend's camelCase shape, omitting unset values."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class ApiResponse(WireModel):
    """Common envelope of every backend JSON response."""

    success: bool = Field(default=False, description="Whether the call succeeded")
    message: Optional[str] = Field(None, description="Human-readable message")


class OperationResult(BaseModel):
    """
    Outcome of an operation that reports failure instead of raising.

    Used where a failure must never block the caller's primary action.
    """

    success: bool = Field(..., description="Whether the operation succeeded")
    error: Optional[str] = Field(None, description="Error message if it failed")

    @classmethod
    def ok(cls, **kwargs) -> "OperationResult":
        return cls(success=True, **kwargs)

    @classmethod
    def failed(cls, error: str, **kwargs) -> "OperationResult":
        return cls(success=False, error=error, **kwargs)
