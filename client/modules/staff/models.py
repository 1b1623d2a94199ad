"""
Staff directory data models.
"""

from typing import Optional, Union

from pydantic import AliasChoices, BaseModel, Field, field_validator

from shared.models import ApiResponse, WireModel


class StaffMember(WireModel):
    """A faculty member listed in the directory."""

    id: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("_id", "id"),
        serialization_alias="_id",
    )
    name: str = ""
    email: Optional[str] = None
    department: Optional[str] = None
    image: Optional[str] = None
    courses: list[str] = Field(default_factory=list)
    qualification: Optional[str] = None
    office: Optional[str] = None
    counselling_hours: Optional[str] = None
    phone_number: Optional[str] = None
    bio: Optional[str] = None
    specialization: list[str] = Field(default_factory=list)
    years_of_experience: Optional[int] = None

    @field_validator("years_of_experience", mode="before")
    @classmethod
    def _blank_years_to_none(cls, value: Union[str, int, None]):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def cleaned(self) -> "StaffMember":
        """Copy with blank course and specialization entries removed."""
        return self.model_copy(
            update={
                "courses": [c for c in self.courses if c.strip()],
                "specialization": [s for s in self.specialization if s.strip()],
            }
        )

    def to_payload(self) -> dict:
        """Body for create/update calls; the id travels in the URL."""
        payload = self.cleaned().to_wire()
        payload.pop("_id", None)
        return payload


class Pagination(BaseModel):
    has_more: bool = Field(default=False, alias="hasMore")
    page: Optional[int] = None
    total: Optional[int] = None

    model_config = {"populate_by_name": True, "extra": "ignore"}


class StaffListResponse(ApiResponse):
    data: list[StaffMember] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)


class StaffPage(BaseModel):
    """One page of the directory."""

    items: list[StaffMember] = Field(default_factory=list)
    page: int = 1
    has_more: bool = False


class DepartmentsResponse(ApiResponse):
    data: list[str] = Field(default_factory=list)


class StaffResponse(ApiResponse):
    data: Optional[StaffMember] = None


def merge_pages(existing: list[StaffMember], new: list[StaffMember]) -> list[StaffMember]:
    """Append a further page, skipping members already shown."""
    seen = {member.id for member in existing}
    return existing + [member for member in new if member.id not in seen]
