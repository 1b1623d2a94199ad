"""Tests for the staff directory service."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from shared.exceptions import AuthRequiredError, RemoteRejectionError
from modules.session.models import LoginResponsePayload, User
from modules.staff.exceptions import MissingStaffNameError, StaffImageUploadError
from modules.staff.interfaces import IStaffService
from modules.staff.models import StaffMember
from modules.staff.service import StaffService
from modules.storage.models import LocalFile, UploadedImage


@pytest.fixture
def blobs():
    blobs = MagicMock()
    blobs.upload_staff_image = AsyncMock(
        return_value=UploadedImage.ok(
            image_url="https://cdn.test/staff-profiles/staff-1.png",
            storage_path="staff-profiles/staff-1.png",
        )
    )
    return blobs


@pytest.fixture
def staff(api, store, blobs) -> StaffService:
    return StaffService(tokens=store, api=api, blobs=blobs)


@pytest.fixture
def admin(store, user_data):
    user = User.model_validate({**user_data, "role": "admin"})
    store.store_auth_data(LoginResponsePayload(token="admin-t", user=user))


@pytest.fixture
def image() -> LocalFile:
    return LocalFile(name="me.png", content=b"png", content_type="image/png")


class TestListing:
    def test_implements_interface(self, staff):
        assert isinstance(staff, IStaffService)

    @pytest.mark.asyncio
    async def test_list_departments(self, staff, backend):
        backend.on("GET", "/api/staff/departments", json={"success": True, "data": ["CS", "EE"]})

        assert await staff.list_departments() == ["CS", "EE"]

    @pytest.mark.asyncio
    async def test_list_staff(self, staff, backend):
        backend.on(
            "GET",
            "/api/staff",
            json={
                "success": True,
                "data": [{"_id": "s1", "name": "Dr. Ada"}, {"_id": "s2", "name": "Dr. Grace"}],
                "pagination": {"hasMore": True},
            },
        )

        page = await staff.list_staff(page=2, search="ada", department="CS")

        assert [m.id for m in page.items] == ["s1", "s2"]
        assert page.has_more is True
        assert page.page == 2
        params = backend.last_request.url.params
        assert params["page"] == "2"
        assert params["limit"] == "2"
        assert params["search"] == "ada"
        assert params["department"] == "CS"
        assert "Authorization" not in backend.last_request.headers

    @pytest.mark.asyncio
    async def test_list_staff_custom_limit(self, staff, backend):
        backend.on("GET", "/api/staff", json={"success": True, "data": [], "pagination": {"hasMore": False}})

        page = await staff.list_staff(limit=10)

        assert backend.last_request.url.params["limit"] == "10"
        assert page.has_more is False


class TestAdminCalls:
    @pytest.mark.asyncio
    async def test_create(self, staff, backend, admin):
        backend.on("POST", "/api/staff", status=201, json={"success": True, "data": {"_id": "s9", "name": "Dr. Ada"}})

        response = await staff.create(StaffMember(name="Dr. Ada", courses=["Algorithms", ""]))

        assert response.data.id == "s9"
        assert backend.last_request.headers["Authorization"] == "Bearer admin-t"
        assert backend.body()["courses"] == ["Algorithms"]

    @pytest.mark.asyncio
    async def test_update(self, staff, backend, admin):
        backend.on("PUT", "/api/staff/s1", json={"success": True})

        await staff.update("s1", StaffMember(id="s1", name="Dr. Ada", office="B-12"))

        body = backend.body()
        assert body["office"] == "B-12"
        assert "_id" not in body

    @pytest.mark.asyncio
    async def test_create_requires_token(self, staff, backend):
        with pytest.raises(AuthRequiredError, match="Please login as admin to add/edit staff"):
            await staff.create(StaffMember(name="Dr. Ada"))
        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_create_requires_name(self, staff, backend, admin):
        with pytest.raises(MissingStaffNameError):
            await staff.create(StaffMember(name="  "))
        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_non_admin_rejected_by_backend(self, staff, backend, admin):
        backend.on("POST", "/api/staff", status=403, json={"success": False, "message": "Admin access required"})

        with pytest.raises(RemoteRejectionError, match="Admin access required"):
            await staff.create(StaffMember(name="Dr. Ada"))

    @pytest.mark.asyncio
    async def test_delete(self, staff, backend, admin):
        backend.on("DELETE", "/api/staff/s1", json={"success": True})

        response = await staff.delete("s1")

        assert response.success is True

    @pytest.mark.asyncio
    async def test_delete_requires_token(self, staff, backend):
        with pytest.raises(AuthRequiredError, match="Please login as admin to delete staff"):
            await staff.delete("s1")
        assert backend.requests == []


class TestSaveWithImage:
    @pytest.mark.asyncio
    async def test_uploads_image_before_saving(self, staff, backend, blobs, admin, image):
        backend.on("POST", "/api/staff", json={"success": True})

        await staff.save_with_image(StaffMember(name="Dr. Ada"), image)

        blobs.upload_staff_image.assert_awaited_once_with(image)
        assert backend.body()["image"] == "https://cdn.test/staff-profiles/staff-1.png"

    @pytest.mark.asyncio
    async def test_updates_existing_record(self, staff, backend, blobs, admin, image):
        backend.on("PUT", "/api/staff/s1", json={"success": True})

        await staff.save_with_image(StaffMember(name="Dr. Ada"), image, staff_id="s1")

        assert len(backend.calls_to("PUT", "/api/staff/s1")) == 1

    @pytest.mark.asyncio
    async def test_without_image_keeps_existing_url(self, staff, backend, blobs, admin):
        backend.on("PUT", "/api/staff/s1", json={"success": True})

        await staff.save_with_image(StaffMember(name="Dr. Ada", image="https://cdn.test/old.png"), staff_id="s1")

        blobs.upload_staff_image.assert_not_awaited()
        assert backend.body()["image"] == "https://cdn.test/old.png"

    @pytest.mark.asyncio
    async def test_image_failure_skips_save(self, staff, backend, blobs, admin, image):
        blobs.upload_staff_image.return_value = UploadedImage.failed("Image size must be less than 5MB")

        with pytest.raises(StaffImageUploadError, match="less than 5MB"):
            await staff.save_with_image(StaffMember(name="Dr. Ada"), image)

        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_token_checked_before_upload(self, staff, backend, blobs, image):
        with pytest.raises(AuthRequiredError):
            await staff.save_with_image(StaffMember(name="Dr. Ada"), image)

        blobs.upload_staff_image.assert_not_awaited()
