"""Tests for session module models."""

import pytest
from pydantic import TypeAdapter, ValidationError

from modules.session.models import (
    AuthPayload,
    AuthResponse,
    LoginResponsePayload,
    RawUserPayload,
    User,
    UserRole,
    get_username_from_email,
    normalize_auth_payload,
)


class TestUser:
    def test_accepts_mongo_style_id(self):
        user = User.model_validate({"_id": "abc", "fullName": "Ada"})
        assert user.id == "abc"

    def test_serializes_id_as_id(self):
        wire = User.model_validate({"_id": "abc"}).to_wire()
        assert wire["id"] == "abc"
        assert "_id" not in wire

    def test_defaults(self):
        user = User()
        assert user.role == UserRole.STUDENT
        assert user.is_verified is False
        assert user.is_admin is False

    def test_is_admin(self):
        assert User(role="admin").is_admin is True

    def test_username_from_email(self):
        assert User(email="ada@x.com").username == "ada"
        assert User().username == "User"

    def test_wire_keys_translates_snake_case(self):
        translated = User.wire_keys({"full_name": "Ada", "isVerified": True, "avatar": "a.png"})
        assert translated == {"fullName": "Ada", "isVerified": True, "avatar": "a.png"}


class TestAuthPayloads:
    def test_login_response_token_wins(self):
        payload = LoginResponsePayload(token="top", user=User(token="inner", email="a@b.c"))
        user = normalize_auth_payload(payload)
        assert user.token == "top"
        assert user.email == "a@b.c"

    def test_raw_user_keeps_embedded_token(self):
        user = normalize_auth_payload(RawUserPayload(user=User(token="inner")))
        assert user.token == "inner"

    def test_raw_user_without_token(self):
        user = normalize_auth_payload(RawUserPayload(user=User(email="a@b.c")))
        assert user.token is None

    def test_discriminated_union_by_kind(self):
        adapter = TypeAdapter(AuthPayload)

        login = adapter.validate_python({"kind": "loginResponse", "token": "t", "user": {"id": 1}})
        raw = adapter.validate_python({"kind": "rawUser", "user": {"id": 1, "token": "t"}})

        assert isinstance(login, LoginResponsePayload)
        assert isinstance(raw, RawUserPayload)

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            TypeAdapter(AuthPayload).validate_python({"kind": "other", "user": {}})


class TestAuthResponse:
    def test_to_payload(self, user_data):
        response = AuthResponse.model_validate({"success": True, "token": "t1", "user": user_data})
        payload = response.to_payload()
        assert payload.token == "t1"
        assert payload.user.full_name == "Ada"

    def test_to_payload_none_without_token(self, user_data):
        response = AuthResponse.model_validate({"success": True, "user": user_data})
        assert response.to_payload() is None

    def test_to_payload_none_on_failure(self, user_data):
        response = AuthResponse.model_validate({"success": False, "token": "t1", "user": user_data})
        assert response.to_payload() is None


class TestGetUsernameFromEmail:
    @pytest.mark.parametrize(
        "email,expected",
        [("ada@x.com", "ada"), ("", "User"), (None, "User"), ("plain", "plain")],
    )
    def test_username(self, email, expected):
        assert get_username_from_email(email) == expected
