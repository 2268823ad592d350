"""Unit tests for admin session extraction."""

import pytest

from quill.config import AuthSettings
from quill.domain.error import NotAuthorizedError
from quill.domain.service import JWTService
from quill.interface.api.auth import _bearer_token


class TestBearerToken:
    """Tests for Authorization header parsing."""

    @pytest.mark.parametrize(
        "header,expected",
        [
            ("Bearer abc.def", "abc.def"),
            ("bearer abc.def", "abc.def"),
            ("Basic abc", None),
            ("Bearer", None),
            ("", None),
            (None, None),
        ],
    )
    def test_parsing(self, header, expected):
        assert _bearer_token(header) == expected


class TestJWTService:
    """Tests for JWTService.authenticate."""

    def test_round_trip(self):
        service = JWTService(AuthSettings())

        token = service.create_token("admin-1")

        assert service.authenticate(token) == "admin-1"

    def test_missing_token(self):
        with pytest.raises(NotAuthorizedError) as exc_info:
            JWTService(AuthSettings()).authenticate(None)

        assert exc_info.value.reason == "Authentication required"

    def test_expired_token(self):
        settings = AuthSettings(jwt_expiry_days=-1)
        token = JWTService(settings).create_token("admin-1")

        with pytest.raises(NotAuthorizedError) as exc_info:
            JWTService(settings).authenticate(token)

        assert exc_info.value.reason == "Invalid or expired session"
