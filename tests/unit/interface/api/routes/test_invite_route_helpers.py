"""Unit tests for invite route helpers."""

import pytest
from fastapi import HTTPException
from starlette.requests import Request

from portal.config import AuthSettings
from portal.domain.service import JWTService
from portal.interface.api.routes.invites import authenticate, client_ip, require_admin


def make_request(headers: dict[str, str] | None = None, client=("192.0.2.1", 5000)):
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/invites",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "client": client,
    }
    return Request(scope)


@pytest.fixture
def jwt_service() -> JWTService:
    return JWTService(AuthSettings(jwt_secret="route-test-secret-with-enough-bytes"))


class TestClientIp:
    """Tests for client_ip."""

    def test_prefers_first_forwarded_address(self):
        request = make_request({"X-Forwarded-For": "198.51.100.4, 10.0.0.1"})

        assert client_ip(request) == "198.51.100.4"

    def test_falls_back_to_peer(self):
        assert client_ip(make_request()) == "192.0.2.1"

    def test_no_peer(self):
        assert client_ip(make_request(client=None)) is None


class TestSessionChecks:
    """Tests for authenticate and require_admin."""

    def test_missing_cookie(self, jwt_service):
        with pytest.raises(HTTPException) as exc_info:
            authenticate(jwt_service, None)

        assert exc_info.value.status_code == 401

    def test_invalid_cookie(self, jwt_service):
        with pytest.raises(HTTPException) as exc_info:
            authenticate(jwt_service, "nope")

        assert exc_info.value.status_code == 401

    def test_admin(self, jwt_service):
        token = jwt_service.create_token("admin-1", "head@school.edu", "admin")

        payload = require_admin(jwt_service, token)

        assert payload.user_id == "admin-1"

    def test_non_admin(self, jwt_service):
        token = jwt_service.create_token("t-1", "t@school.edu", "teacher")

        with pytest.raises(HTTPException) as exc_info:
            require_admin(jwt_service, token)

        assert exc_info.value.status_code == 403
