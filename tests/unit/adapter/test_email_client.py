"""Unit tests for the HTTP email sender."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from portal.adapter.email.client import HttpEmailSender
from portal.adapter.error import EmailDeliveryError


@pytest.fixture
def sender() -> HttpEmailSender:
    return HttpEmailSender(
        api_url="https://mail.example.com/v1/send",
        api_key="key-123",
        from_address="no-reply@school.edu",
        from_name="School Portal",
        timeout=2.0,
    )


async def send(sender: HttpEmailSender) -> None:
    await sender.send(
        recipient="teacher@school.edu",
        subject="You're invited",
        template_name="teacher_invite",
        template_data={"signup_url": "http://localhost:3000/auth/signup?token=t"},
    )


class TestHttpEmailSender:
    """Tests for HttpEmailSender."""

    @pytest.mark.asyncio
    async def test_posts_templated_message(self, sender):
        # Arrange
        request = httpx.Request("POST", sender.api_url)
        mock_post = AsyncMock(return_value=httpx.Response(202, request=request))

        # Act
        with patch.object(httpx.AsyncClient, "post", mock_post):
            await send(sender)

        # Assert
        args, kwargs = mock_post.call_args
        assert args[0] == "https://mail.example.com/v1/send"
        assert kwargs["headers"] == {"Authorization": "Bearer key-123"}
        assert kwargs["timeout"] == 2.0
        payload = kwargs["json"]
        assert payload["to"] == [{"email": "teacher@school.edu"}]
        assert payload["template"] == "teacher_invite"
        assert payload["from"] == {"email": "no-reply@school.edu", "name": "School Portal"}

    @pytest.mark.asyncio
    async def test_rejected_message_raises(self, sender):
        request = httpx.Request("POST", sender.api_url)
        mock_post = AsyncMock(
            return_value=httpx.Response(422, text="bad template", request=request)
        )

        with patch.object(httpx.AsyncClient, "post", mock_post):
            with pytest.raises(EmailDeliveryError, match="422"):
                await send(sender)

    @pytest.mark.asyncio
    async def test_transport_error_raises(self, sender):
        mock_post = AsyncMock(side_effect=httpx.ConnectError("connection refused"))

        with patch.object(httpx.AsyncClient, "post", mock_post):
            with pytest.raises(EmailDeliveryError):
                await send(sender)
