"""Transactional email client.

Sends templated invite emails through an HTTP email API.
"""

from typing import Any

import httpx
import logfire

from portal.adapter.error import EmailDeliveryError
from portal.domain.service.email_service import EmailSender


class HttpEmailSender(EmailSender):
    """Email sender posting JSON to a transactional email API."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        from_address: str,
        from_name: str,
        timeout: float = 5.0,
    ) -> None:
        """Initialize email client.

        Args:
            api_url: Send endpoint of the email provider
            api_key: Bearer key for the provider
            from_address: Sender address
            from_name: Sender display name
            timeout: Request timeout in seconds
        """
        self.api_url = api_url
        self.api_key = api_key
        self.from_address = from_address
        self.from_name = from_name
        self.timeout = timeout

    async def send(
        self,
        recipient: str,
        subject: str,
        template_name: str,
        template_data: dict[str, Any],
    ) -> None:
        """Send a templated email.

        Args:
            recipient: Destination address
            subject: Subject line
            template_name: Provider-side template
            template_data: Template variables

        Raises:
            EmailDeliveryError: If the request fails or is rejected
        """
        payload = {
            "from": {"email": self.from_address, "name": self.from_name},
            "to": [{"email": recipient}],
            "subject": subject,
            "template": template_name,
            "data": template_data,
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.api_url,
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logfire.error("Email API HTTP error", template=template_name, error=str(e))
            raise EmailDeliveryError(f"HTTP error sending email: {e}") from e

        if response.status_code >= 400:
            logfire.error(
                "Email API rejected message",
                status_code=response.status_code,
                template=template_name,
                error=response.text,
            )
            raise EmailDeliveryError(f"Email API returned {response.status_code}")

        logfire.info("Email accepted by provider", template=template_name)


class MockEmailSender(EmailSender):
    """Mock email sender for testing.

    Records every message instead of sending it. Set ``fail`` to make
    every send raise :class:`EmailDeliveryError`.
    """

    def __init__(self) -> None:
        self.sent: list[dict[str, Any]] = []
        self.fail = False

    async def send(
        self,
        recipient: str,
        subject: str,
        template_name: str,
        template_data: dict[str, Any],
    ) -> None:
        if self.fail:
            raise EmailDeliveryError("Mock email delivery failure")

        self.sent.append(
            {
                "recipient": recipient,
                "subject": subject,
                "template_name": template_name,
                "template_data": template_data,
            }
        )

    def last_to(self, recipient: str) -> dict[str, Any] | None:
        """Most recent message sent to ``recipient``."""
        for message in reversed(self.sent):
            if message["recipient"] == recipient:
                return message
        return None
