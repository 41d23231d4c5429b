"""Outbound invite email.

The transport lives in the adapter layer; this module defines what the
domain needs from it and how invite emails are composed.
"""

from datetime import datetime
from typing import Any

from portal.domain.value import UserRole


class EmailSender:
    """Transactional email interface."""

    async def send(
        self,
        recipient: str,
        subject: str,
        template_name: str,
        template_data: dict[str, Any],
    ) -> None:
        """Deliver a templated email.

        Args:
            recipient: Destination address
            subject: Subject line
            template_name: Name of the provider-side template
            template_data: Values rendered into the template

        Raises:
            EmailDeliveryError: If the provider did not accept the message
        """
        raise NotImplementedError


INVITE_SUBJECTS: dict[UserRole, str] = {
    UserRole.STUDENT: "You're invited to join your class on the School Portal",
    UserRole.TEACHER: "You're invited to teach on the School Portal",
    UserRole.ADMIN: "You're invited to administer the School Portal",
}


def invite_template_name(role: UserRole) -> str:
    """Provider template for a role, e.g. ``teacher_invite``."""
    return f"{role.value}_invite"


def invite_template_data(
    email: str, role: UserRole, signup_url: str, expires_at: datetime
) -> dict[str, Any]:
    return {
        "email": email,
        "role": role.value,
        "signup_url": signup_url,
        "expires_at": expires_at.isoformat(),
    }
