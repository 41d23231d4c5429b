"""Email domain policy for privileged roles."""

import logfire

from portal.domain.error import DomainNotAllowedError, InvalidEmailFormatError
from portal.domain.value import UserRole

from .base import Service


class DomainPolicy(Service):
    """Checks email format and the domain allow-list.

    Teachers and admins must use an address on one of the allowed domains.
    Students may use any well-formed address.
    """

    def __init__(self, allowed_domains: list[str]) -> None:
        """Initialize policy.

        Args:
            allowed_domains: Domains permitted for privileged roles
        """
        self.allowed_domains = frozenset(d.strip().lower() for d in allowed_domains)

    @staticmethod
    def normalize(email: str) -> str:
        """Canonical form used for storage, counters and comparisons."""
        return email.strip().lower()

    @staticmethod
    def domain_of(email: str) -> str:
        """Return the lower-cased domain of a well-formed address.

        Raises:
            InvalidEmailFormatError: If the address is malformed
        """
        if any(ch.isspace() for ch in email) or email.count("@") != 1:
            raise InvalidEmailFormatError()

        local, domain = email.split("@")
        if not local or not domain:
            raise InvalidEmailFormatError()

        return domain.lower()

    def validate(self, email: str, role: UserRole) -> None:
        """Validate an address for the given role.

        Args:
            email: Email address (normalized or not)
            role: Role the invite grants

        Raises:
            InvalidEmailFormatError: If the address is malformed
            DomainNotAllowedError: If a privileged role uses a foreign domain
        """
        domain = self.domain_of(email.strip())

        if role.is_privileged and domain not in self.allowed_domains:
            logfire.warn("Email domain not allowed", domain=domain, role=role.value)
            raise DomainNotAllowedError(
                f"Email domain {domain} is not allowed for role {role.value}"
            )
