"""Unit tests for DomainPolicy."""

import pytest

from portal.domain.error import DomainNotAllowedError, InvalidEmailFormatError
from portal.domain.service import DomainPolicy
from portal.domain.value import UserRole


@pytest.fixture
def policy() -> DomainPolicy:
    return DomainPolicy(["school.edu", " District.EDU "])


class TestDomainPolicy:
    """Tests for the email domain allow-list."""

    @pytest.mark.parametrize("role", [UserRole.ADMIN, UserRole.TEACHER])
    def test_privileged_roles_need_allowed_domain(self, policy, role):
        policy.validate("someone@school.edu", role)
        policy.validate("someone@DISTRICT.edu", role)

        with pytest.raises(DomainNotAllowedError):
            policy.validate("someone@gmail.com", role)

    def test_subdomains_are_not_implicitly_allowed(self, policy):
        with pytest.raises(DomainNotAllowedError):
            policy.validate("someone@mail.school.edu", UserRole.TEACHER)

    def test_students_may_use_any_domain(self, policy):
        policy.validate("kid@gmail.com", UserRole.STUDENT)

    @pytest.mark.parametrize(
        "email",
        ["", "plain", "two@@school.edu", "a@b@school.edu", "@school.edu", "a@", "a b@school.edu"],
    )
    def test_malformed_addresses(self, policy, email):
        with pytest.raises(InvalidEmailFormatError):
            policy.validate(email, UserRole.STUDENT)

    def test_normalize(self):
        assert DomainPolicy.normalize("  Mixed.Case@School.EDU ") == "mixed.case@school.edu"

    def test_domain_of(self):
        assert DomainPolicy.domain_of("a@School.edu") == "school.edu"
