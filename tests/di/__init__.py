"""Mock providers for testing."""

from .audit import MockAuditProvider
from .email import MockEmailProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockAuditProvider",
    "MockEmailProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
