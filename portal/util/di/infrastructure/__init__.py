"""Infrastructure providers."""

# Import bases
from .audit import AuditProvider
from .email import EmailProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .audit import ProdAuditProvider  # noqa: F401
from .email import ProdEmailProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "AuditProvider",
    "EmailProvider",
    "PersistenceProvider",
    "ProdAuditProvider",
    "ProdEmailProvider",
    "ProdPersistenceProvider",
]
