"""Dependency injection module."""

from typing import Type

from portal.util.di.application import ProdApplicationProvider
from portal.util.di.base import Component, ProviderBase
from portal.util.di.core import ProdConfigProvider
from portal.util.di.domain import ProdDomainProvider
from portal.util.di.infrastructure import (
    AuditProvider,
    EmailProvider,
    PersistenceProvider,
    ProdAuditProvider,
    ProdEmailProvider,
    ProdPersistenceProvider,
)

# Order is irrelevant to dishka; kept core first for readability
PROVIDERS: list[Type[ProviderBase]] = [
    # Core providers (not mockable)
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Infrastructure components (mockable)
    PersistenceProvider,
    EmailProvider,
    AuditProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a provider base to the class to instantiate.

    Concrete providers (no subclasses) resolve to themselves; ``use_mock`` is
    ignored for them. A mockable base resolves to its subclass whose
    ``__is_mock__`` equals ``use_mock``.

    Raises:
        ValueError: If the component has no implementation of that kind
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for impl in implementations:
        if impl.__is_mock__ == use_mock:
            return impl

    kind = "mock" if use_mock else "production"
    raise ValueError(f"No {kind} provider for component {base.__mock_component__!r}")


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    # Core providers
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    # Infrastructure base classes
    "AuditProvider",
    "EmailProvider",
    "PersistenceProvider",
    # Infrastructure implementations
    "ProdAuditProvider",
    "ProdEmailProvider",
    "ProdPersistenceProvider",
]
