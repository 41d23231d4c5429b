"""Base class for domain services."""


class Service:
    """Marker base for domain services.

    Services take every collaborator (stores, policies, senders) through
    ``__init__`` and are wired by the DI providers in ``portal.util.di``.
    """
