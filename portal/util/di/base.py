"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal, get_args

from dishka import Provider

# Infrastructure components with a mock and a production provider
Component = Literal["persistence", "email", "audit"]
COMPONENTS: frozenset[str] = frozenset(get_args(Component))


class ProviderBase(Provider):
    """Base for all DI providers.

    A mockable component declares a base class carrying
    ``__mock_component__`` and exactly two subclasses, one per value of
    ``__is_mock__``. Concrete providers have neither and no subclasses.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
