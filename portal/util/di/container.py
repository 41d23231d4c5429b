"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from portal.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the production container.

    Every mockable component resolves to its production provider. The
    FastAPI provider makes ``Request`` injectable into request-scoped
    factories. Settings come from the environment when first resolved.
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app so ``FromDishka`` routes resolve."""
    setup_dishka(container, app)
