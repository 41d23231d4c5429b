"""Test container builder with selective unmocking."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from portal.util.di import PROVIDERS, Component, get_provider
from portal.util.di.base import COMPONENTS


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Build a container with mocks for every component not in ``unmock``.

    The FastAPI provider is always included so the same container can back
    a TestClient app.

    Examples:
        # Unit and e2e tests: in-memory store, recording email and audit
        container = build_test_container()

        # Integration tests: real Postgres, mocked email and audit
        container = build_test_container(unmock={"persistence"})

    Raises:
        ValueError: If ``unmock`` names an unknown component
    """
    unmock = unmock or set()
    unknown = set(unmock) - COMPONENTS
    if unknown:
        raise ValueError(f"Unknown components: {sorted(unknown)}")

    providers = []
    for base in PROVIDERS:
        component = base.__mock_component__
        use_mock = component is not None and component not in unmock
        providers.append(get_provider(base, use_mock=use_mock)())

    return make_async_container(*providers, FastapiProvider())
