"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container

from fritter.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build production container (all prod implementations).

    Settings are loaded from environment variables automatically.
    The request handler opens a request scope per unit of work:

        async with container() as request_container:
            freets = await request_container.get(FreetService)

    Returns:
        Configured DI container with production providers
    """
    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*provider_instances)
