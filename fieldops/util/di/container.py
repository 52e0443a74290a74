"""Dependency injection container."""

from collections.abc import Collection

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from fieldops.util.di import Component, build_providers


def create_container(mocked: Collection[Component] = ()) -> AsyncContainer:
    """Build the DI container.

    Production implementations are used for every component not listed in
    ``mocked``. FastapiProvider makes the request available to providers.

    Args:
        mocked: Components to replace with their mock implementation
    """
    return make_async_container(*build_providers(mocked), FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app; routes resolve through DishkaRoute."""
    setup_dishka(container, app)
