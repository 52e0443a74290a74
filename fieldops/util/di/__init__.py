"""Dependency injection wiring for the invite flow."""

from collections.abc import Collection

from fieldops.util.di.application import ProdApplicationProvider
from fieldops.util.di.base import COMPONENTS, Component, ProviderBase
from fieldops.util.di.core import ProdConfigProvider
from fieldops.util.di.domain import ProdDomainProvider
from fieldops.util.di.infrastructure import (
    IdentityComponentProvider,
    PersistenceProvider,
    ProdIdentityComponentProvider,
    ProdPersistenceProvider,
)

# Settings, services and use cases are always real; infrastructure is
# swapped per component
PROVIDERS: list[type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    IdentityComponentProvider,
    PersistenceProvider,
]


def build_providers(mocked: Collection[Component] = ()) -> list[ProviderBase]:
    """Instantiate every provider, mocking the named components.

    Raises:
        ValueError: If an unknown component is named
    """
    unknown = set(mocked) - COMPONENTS
    if unknown:
        raise ValueError(f"Unknown components: {sorted(unknown)}")
    return [base.select(mocked)() for base in PROVIDERS]


__all__ = [
    "COMPONENTS",
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "build_providers",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "IdentityComponentProvider",
    "PersistenceProvider",
    "ProdIdentityComponentProvider",
    "ProdPersistenceProvider",
]
