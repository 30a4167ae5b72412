"""Dependency injection wiring.

Every provider class in PROVIDERS is either concrete (config, domain,
application) or the base of a mockable component. A mockable base has one
production and one mock subclass, told apart by ``__is_mock__``; tests swap
the in-memory persistence component in through ``tests.di``.
"""

from typing import Type

from agora.util.di.application import ProdApplicationProvider
from agora.util.di.base import Component, ProviderBase
from agora.util.di.core import ProdConfigProvider
from agora.util.di.domain import ProdDomainProvider
from agora.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
)
from agora.util.error import DependencyInjectionError

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,  # mockable: "persistence"
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a provider entry to the class to instantiate.

    Args:
        base: Entry from PROVIDERS
        use_mock: Pick the mock implementation of a mockable component

    Returns:
        base itself when it is concrete, otherwise its matching subclass

    Raises:
        DependencyInjectionError: If the component has no such implementation
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for impl in implementations:
        if getattr(impl, "__is_mock__", False) == use_mock:
            return impl

    component = base.__mock_component__ or base.__name__
    kind = "mock" if use_mock else "production"
    raise DependencyInjectionError(f"No {kind} implementation for {component}")


__all__ = [
    "PROVIDERS",
    "Component",
    "PersistenceProvider",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdPersistenceProvider",
    "ProviderBase",
    "get_provider",
]
