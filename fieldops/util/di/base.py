"""Base classes for dependency injection providers."""

from collections.abc import Collection
from typing import ClassVar, Literal, get_args

from dishka import Provider

# Infrastructure the invite flow talks to; each has a prod and a mock provider
Component = Literal["identity", "persistence"]
COMPONENTS: frozenset[Component] = frozenset(get_args(Component))


class ProviderBase(Provider):
    """Base for all invite-flow DI providers.

    A provider that sets ``__mock_component__`` is a component base. It is
    never instantiated itself; its production and mock subclasses are
    told apart by ``__is_mock__``. Providers without a component are used
    as they are.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False

    @classmethod
    def select(cls, mocked: Collection[Component] = ()) -> type["ProviderBase"]:
        """Pick the provider class to instantiate.

        Args:
            mocked: Components that should use their mock implementation

        Raises:
            LookupError: If the wanted implementation is not registered
                (mocks register themselves when ``tests.di`` is imported)
        """
        if cls.__mock_component__ is None:
            return cls

        want_mock = cls.__mock_component__ in mocked
        for implementation in cls.__subclasses__():
            if implementation.__is_mock__ == want_mock:
                return implementation

        kind = "mock" if want_mock else "production"
        raise LookupError(f"No {kind} provider for component {cls.__mock_component__!r}")
