"""Mock providers for testing."""

from .identity import MockIdentityComponentProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockIdentityComponentProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
