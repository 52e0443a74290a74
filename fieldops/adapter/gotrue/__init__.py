"""GoTrue identity provider adapter."""

from .client import (
    GoTrueIdentityProvider,
    MockGoTrueIdentityProvider,
    RealGoTrueIdentityProvider,
)

__all__ = [
    "GoTrueIdentityProvider",
    "MockGoTrueIdentityProvider",
    "RealGoTrueIdentityProvider",
]
