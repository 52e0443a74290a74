"""Identity provider infrastructure providers."""

from dishka import Scope, provide

from fieldops.adapter.gotrue.client import RealGoTrueIdentityProvider
from fieldops.config import Settings
from fieldops.domain.service import IdentityProvider
from fieldops.util.di.base import ProviderBase
from fieldops.util.observability import instrument_httpx


class IdentityComponentProvider(ProviderBase):
    """Identity component base."""

    __mock_component__ = "identity"


class ProdIdentityComponentProvider(IdentityComponentProvider):
    """Production identity provider backed by the GoTrue admin API."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_identity_provider(self, settings: Settings) -> IdentityProvider:
        """Provide GoTrue identity provider.

        Raises:
            ValueError: If the service-role key is not configured
        """
        if not settings.identity.service_role_key:
            raise ValueError("Identity provider service-role key must be configured")

        instrument_httpx()
        return RealGoTrueIdentityProvider(
            settings=settings.identity,
            auth_settings=settings.auth,
            min_password_length=settings.invitations.min_password_length,
        )
