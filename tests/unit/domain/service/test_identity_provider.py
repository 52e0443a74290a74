"""Tests for the IdentityProvider contract."""

import pytest

from fieldops.adapter.gotrue import RealGoTrueIdentityProvider
from fieldops.adapter.gotrue.client import MockGoTrueIdentityProvider
from fieldops.domain.service import IdentityProvider


class SessionOnlyProvider(IdentityProvider):
    async def current_session(self, access_token):
        return None


class TestIdentityProviderContract:
    """Adapters must implement every operation to be constructed."""

    def test_incomplete_adapter_cannot_be_created(self):
        with pytest.raises(TypeError):
            SessionOnlyProvider()

    def test_interface_cannot_be_created(self):
        with pytest.raises(TypeError):
            IdentityProvider()

    @pytest.mark.parametrize(
        "adapter", [RealGoTrueIdentityProvider, MockGoTrueIdentityProvider]
    )
    def test_adapters_implement_every_operation(self, adapter):
        assert not adapter.__abstractmethods__
