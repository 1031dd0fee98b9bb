"""Tests for the connectivity and feature gate."""

from unittest.mock import AsyncMock

import pytest

from clarity_flow.triage.credentials import CredentialResolver
from clarity_flow.triage.gate import FeatureGate
from clarity_flow.triage.models import GateReason

from .conftest import FakeConfigStore


@pytest.mark.unit
@pytest.mark.asyncio
class TestFeatureGate:
    """Test cases for FeatureGate.can_analyze."""

    async def test_all_conditions_met(self, resolver: CredentialResolver) -> None:
        """Test the gate opens with connectivity, flag and credential."""
        decision = await FeatureGate(resolver, online=True, feature_enabled=True).can_analyze()
        assert decision.allowed is True
        assert decision.reason is None

    async def test_offline_takes_precedence_over_disabled_feature(
        self, resolver: CredentialResolver
    ) -> None:
        """Test offline is reported before the feature flag."""
        decision = await FeatureGate(resolver, online=False, feature_enabled=False).can_analyze()
        assert decision.allowed is False
        assert decision.reason == GateReason.OFFLINE

    async def test_feature_disabled(self, resolver: CredentialResolver) -> None:
        """Test the feature flag closes the gate."""
        decision = await FeatureGate(resolver, online=True, feature_enabled=False).can_analyze()
        assert decision.reason == GateReason.FEATURE_DISABLED

    async def test_no_credential(self) -> None:
        """Test missing credentials close the gate."""
        resolver = CredentialResolver(FakeConfigStore(), default_keys={})
        decision = await FeatureGate(resolver).can_analyze()
        assert decision.reason == GateReason.NO_CREDENTIAL

    async def test_credentials_not_checked_when_offline(self) -> None:
        """Test the credential check is skipped once an earlier check fails."""
        resolver = AsyncMock()
        await FeatureGate(resolver, online=False).can_analyze()
        await FeatureGate(resolver, feature_enabled=False).can_analyze()
        resolver.has_any_credential.assert_not_called()

    async def test_callable_online_signal_is_evaluated_per_call(
        self, resolver: CredentialResolver
    ) -> None:
        """Test a callable connectivity signal is re-read each time."""
        status = {"online": True}
        gate = FeatureGate(resolver, online=lambda: status["online"])

        assert (await gate.can_analyze()).allowed is True
        status["online"] = False
        assert (await gate.can_analyze()).reason == GateReason.OFFLINE
