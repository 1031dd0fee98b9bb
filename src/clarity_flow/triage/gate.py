"""Connectivity and feature gate for automated analysis."""

from collections.abc import Callable

from .credentials import CredentialResolver
from .logging_utils import get_logger
from .models import GateDecision, GateReason

logger = get_logger(__name__)

OnlineSignal = bool | Callable[[], bool]


def is_online(signal: OnlineSignal) -> bool:
    """Evaluate a host-provided online signal."""
    return bool(signal()) if callable(signal) else bool(signal)


class FeatureGate:
    """Decides whether automated analysis may be attempted."""

    def __init__(
        self,
        credentials: CredentialResolver,
        online: OnlineSignal = True,
        feature_enabled: bool = True,
    ) -> None:
        """
        Initialize the gate.

        Args:
            credentials: Resolver used for the credential existence check
            online: Host connectivity flag, or a callable returning it
            feature_enabled: AI feature flag
        """
        self._credentials = credentials
        self._online = online
        self._feature_enabled = feature_enabled

    async def can_analyze(self) -> GateDecision:
        """
        Check the preconditions in order: offline, feature flag, credential.

        Returns:
            GateDecision with the first failing reason, if any
        """
        if not is_online(self._online):
            logger.info("Gate closed: device is offline")
            return GateDecision(allowed=False, reason=GateReason.OFFLINE)

        if not self._feature_enabled:
            logger.info("Gate closed: AI features disabled")
            return GateDecision(allowed=False, reason=GateReason.FEATURE_DISABLED)

        if not await self._credentials.has_any_credential():
            logger.info("Gate closed: no AI API configured")
            return GateDecision(allowed=False, reason=GateReason.NO_CREDENTIAL)

        return GateDecision(allowed=True)
