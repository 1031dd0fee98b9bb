"""Custom exceptions for task triage functionality."""


class TriageError(Exception):
    """Base exception for task triage errors."""

    code = "TRIAGE_ERROR"

    @property
    def requires_manual_entry(self) -> bool:
        """Whether the UI should offer the manual classification path."""
        return True


class OfflineError(TriageError):
    """Raised when the device is offline."""

    code = "OFFLINE"

    @property
    def requires_manual_entry(self) -> bool:
        return False


class AIDisabledError(TriageError):
    """Raised when AI features are turned off."""

    code = "AI_DISABLED"


class NoAIAPIError(TriageError):
    """Raised when no provider has a usable credential."""

    code = "NO_AI_API"


class NoValidProviderError(TriageError):
    """Raised when provider selection yields nothing despite an open gate."""

    code = "NO_VALID_PROVIDER"


class AIFailedError(TriageError):
    """Raised for any provider, transport or HTTP failure."""

    code = "AI_FAILED"


class ResponseParseError(AIFailedError):
    """Raised when the model output fails parsing or validation."""

    code = "AI_RESPONSE_PARSE_ERROR"


class ProviderError(Exception):
    """Base exception for provider adapter failures."""

    code = "PROVIDER_ERROR"

    def __init__(self, message: str, provider_id: str | None = None) -> None:
        super().__init__(message)
        self.provider_id = provider_id


class NoAPIKeyError(ProviderError):
    """Exception raised when a provider has no credential."""

    code = "NO_API_KEY"

    def __init__(self, message: str, provider_id: str | None = None) -> None:
        super().__init__(message, provider_id)
        if provider_id:
            self.code = f"NO_{provider_id.upper()}_API_KEY"


class InvalidAPIKeyError(ProviderError):
    """Exception raised when a credential fails format validation."""

    code = "INVALID_API_KEY"


class ProviderTransportError(ProviderError):
    """Exception raised when the HTTP call fails at the transport layer."""

    code = "TRANSPORT_ERROR"


class ProviderHTTPError(ProviderError):
    """Exception raised for non-success HTTP responses."""

    code = "HTTP_ERROR"

    def __init__(
        self,
        message: str,
        provider_id: str | None = None,
        status_code: int = 0,
        body: str = "",
    ) -> None:
        super().__init__(message, provider_id)
        self.status_code = status_code
        self.body = body


class InvalidProviderResponseError(ProviderError):
    """Exception raised when the response envelope has no text payload."""

    code = "INVALID_RESPONSE"


class ConfigStoreError(Exception):
    """Exception raised for provider-config store errors."""

    pass
