"""Weather provider error classes."""


class ProviderError(Exception):
    """Raised when the weather provider cannot serve a request."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AuthorizationError(ProviderError):
    """401/403 from the provider: a credential problem, never masked by cache."""


class TransientProviderError(ProviderError):
    """Network failure, timeout, malformed body or other non-2xx status."""
