# exceptions.py


class MigrationError(Exception):
    """Base class for every failure the migration core reports."""

    kind = "error"


class ConfigurationError(MigrationError):
    """Required credentials or settings are missing or malformed. Not retryable."""

    kind = "configuration"


class ValidationError(MigrationError):
    """A caller-supplied request is missing required fields."""

    kind = "validation"


class ProviderUnavailable(MigrationError):
    """A network, authentication or quota failure reported by a remote provider."""

    kind = "provider_unavailable"

    def __init__(self, provider: str, message: str, timeout: bool = False):
        self.provider = provider
        self.message = message
        self.timeout = timeout
        super().__init__(f"[{provider}] {message}")


class NotFoundError(ProviderUnavailable):
    """The provider reports that the requested object does not exist."""

    kind = "not_found"
