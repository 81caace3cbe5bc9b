"""Custom exceptions for repology-install."""


class RepologyInstallError(Exception):
    """Base exception for all repology-install operations."""


class UnsupportedOperatingSystemError(RepologyInstallError):
    """Raised when the host operating system cannot be classified."""

    def __init__(self, message: str = "Unsupported operating system"):
        super().__init__(message)


class ConfigurationError(RepologyInstallError):
    """Raised when configuration validation fails."""


class RegistryError(RepologyInstallError):
    """Base exception for Repology registry operations."""


class FailedRequestError(RegistryError):
    """Raised when Repology answers with a non-success HTTP status."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"Request failed with status code {status_code}: {message}")


class RegistryRequestError(RegistryError):
    """Raised when the request could not be sent or no response arrived."""


class ResponseParseError(RegistryError):
    """Raised when the Repology response cannot be deserialized."""
