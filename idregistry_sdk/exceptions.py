"""
Exceptions for the IdRegistry SDK.
"""
from typing import Optional


class IdRegistryError(Exception):
    """Base exception for all IdRegistry SDK errors."""
    pass


class ConfigurationError(IdRegistryError):
    """Raised when required configuration is missing or malformed."""

    def __init__(self, message: str, variable: Optional[str] = None):
        self.variable = variable
        super().__init__(message)


class ValidationError(IdRegistryError):
    """Raised when a caller-supplied value fails validation."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class InvalidAddressError(ValidationError):
    """Raised when a value is not a 20-byte hex account address."""
    pass


class InvalidSignatureError(ValidationError):
    """Raised when a signature is not a well-formed hex byte string."""
    pass


class DispatchError(IdRegistryError):
    """Base exception for relay dispatch failures."""
    pass


class DispatchConnectionError(DispatchError):
    """Raised when the relay service cannot be reached."""
    pass


class DispatchTimeoutError(DispatchError):
    """Raised when a relay request times out."""
    pass


class DispatchResponseError(DispatchError):
    """Raised when the relay service rejects a request or answers with garbage."""

    def __init__(self, message: str, status_code: Optional[int] = None, error_code: Optional[str] = None):
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(message)
