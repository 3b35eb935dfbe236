"""
IdRegistry SDK - relay registerFor calls through a hosted transaction relay.
"""
from .version import __version__
from .client import RegistryClient
from .config import RelayConfig, NetworkConfig
from .models import RegistrationRequest, TransactionRequest, TransactionHandle
from .payload import REGISTER_FOR_SIGNATURE, build_register_for_request
from .dispatch import TransactionDispatcher, SyndicateDispatcher, StubDispatcher, get_dispatcher
from .exceptions import (
    IdRegistryError, ConfigurationError, ValidationError, InvalidAddressError,
    InvalidSignatureError, DispatchError, DispatchConnectionError,
    DispatchTimeoutError, DispatchResponseError
)

__all__ = [
    "__version__",
    "RegistryClient",
    "RelayConfig",
    "NetworkConfig",
    "RegistrationRequest",
    "TransactionRequest",
    "TransactionHandle",
    "REGISTER_FOR_SIGNATURE",
    "build_register_for_request",
    "TransactionDispatcher",
    "SyndicateDispatcher",
    "StubDispatcher",
    "get_dispatcher",
    "IdRegistryError",
    "ConfigurationError",
    "ValidationError",
    "InvalidAddressError",
    "InvalidSignatureError",
    "DispatchError",
    "DispatchConnectionError",
    "DispatchTimeoutError",
    "DispatchResponseError",
]
