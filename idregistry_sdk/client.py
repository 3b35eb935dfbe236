"""
RegistryClient - Main client for relaying IdRegistry registrations.
"""
import logging
from typing import Dict, Any, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from .config import RelayConfig, DEFAULT_NETWORK
from .models import RegistrationRequest, TransactionRequest, TransactionHandle
from .payload import build_register_for_request
from .dispatch import TransactionDispatcher, SyndicateDispatcher
from .exceptions import DispatchError, ValidationError


class RegistryClient:
    """
    Client for submitting registerFor calls through a relay.

    This client handles:
    1. Building the relay payload from the four registerFor arguments
    2. Handing it to a TransactionDispatcher

    The relay signs, pays for and broadcasts the transaction; the
    client only sees the handle it returns.
    """

    def __init__(
        self,
        config: RelayConfig,
        dispatcher: Optional[TransactionDispatcher] = None,
        network: str = DEFAULT_NETWORK,
        contract_address: Optional[str] = None,
        validate: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the RegistryClient

        Args:
            config: Relay configuration, e.g. RelayConfig.from_env()
            dispatcher: Dispatcher to send through (defaults to SyndicateDispatcher)
            network: Network name from the deployment table
            contract_address: Optional IdRegistry address override
            validate: Check addresses, signature and deadline before building
            logger: Optional logger instance to use for debug/info logging
        """
        self.config = config
        self.network = network
        self.contract_address = contract_address
        self.validate = validate
        self.logger = logger or logging.getLogger(__name__)
        self.dispatcher = dispatcher or SyndicateDispatcher(config)

    def build_request(
        self,
        to: str,
        recovery: str,
        deadline: int,
        sig: Union[str, bytes]
    ) -> TransactionRequest:
        """
        Build the relay request without sending it

        Raises:
            ValidationError: If an argument is missing, mistyped or, with
                validation on, malformed
        """
        if isinstance(sig, (bytes, bytearray)):
            # RegistrationRequest carries hex text
            sig = "0x" + bytes(sig).hex()
        try:
            registration = RegistrationRequest(to=to, recovery=recovery, deadline=deadline, sig=sig)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid registration: {e}")

        if self.validate:
            registration = registration.checked()

        return build_register_for_request(
            registration,
            self.config,
            network=self.network,
            contract_address=self.contract_address,
        )

    def register_for(
        self,
        to: str,
        recovery: str,
        deadline: int,
        sig: Union[str, bytes]
    ) -> TransactionHandle:
        """
        Register an id for `to` through the relay

        Args:
            to: Address receiving the id
            recovery: Recovery address for the id
            deadline: Expiry of the signature
            sig: Signature from `to` authorizing the registration

        Returns:
            Relay transaction handle

        Raises:
            ValidationError: If the arguments are invalid
            DispatchError: If the relay cannot be reached or rejects the request
        """
        request = self.build_request(to, recovery, deadline, sig)
        return self.send_request(request)

    def send_request(self, request: TransactionRequest) -> TransactionHandle:
        """
        Forward an already built request to the dispatcher

        Raises:
            DispatchError: If dispatch fails
        """
        self.logger.debug(f"Dispatching transaction: {self._sanitize_request(request)}")
        try:
            handle = self.dispatcher.send(request)
        except DispatchError:
            raise
        except Exception as e:
            self.logger.error(f"Unexpected error during dispatch: {e}")
            raise DispatchError(f"Dispatch failed: {str(e)}")

        self.logger.info(
            f"Submitted {request.function_signature.split('(')[0]} for {request.args.get('to')}: "
            f"transaction {handle.transaction_id}"
        )
        return handle

    def close(self) -> None:
        self.dispatcher.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @staticmethod
    def _sanitize_request(request: TransactionRequest) -> Dict[str, Any]:
        """
        Redact the signature from a request for logging

        Args:
            request: Request to sanitize

        Returns:
            Wire dict safe to log
        """
        result = request.to_wire()
        args = dict(result.get("args", {}))
        if "sig" in args:
            args["sig"] = f"[REDACTED - {len(str(args['sig']))} chars]"
        result["args"] = args
        return result
