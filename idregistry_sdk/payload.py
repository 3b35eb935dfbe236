"""
Payload builder for registerFor relay transactions.
"""
import re
from typing import Any, Mapping, Optional, Union

from web3 import Web3

from .config import RelayConfig, NetworkConfig, DEFAULT_NETWORK
from .models import RegistrationRequest, TransactionRequest

REGISTER_FOR_SIGNATURE = "registerFor(address to, address recovery, uint256 deadline, bytes sig)"

_SIGNATURE_RE = re.compile(r"^\s*(\w+)\s*\((.*)\)\s*$")


def build_register_for_request(
    registration: Union[RegistrationRequest, Mapping[str, Any]],
    config: RelayConfig,
    network: str = DEFAULT_NETWORK,
    contract_address: Optional[str] = None
) -> TransactionRequest:
    """
    Combine a registration with the fixed deployment constants.

    The four caller fields are copied as-is into the argument mapping;
    nothing is validated or defaulted here.

    Args:
        registration: RegistrationRequest or a mapping with to, recovery, deadline and sig
        config: Relay configuration providing the project id and any
            configured contract address
        network: Network name from the deployment table
        contract_address: Per-call override, wins over config.contract_address

    Returns:
        TransactionRequest ready for a TransactionDispatcher
    """
    if not isinstance(registration, RegistrationRequest):
        registration = RegistrationRequest.model_validate(dict(registration))

    address = NetworkConfig.get_contract_address(network, override=contract_address or config.contract_address)

    return TransactionRequest(
        project_id=config.project_id,
        contract_address=address,
        chain_id=NetworkConfig.get_chain_id(network),
        function_signature=REGISTER_FOR_SIGNATURE,
        args={
            "to": registration.to,
            "recovery": registration.recovery,
            "deadline": registration.deadline,
            "sig": registration.sig,
        },
    )


def canonical_signature(signature: str = REGISTER_FOR_SIGNATURE) -> str:
    """
    Strip parameter names from a human-readable function signature.

    >>> canonical_signature("registerFor(address to, bytes sig)")
    'registerFor(address,bytes)'
    """
    match = _SIGNATURE_RE.match(signature)
    if not match:
        raise ValueError(f"Malformed function signature: {signature!r}")
    name, params = match.groups()
    types = [p.split()[0] for p in params.split(",") if p.strip()]
    return f"{name}({','.join(types)})"


def function_selector(signature: str = REGISTER_FOR_SIGNATURE) -> str:
    """4-byte keccak selector of a function signature, 0x-prefixed"""
    digest = Web3.keccak(text=canonical_signature(signature))
    return "0x" + bytes(digest[:4]).hex()
