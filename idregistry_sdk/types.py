"""
Validated identifiers for registerFor arguments.

Each parser returns a normalized value or raises a descriptive
ValidationError subclass naming the offending field.
"""
from typing import Any, Union

from web3 import Web3

from .exceptions import ValidationError, InvalidAddressError, InvalidSignatureError

UINT256_MAX = 2**256 - 1


def parse_address(value: Any, field: str = "address") -> str:
    """
    Parse an account address.

    Args:
        value: Hex address with 0x prefix, any case
        field: Argument name used in error messages

    Returns:
        EIP-55 checksummed address

    Raises:
        InvalidAddressError: If value is not a 20-byte hex address
    """
    if not isinstance(value, str):
        raise InvalidAddressError(
            f"{field} must be a hex string, got {type(value).__name__}", field=field
        )
    if not Web3.is_address(value):
        raise InvalidAddressError(f"{field} is not a valid address: {value!r}", field=field)
    return Web3.to_checksum_address(value)


def parse_signature(value: Union[str, bytes], field: str = "sig") -> str:
    """
    Parse an opaque signature blob into 0x-prefixed lower-case hex.

    Raises:
        InvalidSignatureError: If value is empty or not hex encoded bytes
    """
    if isinstance(value, (bytes, bytearray)):
        if not value:
            raise InvalidSignatureError(f"{field} must not be empty", field=field)
        return "0x" + bytes(value).hex()

    if not isinstance(value, str):
        raise InvalidSignatureError(
            f"{field} must be a hex string or bytes, got {type(value).__name__}", field=field
        )

    body = value[2:] if value.lower().startswith("0x") else value
    if not body:
        raise InvalidSignatureError(f"{field} must not be empty", field=field)
    try:
        raw = bytes.fromhex(body)
    except ValueError as e:
        raise InvalidSignatureError(f"{field} is not valid hex: {str(e)}", field=field)
    return "0x" + raw.hex()


def parse_deadline(value: Any, field: str = "deadline") -> int:
    """Check that a deadline fits in a uint256."""
    # bool is an int subclass; True is never a meaningful deadline
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer, got {type(value).__name__}", field=field)
    if value < 0 or value > UINT256_MAX:
        raise ValidationError(f"{field} out of uint256 range: {value}", field=field)
    return value
