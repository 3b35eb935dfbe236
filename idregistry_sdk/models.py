"""
Data models for the IdRegistry SDK.
"""
from typing import Dict, Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .types import parse_address, parse_signature, parse_deadline


class RegistrationRequest(BaseModel):
    """Caller-supplied arguments of a registerFor call"""
    # strict: values pass through as given, never coerced
    model_config = ConfigDict(frozen=True, strict=True)

    to: str
    recovery: str
    deadline: int
    sig: str

    def checked(self) -> "RegistrationRequest":
        """
        Return a copy whose fields passed address, signature and deadline checks.

        Raises:
            InvalidAddressError: If to or recovery is not an address
            InvalidSignatureError: If sig is not hex bytes
            ValidationError: If deadline is out of range
        """
        return RegistrationRequest(
            to=parse_address(self.to, "to"),
            recovery=parse_address(self.recovery, "recovery"),
            deadline=parse_deadline(self.deadline),
            sig=parse_signature(self.sig),
        )


class TransactionRequest(BaseModel):
    """Request body for the relay's sendTransaction endpoint"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    project_id: str = Field(..., alias="projectId")
    contract_address: str = Field(..., alias="contractAddress")
    chain_id: int = Field(..., alias="chainId")
    function_signature: str = Field(..., alias="functionSignature")
    args: Dict[str, Any]

    def to_wire(self) -> Dict[str, Any]:
        """Serialize with the relay's camelCase field names"""
        return self.model_dump(by_alias=True)


class TransactionHandle(BaseModel):
    """Transaction reference returned by the relay"""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    transaction_id: str = Field(..., alias="transactionId")
    project_id: Optional[str] = Field(None, alias="projectId")
