"""
Data models for the Circular Enterprise APIs.

Field aliases carry the gateway's wire names; response models keep unknown
fields so callers see the gateway payload verbatim.
"""
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import GatewayRejectionError

TRANSACTION_NOT_FOUND = "Transaction Not Found"
PENDING_STATUS = "pending"
CERTIFICATE_TX_TYPE = "C_TYPE_CERTIFICATE"


class TransactionRecord(BaseModel):
    """Signed certificate transaction as posted to the add-transaction endpoint"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(..., alias="ID")
    from_address: str = Field(..., alias="From")
    to_address: str = Field(..., alias="To")
    timestamp: str = Field(..., alias="Timestamp")
    payload: str = Field(..., alias="Payload")
    nonce: str = Field(..., alias="Nonce")
    signature: str = Field(..., alias="Signature")
    blockchain: str = Field(..., alias="Blockchain")
    tx_type: str = Field(CERTIFICATE_TX_TYPE, alias="Type")
    version: str = Field(..., alias="Version")

    def to_request(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class TransactionDetail(BaseModel):
    """Structured transaction record returned once the gateway knows the ID"""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    status: Optional[str] = Field(None, alias="Status")

    @property
    def is_final(self) -> bool:
        """True when the status is known and no longer pending."""
        return self.status is not None and self.status.lower() != PENDING_STATUS


class GatewayResponse(BaseModel):
    """Decoded ``{Result, Response}`` envelope common to all NAG endpoints"""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    result: int = Field(..., alias="Result")
    response: Any = Field(None, alias="Response")

    @property
    def ok(self) -> bool:
        return self.result == 200

    def raise_for_result(self) -> "GatewayResponse":
        """
        Raise if the gateway reported a non-200 result code.

        Returns:
            self, so the call can be chained

        Raises:
            GatewayRejectionError: If ``Result`` is not 200
        """
        if not self.ok:
            raise GatewayRejectionError(
                f"Gateway rejected request with result {self.result}: {self.response}",
                result_code=self.result,
                response=self.response,
            )
        return self

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class TransactionLookupResponse(GatewayResponse):
    """
    Response of the transaction lookup endpoint.

    ``response`` is either a ``TransactionDetail`` or a plain status string
    such as ``"Transaction Not Found"``.
    """
    response: Union[TransactionDetail, str, None] = Field(None, alias="Response")

    @property
    def detail(self) -> Optional[TransactionDetail]:
        if isinstance(self.response, TransactionDetail):
            return self.response
        return None

    @property
    def is_found(self) -> bool:
        detail = self.detail
        return self.ok and detail is not None and detail.is_final


class NonceInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    nonce: Optional[int] = Field(None, alias="Nonce")


class NonceResponse(GatewayResponse):
    """Response of the wallet nonce endpoint"""
    response: Union[NonceInfo, str, None] = Field(None, alias="Response")

    @property
    def nonce(self) -> Optional[int]:
        if isinstance(self.response, NonceInfo):
            return self.response.nonce
        return None


class NetworkDiscoveryResponse(BaseModel):
    """Answer of the network discovery endpoint"""
    model_config = ConfigDict(extra="allow")

    status: Optional[str] = None
    url: Optional[str] = None
    message: Optional[str] = None
