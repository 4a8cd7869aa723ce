"""
Certificate envelope for application data chained to earlier transactions.
"""
import json
from typing import Optional, Union

from .exceptions import CertificateError, DecodeError
from .utils import hex_to_string, string_to_hex
from .version import __version__


class Certificate:
    """
    Application payload plus the chain-linkage fields.

    The payload is stored as hex and can be set only once. ``previous_tx_id``
    and ``previous_block`` are supplied by the caller; nothing here checks
    that they point at real ledger entries.
    """

    def __init__(
        self,
        previous_tx_id: Optional[str] = None,
        previous_block: Optional[str] = None,
        version: str = __version__
    ):
        self._data: Optional[str] = None
        self.previous_tx_id = previous_tx_id
        self.previous_block = previous_block
        self.version = version

    def set_payload(self, data: Union[bytes, str]) -> None:
        """
        Insert application data into the certificate.

        Raises:
            CertificateError: If the payload was already set
        """
        if self._data is not None:
            raise CertificateError("Certificate payload is already set")
        self._data = string_to_hex(data)

    def payload(self) -> bytes:
        """Raw payload bytes (empty if no payload was set)."""
        if self._data is None:
            return b""
        return hex_to_string(self._data)

    def get_data(self) -> str:
        """
        Payload as text.

        Raises:
            DecodeError: If the payload is not valid UTF-8
        """
        try:
            return self.payload().decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Certificate payload is not UTF-8 text: {e}")

    def to_dict(self) -> dict:
        return {
            "data": self.get_data(),
            "previousTxID": self.previous_tx_id,
            "previousBlock": self.previous_block,
            "version": self.version,
        }

    def to_json(self) -> str:
        """Compact JSON form; key order and shape never vary."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)

    def size_bytes(self) -> int:
        """Size of the UTF-8 encoded JSON form, as it is transmitted."""
        return len(self.to_json().encode("utf-8"))

    def __repr__(self) -> str:
        return (
            f"Certificate(previous_tx_id={self.previous_tx_id!r}, "
            f"previous_block={self.previous_block!r}, size={self.size_bytes()})"
        )
