"""
Transaction construction for certificate submissions.

The gateway recomputes the transaction ID from the submitted fields, so the
pre-image built here must match it exactly.
"""
import json
from typing import Union

from .models import CERTIFICATE_TX_TYPE, TransactionRecord
from .utils import hex_fix, sha256_hex, string_to_hex

CERTIFICATE_ACTION = "CP_CERTIFICATE"


def build_certificate_payload(data: Union[bytes, str]) -> str:
    """
    Wrap certificate data in its action object and hex-encode it.

    Args:
        data: Certificate content (usually ``Certificate.to_json()``)

    Returns:
        Hex of ``{"Action":"CP_CERTIFICATE","Data":<hex data>}``
    """
    action = {"Action": CERTIFICATE_ACTION, "Data": string_to_hex(data)}
    return string_to_hex(json.dumps(action, separators=(",", ":")))


def compute_transaction_id(
    blockchain: str,
    sender: str,
    recipient: str,
    payload: str,
    nonce: int,
    timestamp: str
) -> str:
    """
    SHA-256 of blockchain, sender, recipient, payload, nonce and timestamp.

    Hex fields are normalized; the nonce is written in decimal.
    """
    preimage = (
        hex_fix(blockchain)
        + hex_fix(sender)
        + hex_fix(recipient)
        + payload
        + str(nonce)
        + timestamp
    )
    return sha256_hex(preimage)


def build_transaction_record(
    tx_id: str,
    address: str,
    payload: str,
    nonce: int,
    signature: str,
    blockchain: str,
    timestamp: str,
    version: str
) -> TransactionRecord:
    """Assemble the record posted for a certificate transaction."""
    return TransactionRecord(
        id=tx_id,
        from_address=hex_fix(address),
        to_address=hex_fix(address),
        timestamp=timestamp,
        payload=payload,
        nonce=str(nonce),
        signature=signature,
        blockchain=hex_fix(blockchain),
        tx_type=CERTIFICATE_TX_TYPE,
        version=version,
    )
