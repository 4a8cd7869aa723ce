"""
Codec helpers shared by the certificate, transaction and account modules.
"""
import binascii
import hashlib
from datetime import datetime, timezone
from typing import Optional, Union

from .exceptions import DecodeError

TIMESTAMP_FORMAT = "%Y:%m:%d-%H:%M:%S"


def pad_number(num: int) -> str:
    """Add a leading zero to numbers below 10."""
    return f"0{num}" if num < 10 else str(num)


def get_formatted_timestamp(now: Optional[datetime] = None) -> str:
    """
    Get a UTC timestamp in the gateway format ``YYYY:MM:DD-HH:MM:SS``.

    Args:
        now: Moment to format (defaults to the current wall-clock time).
             Naive datetimes are taken to be UTC already.

    Returns:
        Formatted timestamp string
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime(TIMESTAMP_FORMAT)


def hex_fix(value: str) -> str:
    """
    Remove the ``0x`` prefix from a hex string if present.

    The digits themselves are not validated.
    """
    while value.startswith("0x"):
        value = value[2:]
    return value


def string_to_hex(data: Union[bytes, str]) -> str:
    """
    Encode raw bytes (or UTF-8 text) as lowercase hex without a prefix.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    return data.hex()


def hex_to_string(value: str) -> bytes:
    """
    Decode a hex string back into raw bytes.

    Raises:
        DecodeError: If the input has odd length or non-hex characters
    """
    try:
        return binascii.unhexlify(value)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Invalid hex string: {e}")


def sha256_hex(data: Union[bytes, str]) -> str:
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).hexdigest()
