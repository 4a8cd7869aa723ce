"""
secp256k1 signing for Circular transactions.

Signatures are ECDSA over SHA-256 of the message, DER-encoded and returned
as lowercase hex, which is what the NAG verifies.
"""
import logging
from typing import Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from .ec_constants import SECP256K1_MIN, SECP256K1_MAX
from .exceptions import SigningError
from .utils import hex_fix

logger = logging.getLogger(__name__)


def load_private_key(private_key: str) -> ec.EllipticCurvePrivateKey:
    """
    Load a secp256k1 private key from its hex form.

    Args:
        private_key: Hex private key, with or without ``0x`` prefix

    Returns:
        The private key object

    Raises:
        SigningError: If the key is not hex or outside the curve's range
    """
    value = hex_fix(private_key.strip())
    if not value or any(c not in "0123456789abcdefABCDEF" for c in value):
        raise SigningError("Private key must be a non-empty hex string")

    secret = int(value, 16)
    if not SECP256K1_MIN <= secret <= SECP256K1_MAX:
        raise SigningError("Private key is out of range for secp256k1")
    return ec.derive_private_key(secret, ec.SECP256K1())


def get_public_key(private_key: str) -> str:
    """Uncompressed public key (``04`` + X + Y) as hex."""
    key = load_private_key(private_key)
    return key.public_key().public_bytes(Encoding.X962, PublicFormat.UncompressedPoint).hex()


def sign_data(data: Union[bytes, str], private_key: str) -> str:
    """
    Sign ``data`` with ECDSA/secp256k1 over its SHA-256 digest.

    Args:
        data: Message to sign; text is UTF-8 encoded
        private_key: Hex private key

    Returns:
        DER-encoded signature as lowercase hex
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    key = load_private_key(private_key)
    signature = key.sign(data, ec.ECDSA(hashes.SHA256()))
    return signature.hex()


def verify_signature(data: Union[bytes, str], signature: str, public_key: str) -> bool:
    """
    Check a DER hex signature produced by ``sign_data``.

    Args:
        data: The signed message
        signature: DER signature as hex
        public_key: Uncompressed or compressed public key as hex

    Returns:
        True if the signature is valid for the key
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    try:
        key = ec.EllipticCurvePublicKey.from_encoded_point(
            ec.SECP256K1(), bytes.fromhex(hex_fix(public_key))
        )
        key.verify(bytes.fromhex(hex_fix(signature)), data, ec.ECDSA(hashes.SHA256()))
        return True
    except (InvalidSignature, ValueError) as e:
        logger.debug(f"Signature verification failed: {e}")
        return False
