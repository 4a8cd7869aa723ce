"""
Tests for secp256k1 signing.
"""
import pytest
from cryptography.hazmat.primitives.asymmetric.utils import decode_dss_signature

from circular_enterprise_apis.crypto import get_public_key, load_private_key, sign_data, verify_signature
from circular_enterprise_apis.ec_constants import SECP256K1_N
from circular_enterprise_apis.exceptions import SigningError
from conftest import TEST_PRIV_KEY


def test_public_key_format():
    """Public keys are uncompressed points"""
    pub = get_public_key(TEST_PRIV_KEY)
    assert len(pub) == 130
    assert pub.startswith("04")


def test_public_key_of_one_is_generator():
    """Private key 1 maps to the curve generator"""
    pub = get_public_key("01")
    assert pub == (
        "04"
        "79be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
        "483ada7726a3c4655da4fbfc0e1108a8fd17b448a68554199c47d08ffb10d4b8"
    )


def test_prefix_is_optional():
    """The 0x prefix does not change the key"""
    assert get_public_key(TEST_PRIV_KEY) == get_public_key(TEST_PRIV_KEY[2:])


def test_sign_and_verify():
    """Signatures verify against the matching public key"""
    sig = sign_data("message", TEST_PRIV_KEY)
    pub = get_public_key(TEST_PRIV_KEY)
    assert verify_signature("message", sig, pub)
    assert verify_signature(b"message", sig, pub)
    assert not verify_signature("other message", sig, pub)


def test_signature_is_der_hex():
    """Signatures are DER-encoded and hex"""
    sig = sign_data(b"payload", TEST_PRIV_KEY)
    assert sig == sig.lower()
    raw = bytes.fromhex(sig)
    assert raw[0] == 0x30
    r, s = decode_dss_signature(raw)
    assert 0 < r < SECP256K1_N
    assert 0 < s < SECP256K1_N


def test_verify_with_wrong_key():
    """A signature does not verify under another key"""
    sig = sign_data("message", TEST_PRIV_KEY)
    assert not verify_signature("message", sig, get_public_key("02"))


def test_verify_garbage_signature():
    """Malformed signatures are reported as invalid"""
    pub = get_public_key(TEST_PRIV_KEY)
    assert not verify_signature("message", "3000", pub)
    assert not verify_signature("message", "not-hex", pub)


@pytest.mark.parametrize("bad", ["", "0x", "xyz", "12 34", "0", format(SECP256K1_N, "x")])
def test_invalid_private_keys(bad):
    """Empty, non-hex and out-of-range keys are rejected"""
    with pytest.raises(SigningError):
        load_private_key(bad)


def test_sign_with_invalid_key():
    with pytest.raises(SigningError):
        sign_data("message", "nothex")
