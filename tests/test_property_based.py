"""
Property-based tests for the Circular Enterprise APIs.

These tests verify that properties hold true across many random inputs.
"""
import json

from hypothesis import given, settings, strategies as st

from circular_enterprise_apis.certificate import Certificate
from circular_enterprise_apis.crypto import get_public_key, sign_data, verify_signature
from circular_enterprise_apis.transaction import build_certificate_payload, compute_transaction_id
from circular_enterprise_apis.utils import hex_fix, hex_to_string, string_to_hex
from conftest import TEST_PRIV_KEY

hex_strategy = st.text(alphabet="0123456789abcdef", max_size=64)
timestamp_strategy = st.from_regex(r"20[0-9]{2}:[01][0-9]:[0-3][0-9]-[0-2][0-9]:[0-5][0-9]:[0-5][0-9]", fullmatch=True)
nonce_strategy = st.integers(min_value=0, max_value=2**53)


@given(value=st.text(max_size=50))
def test_hex_fix_idempotent(value):
    """Stripping the prefix twice is the same as stripping it once"""
    once = hex_fix(value)
    assert hex_fix(once) == once
    assert not once.startswith("0x")


@given(data=st.binary(max_size=256))
def test_hex_roundtrip(data):
    encoded = string_to_hex(data)
    assert len(encoded) == 2 * len(data)
    assert hex_to_string(encoded) == data


@given(text=st.text(max_size=200))
def test_certificate_json_roundtrip(text):
    """Any text payload survives the JSON form and reports its byte size"""
    cert = Certificate(previous_tx_id="ab", previous_block="1", version="1.0.0")
    cert.set_payload(text)
    decoded = json.loads(cert.to_json())
    assert decoded["data"] == text
    assert cert.size_bytes() == len(cert.to_json().encode("utf-8"))


@settings(max_examples=50)
@given(
    chain=hex_strategy,
    address=hex_strategy,
    data=st.text(max_size=100),
    nonce=nonce_strategy,
    timestamp=timestamp_strategy,
)
def test_transaction_id_deterministic(chain, address, data, nonce, timestamp):
    """Same inputs give the same 64-digit ID, with or without prefixes"""
    payload = build_certificate_payload(data)
    first = compute_transaction_id(chain, address, address, payload, nonce, timestamp)
    again = compute_transaction_id("0x" + chain, "0x" + address, address, payload, nonce, timestamp)
    assert first == again
    assert len(first) == 64
    assert int(first, 16) >= 0


@settings(max_examples=50)
@given(nonce=nonce_strategy, timestamp=timestamp_strategy)
def test_transaction_id_depends_on_nonce(nonce, timestamp):
    payload = build_certificate_payload("doc")
    assert compute_transaction_id("aa", "bb", "bb", payload, nonce, timestamp) != compute_transaction_id(
        "aa", "bb", "bb", payload, nonce + 1, timestamp
    )


@settings(max_examples=25, deadline=None)
@given(message=st.binary(min_size=1, max_size=128))
def test_signatures_verify(message):
    sig = sign_data(message, TEST_PRIV_KEY)
    assert verify_signature(message, sig, get_public_key(TEST_PRIV_KEY))
