"""
Tests for the gateway response models.
"""
import pytest

from circular_enterprise_apis.gateway.exceptions import GatewayRejectionError
from circular_enterprise_apis.models import (
    TRANSACTION_NOT_FOUND,
    GatewayResponse,
    NonceResponse,
    TransactionDetail,
    TransactionLookupResponse,
)


def test_gateway_response_ok():
    resp = GatewayResponse.model_validate({"Result": 200, "Response": "done"})
    assert resp.ok
    assert resp.raise_for_result() is resp
    assert resp.to_dict() == {"Result": 200, "Response": "done"}


def test_gateway_response_keeps_extra_fields():
    """Unknown fields survive decoding"""
    resp = GatewayResponse.model_validate({"Result": 200, "Response": None, "Node": "n1"})
    assert resp.to_dict()["Node"] == "n1"


def test_gateway_response_rejection():
    """Non-200 results raise with the code and body attached"""
    resp = GatewayResponse.model_validate({"Result": 108, "Response": "Duplicate"})
    assert not resp.ok
    with pytest.raises(GatewayRejectionError) as exc_info:
        resp.raise_for_result()
    assert exc_info.value.result_code == 108
    assert exc_info.value.response == "Duplicate"


@pytest.mark.parametrize("status,final", [
    ("Executed", True),
    ("Failed", True),
    ("Pending", False),
    ("pending", False),
    ("PENDING", False),
    (None, False),
])
def test_detail_is_final(status, final):
    """Only a known, non-pending status is final"""
    detail = TransactionDetail(status=status)
    assert detail.is_final is final


def test_lookup_with_detail():
    lookup = TransactionLookupResponse.model_validate({
        "Result": 200,
        "Response": {"Status": "Executed", "BlockID": "42"},
    })
    assert lookup.is_found
    assert lookup.detail.status == "Executed"
    assert lookup.detail.model_extra == {"BlockID": "42"}


def test_lookup_not_found():
    lookup = TransactionLookupResponse.model_validate({"Result": 200, "Response": TRANSACTION_NOT_FOUND})
    assert lookup.detail is None
    assert not lookup.is_found


def test_lookup_pending():
    lookup = TransactionLookupResponse.model_validate({"Result": 200, "Response": {"Status": "Pending"}})
    assert lookup.detail is not None
    assert not lookup.is_found


def test_lookup_error_result():
    """A final-looking body under a non-200 result is not a finding"""
    lookup = TransactionLookupResponse.model_validate({"Result": 404, "Response": {"Status": "Executed"}})
    assert not lookup.is_found


def test_nonce_response():
    assert NonceResponse.model_validate({"Result": 200, "Response": {"Nonce": 7}}).nonce == 7
    assert NonceResponse.model_validate({"Result": 200, "Response": {}}).nonce is None
    assert NonceResponse.model_validate({"Result": 115, "Response": "Wrong address"}).nonce is None


def test_rejection_error_is_shared_with_gateway_package():
    """The gateway package exposes the same exception classes the models raise"""
    from circular_enterprise_apis import exceptions
    from circular_enterprise_apis.gateway import exceptions as gateway_exceptions

    assert gateway_exceptions.GatewayRejectionError is exceptions.GatewayRejectionError
    assert issubclass(exceptions.GatewayRejectionError, exceptions.CircularError)

    resp = GatewayResponse.model_validate({"Result": 500, "Response": None})
    with pytest.raises(exceptions.GatewayError):
        resp.raise_for_result()
