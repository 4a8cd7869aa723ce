"""
Circular Enterprise APIs - certify data on the Circular ledger.
"""
from .version import __version__
from .account import CEPAccount
from .certificate import Certificate
from .config import DEFAULT_CHAIN, DEFAULT_NAG, NETWORK_URL, SessionConfig
from .exceptions import (
    AccountNotOpenError, CertificateError, CircularError, DecodeError,
    InvalidAddressError, PollCancelledError, PollTimeoutError, SigningError,
)
from .gateway import (
    GatewayClient, GatewayError, GatewayRejectionError, NetworkResolutionError, TransportError
)
from .models import (
    GatewayResponse, NonceResponse, TransactionDetail, TransactionLookupResponse, TransactionRecord
)
from .utils import get_formatted_timestamp, hex_fix, hex_to_string, string_to_hex

__all__ = [
    "__version__",
    "CEPAccount",
    "Certificate",
    "SessionConfig",
    "DEFAULT_CHAIN",
    "DEFAULT_NAG",
    "NETWORK_URL",
    "CircularError",
    "InvalidAddressError",
    "AccountNotOpenError",
    "DecodeError",
    "SigningError",
    "CertificateError",
    "PollTimeoutError",
    "PollCancelledError",
    "GatewayClient",
    "GatewayError",
    "TransportError",
    "NetworkResolutionError",
    "GatewayRejectionError",
    "GatewayResponse",
    "NonceResponse",
    "TransactionDetail",
    "TransactionLookupResponse",
    "TransactionRecord",
    "get_formatted_timestamp",
    "hex_fix",
    "hex_to_string",
    "string_to_hex",
]
