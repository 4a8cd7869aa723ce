"""
Exceptions for the Circular Enterprise APIs.

Gateway errors are defined here so the models can raise them; the
``gateway.exceptions`` module re-exports them.
"""
from typing import Any, Optional


class CircularError(Exception):
    """Base exception for all SDK errors."""
    pass


class InvalidAddressError(CircularError, ValueError):
    """Raised when an account is opened with an empty address."""
    pass


class AccountNotOpenError(CircularError):
    """Raised when an operation needs an open account and none is bound."""
    pass


class DecodeError(CircularError, ValueError):
    """Raised on malformed hex, JSON or gateway response shapes."""
    pass


class SigningError(CircularError):
    """Raised when a private key cannot be loaded or used for signing."""
    pass


class CertificateError(CircularError):
    """Raised when a finalized certificate is modified."""
    pass


class PollTimeoutError(CircularError, TimeoutError):
    """Raised when a transaction does not reach finality within the timeout."""

    def __init__(self, message: str, tx_id: str = "", attempts: int = 0):
        self.tx_id = tx_id
        self.attempts = attempts
        super().__init__(message)


class PollCancelledError(CircularError):
    """Raised when a caller cancels an in-progress outcome poll."""
    pass


class GatewayError(CircularError):
    """Base exception for Gateway-related errors."""
    pass


class TransportError(GatewayError):
    """Raised when the Gateway cannot be reached or answers with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class NetworkResolutionError(GatewayError):
    """Raised when a network name cannot be resolved to a Gateway URL."""
    pass


class GatewayRejectionError(GatewayError):
    """Raised when a well-formed Gateway response carries a non-200 result code."""

    def __init__(self, message: str, result_code: Optional[int] = None, response: Any = None):
        self.result_code = result_code
        self.response = response
        super().__init__(message)
