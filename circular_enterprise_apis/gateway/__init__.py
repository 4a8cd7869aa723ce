"""
Gateway module for the Circular Enterprise APIs.

This module provides the HTTP client for the Network Access Gateway (NAG),
which relays transactions to the Circular ledger network.
"""
from .client import GatewayClient
from .exceptions import (
    GatewayError, GatewayRejectionError, NetworkResolutionError, TransportError
)

__all__ = [
    'GatewayClient',
    'GatewayError',
    'GatewayRejectionError',
    'NetworkResolutionError',
    'TransportError',
]
