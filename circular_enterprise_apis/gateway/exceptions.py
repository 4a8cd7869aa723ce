"""
Exceptions for the Gateway module.
"""
from ..exceptions import (
    GatewayError, GatewayRejectionError, NetworkResolutionError, TransportError
)

__all__ = [
    'GatewayError',
    'GatewayRejectionError',
    'NetworkResolutionError',
    'TransportError',
]
