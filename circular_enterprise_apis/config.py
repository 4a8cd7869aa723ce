"""
Network constants and session configuration for the Circular Enterprise APIs.
"""
import os
from dataclasses import dataclass

from .version import __version__

# Well-known chain used when the caller does not pick one
DEFAULT_CHAIN = "0x8a20baa40c45dc5055aeb26197c203e576ef389d9acb171bd62da11dc5ad72b2"

# Endpoint names are appended to this URL verbatim (it already ends in a query string)
DEFAULT_NAG = "https://nag.circularlabs.io/NAG.php?cep="

# Resolves a network name ("devnet", "testnet", "mainnet") to a NAG URL
NETWORK_URL = "https://circularlabs.io/network/getNAG"

DEFAULT_POLL_INTERVAL = 2.0
DEFAULT_TIMEOUT = 30


@dataclass(frozen=True)
class SessionConfig:
    """
    Immutable settings injected into an account session and its gateway client.

    Attributes:
        version: SDK version sent as ``Version`` on every request
        nag_url: Base URL of the Network Access Gateway
        discovery_url: Network discovery endpoint used by ``select_network``
        blockchain: Default chain id for new and closed sessions
        network_node: Node suffix for transaction endpoints
        poll_interval: Seconds between finality polls
        request_timeout: Per-request HTTP timeout in seconds
        retry_count: Transport-level retries (0 disables them)
        verify_ssl: Whether to verify TLS certificates
    """
    version: str = __version__
    nag_url: str = DEFAULT_NAG
    discovery_url: str = NETWORK_URL
    blockchain: str = DEFAULT_CHAIN
    network_node: str = ""
    poll_interval: float = DEFAULT_POLL_INTERVAL
    request_timeout: int = DEFAULT_TIMEOUT
    retry_count: int = 0
    verify_ssl: bool = True

    def __post_init__(self):
        if self.poll_interval < 0:
            raise ValueError(f"poll_interval must be non-negative, got {self.poll_interval}")
        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be positive, got {self.request_timeout}")
        if self.retry_count < 0:
            raise ValueError(f"retry_count must be non-negative, got {self.retry_count}")

    @classmethod
    def from_env(cls, **overrides) -> "SessionConfig":
        """
        Build a config from ``CIRCULAR_*`` environment variables.

        Keyword arguments take precedence over the environment.
        """
        env = os.environ
        values = {
            "nag_url": env.get("CIRCULAR_NAG_URL", DEFAULT_NAG),
            "discovery_url": env.get("CIRCULAR_DISCOVERY_URL", NETWORK_URL),
            "blockchain": env.get("CIRCULAR_BLOCKCHAIN", DEFAULT_CHAIN),
            "network_node": env.get("CIRCULAR_NETWORK_NODE", ""),
            "poll_interval": float(env.get("CIRCULAR_POLL_INTERVAL", str(DEFAULT_POLL_INTERVAL))),
            "request_timeout": int(env.get("CIRCULAR_TIMEOUT", str(DEFAULT_TIMEOUT))),
            "retry_count": int(env.get("CIRCULAR_RETRY_COUNT", "0")),
        }
        values.update(overrides)
        return cls(**values)
