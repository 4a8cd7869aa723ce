"""
Gateway client implementation for the Circular Enterprise APIs.

This module provides an HTTP client for the Network Access Gateway (NAG):
it builds the JSON request for each endpoint, sends it, and decodes the
response into the SDK models.
"""
import os
import logging
import urllib.parse
from typing import Any, Dict, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import SessionConfig
from ..exceptions import DecodeError
from ..models import (
    GatewayResponse, NetworkDiscoveryResponse, NonceResponse,
    TransactionLookupResponse, TransactionRecord,
)
from ..utils import hex_fix
from .exceptions import NetworkResolutionError, TransportError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

NONCE_ENDPOINT = "Circular_GetWalletNonce_"
TRANSACTION_BY_ID_ENDPOINT = "Circular_GetTransactionbyID_"
ADD_TRANSACTION_ENDPOINT = "Circular_AddTransaction_"


class GatewayClient:
    """
    Client for the NAG HTTP endpoints.

    Endpoint URLs are formed by appending the endpoint name (and, for
    transaction endpoints, the network node) to ``base_url`` verbatim.
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        base_url: Optional[str] = None,
        network_node: Optional[str] = None,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the Gateway client.

        Args:
            config: Session configuration (defaults to ``SessionConfig()``)
            base_url: NAG base URL (defaults to ``config.nag_url``)
            network_node: Node suffix for transaction endpoints
            session: Pre-built requests session (mainly for tests)
            logger: Optional logger instance

        Raises:
            ValueError: If the gateway URL is invalid or uses insecure HTTP
        """
        self.config = config or SessionConfig()
        self.logger = logger or logging.getLogger(__name__)
        self._base_url = ""
        self.base_url = base_url if base_url is not None else self.config.nag_url
        self.network_node = network_node if network_node is not None else self.config.network_node
        self.timeout = self.config.request_timeout

        if session is None:
            session = requests.Session()
            retries = Retry(
                total=self.config.retry_count,
                backoff_factor=0.5,
                status_forcelist=[500, 502, 503, 504],
                allowed_methods=["GET", "POST"],
                raise_on_status=False,
            )
            session.mount("http://", HTTPAdapter(max_retries=retries))
            session.mount("https://", HTTPAdapter(max_retries=retries))
            session.verify = self.config.verify_ssl
        self.session = session

    @property
    def base_url(self) -> str:
        return self._base_url

    @base_url.setter
    def base_url(self, url: Optional[str]) -> None:
        if url:
            self._validate_gateway_url(url)
        self._base_url = url or ""

    @staticmethod
    def _validate_gateway_url(url: str) -> None:
        """
        Validate the gateway URL is secure.

        Raises:
            ValueError: If URL is invalid or uses insecure HTTP
        """
        parsed = urllib.parse.urlparse(url)
        host = parsed.hostname or ""
        is_local = host in ("localhost", "127.0.0.1", "::1")

        if parsed.scheme not in ("http", "https") or not host:
            raise ValueError(f"Invalid gateway URL '{url}'")
        if parsed.scheme != "https" and not is_local:
            if os.environ.get("CIRCULAR_INSECURE_NAG") != "1":
                raise ValueError(
                    f"Gateway URL must use HTTPS for security (got: {parsed.scheme}://). "
                    "Set CIRCULAR_INSECURE_NAG=1 to allow HTTP for development."
                )

    def endpoint_url(self, endpoint: str, with_node: bool = True) -> str:
        """Build the full URL of a NAG endpoint."""
        if not self.base_url:
            raise TransportError("Gateway URL is not set")
        node = self.network_node if with_node else ""
        return f"{self.base_url}{endpoint}{node or ''}"

    def _decode(self, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            self.logger.error(f"Invalid JSON response from {response.url}: {e}")
            raise DecodeError(f"Invalid JSON response: {e}")

    @staticmethod
    def _parse(model: Type[M], data: Any) -> M:
        if not isinstance(data, dict):
            raise DecodeError(f"Unexpected response shape: {type(data).__name__}")
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise DecodeError(f"Malformed gateway response: {e}")

    def _post(self, url: str, body: Dict[str, Any]) -> Any:
        """
        POST a JSON body and return the decoded JSON answer.

        Raises:
            TransportError: On connection failure or a non-2xx HTTP status
            DecodeError: If the body is not valid JSON
        """
        self.logger.debug(f"POST {url} fields={sorted(body)}")
        try:
            response = self.session.post(url, json=body, timeout=self.timeout)
        except requests.RequestException as e:
            self.logger.error(f"Gateway request to {url} failed: {e}")
            raise TransportError(f"Gateway request failed: {e}")

        if not 200 <= response.status_code < 300:
            self.logger.error(f"Gateway returned HTTP {response.status_code} for {url}")
            raise TransportError(
                f"Network response was not ok. HTTP Code: {response.status_code}",
                status_code=response.status_code,
            )
        return self._decode(response)

    def get_wallet_nonce(self, blockchain: str, address: str) -> NonceResponse:
        """
        Fetch the latest nonce the ledger has seen for an address.

        Returns:
            Decoded nonce response (check ``result`` and ``nonce``)
        """
        body = {
            "Blockchain": hex_fix(blockchain),
            "Address": hex_fix(address),
            "Version": self.config.version,
        }
        data = self._post(self.endpoint_url(NONCE_ENDPOINT, with_node=False), body)
        return self._parse(NonceResponse, data)

    def get_transaction_by_id(
        self,
        blockchain: str,
        tx_id: str,
        start: int,
        end: int
    ) -> TransactionLookupResponse:
        """
        Look up a transaction in the block range ``[start, end]``.

        Returns:
            Lookup response whose body is a ``TransactionDetail`` or a status string
        """
        body = {
            "Blockchain": hex_fix(blockchain),
            "ID": hex_fix(tx_id),
            "Start": str(start),
            "End": str(end),
            "Version": self.config.version,
        }
        data = self._post(self.endpoint_url(TRANSACTION_BY_ID_ENDPOINT), body)
        return self._parse(TransactionLookupResponse, data)

    def add_transaction(self, record: TransactionRecord) -> GatewayResponse:
        """
        Submit a signed transaction.

        Returns:
            The gateway response, not checked for its result code
        """
        data = self._post(self.endpoint_url(ADD_TRANSACTION_ENDPOINT), record.to_request())
        return self._parse(GatewayResponse, data)

    def resolve_network(self, network: str) -> str:
        """
        Resolve a network name to its NAG URL via the discovery endpoint.

        Args:
            network: Network name, e.g. ``"testnet"``

        Returns:
            The NAG base URL for that network

        Raises:
            NetworkResolutionError: On transport failure, malformed answer,
                or an explicit failure status
        """
        url = self.config.discovery_url
        try:
            response = self.session.get(url, params={"network": network}, timeout=self.timeout)
        except requests.RequestException as e:
            self.logger.error(f"Error fetching network URL for {network!r}: {e}")
            raise NetworkResolutionError(f"Failed to fetch URL: {e}")

        # Error statuses may still carry a JSON body with the reason
        parse_error = None
        try:
            data = response.json()
        except ValueError as e:
            data = None
            parse_error = e

        if not response.ok:
            message = data.get("message") if isinstance(data, dict) else None
            self.logger.error(
                f"Network discovery for {network!r} returned HTTP {response.status_code}: {message}"
            )
            if message:
                raise NetworkResolutionError(f"{message} (HTTP {response.status_code})")
            raise NetworkResolutionError(f"Failed to fetch URL: HTTP {response.status_code}")
        if parse_error is not None:
            self.logger.error(f"Error parsing network discovery response: {parse_error}")
            raise NetworkResolutionError(f"Failed to parse JSON: {parse_error}")

        if not isinstance(data, dict):
            raise NetworkResolutionError(f"Unexpected discovery response: {data!r}")
        try:
            discovery = NetworkDiscoveryResponse.model_validate(data)
        except ValidationError as e:
            raise NetworkResolutionError(f"Malformed discovery response: {e}")
        if discovery.status == "success" and discovery.url:
            self.logger.info(f"Resolved network {network!r} to {discovery.url}")
            return discovery.url
        raise NetworkResolutionError(discovery.message or "Failed to get URL")

    def close(self) -> None:
        """Close the underlying HTTP session."""
        try:
            self.session.close()
        except Exception as e:
            self.logger.warning(f"Error closing gateway session: {e}", exc_info=True)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
