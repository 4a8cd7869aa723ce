"""
CEPAccount - account session for certifying data on the Circular ledger.
"""
import asyncio
import logging
import threading
import time
from typing import Optional, Union

from .certificate import Certificate
from .config import SessionConfig
from .crypto import sign_data as _sign_data
from .exceptions import (
    AccountNotOpenError, DecodeError, InvalidAddressError,
    PollCancelledError, PollTimeoutError, SigningError,
)
from .gateway import GatewayClient
from .gateway._rate_limited_log import rate_limited_log
from .gateway.exceptions import (
    GatewayError, GatewayRejectionError, NetworkResolutionError, TransportError
)
from .models import GatewayResponse, TransactionDetail, TransactionLookupResponse, TransactionRecord
from .transaction import build_certificate_payload, build_transaction_record, compute_transaction_id
from .utils import get_formatted_timestamp

# Block range searched while polling for an outcome
OUTCOME_START_BLOCK = 0
OUTCOME_END_BLOCK = 10


class CEPAccount:
    """
    Stateful session bound to one account address.

    The session:
    1. Tracks the account nonce and the target chain
    2. Derives, signs and submits certificate transactions
    3. Polls the gateway until a transaction reaches finality

    Failures are raised as exceptions, except for ``refresh_nonce`` which
    reports them through its return value and ``last_error``. Every failing
    operation records a readable message in ``last_error``.

    A session is meant for sequential use from one thread.
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        gateway: Optional[GatewayClient] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize an empty (not yet opened) session.

        Args:
            config: Session configuration (defaults to the injected gateway's
                config, else ``SessionConfig()``)
            gateway: Gateway client to use (built from ``config`` if omitted).
                Its URL and node become the session's defaults, and its
                config supplies the ``Version`` sent on the wire.
            logger: Optional logger instance to use for debug/info logging
        """
        if config is None:
            config = gateway.config if gateway is not None else SessionConfig()
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.gateway = gateway or GatewayClient(self.config, logger=self.logger)
        # Addressing restored by close()
        self._default_base_url = self.gateway.base_url
        self._default_network_node = self.gateway.network_node
        self._reset()

    def _reset(self) -> None:
        self.address: Optional[str] = None
        self.blockchain: str = self.config.blockchain
        self.nonce: int = 0
        self.last_error: str = ""
        self.latest_tx_id: Optional[str] = None
        self.poll_interval: float = self.config.poll_interval
        self.gateway.base_url = self._default_base_url
        self.gateway.network_node = self._default_network_node

    @property
    def code_version(self) -> str:
        return self.gateway.config.version

    @property
    def gateway_base_url(self) -> str:
        return self.gateway.base_url

    @gateway_base_url.setter
    def gateway_base_url(self, url: str) -> None:
        self.gateway.base_url = url

    @property
    def network_node(self) -> str:
        return self.gateway.network_node

    @network_node.setter
    def network_node(self, node: str) -> None:
        self.gateway.network_node = node

    @property
    def is_open(self) -> bool:
        return bool(self.address)

    def _require_open(self) -> None:
        if not self.address:
            self.last_error = "Account not open"
            raise AccountNotOpenError("Account is not open")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self, address: str) -> None:
        """
        Bind the session to an account address.

        Calling it again with another valid address rebinds the session.

        Raises:
            InvalidAddressError: If the address is empty or whitespace
        """
        if not address or not address.strip():
            self.last_error = "Invalid address"
            raise InvalidAddressError("Invalid address")
        self.address = address.strip()
        self.last_error = ""
        self.logger.debug(f"Opened account {self.address[:10]}...")

    def close(self) -> None:
        """Reset every field to its default; network operations then need ``open`` again."""
        self._reset()

    def set_blockchain(self, blockchain: str) -> None:
        self.blockchain = blockchain

    def select_network(self, network: str) -> str:
        """
        Resolve a network name and point the session at its gateway.

        Unlike the bare discovery call, this also assigns the resolved URL
        to ``gateway_base_url``.

        Args:
            network: Network name (e.g. ``"devnet"``, ``"testnet"``, ``"mainnet"``)

        Returns:
            The resolved NAG URL

        Raises:
            NetworkResolutionError: If the URL cannot be fetched, parsed, or is refused
        """
        try:
            url = self.gateway.resolve_network(network)
            self.gateway_base_url = url
        except NetworkResolutionError as e:
            self.last_error = str(e)
            raise
        except ValueError as e:
            self.last_error = str(e)
            raise NetworkResolutionError(f"Discovery returned an unusable URL: {e}")
        self.logger.info(f"Selected network {network!r}")
        return url

    def close_connection(self) -> None:
        """Release the gateway's HTTP resources."""
        self.gateway.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        self.close_connection()

    # ------------------------------------------------------------------
    # Nonce
    # ------------------------------------------------------------------

    def refresh_nonce(self) -> bool:
        """
        Fetch the account nonce and store the next usable value.

        Network and format problems do not raise: the nonce is left as it
        was, ``last_error`` is set, and False is returned.

        Returns:
            True if ``nonce`` now equals the ledger nonce + 1

        Raises:
            AccountNotOpenError: If no address is bound
        """
        self._require_open()
        try:
            response = self.gateway.get_wallet_nonce(self.blockchain, self.address)
        except (TransportError, DecodeError) as e:
            self.last_error = f"Network error: {e}"
            self.logger.warning(f"Nonce refresh failed: {e}")
            return False

        if response.ok and response.nonce is not None:
            self.nonce = response.nonce + 1
            self.last_error = ""
            self.logger.debug(f"Nonce for {self.address[:10]}... is now {self.nonce}")
            return True

        self.last_error = "Invalid response format or missing Nonce field"
        self.logger.warning(f"Nonce refresh rejected (result {response.result}): {response.response}")
        return False

    # Name used by earlier releases
    update_account = refresh_nonce

    # ------------------------------------------------------------------
    # Signing and submission
    # ------------------------------------------------------------------

    def sign_data(self, data: Union[bytes, str], private_key: str) -> str:
        """
        Sign data with the account's secp256k1 private key.

        Args:
            data: Data to sign (hashed with SHA-256 before signing)
            private_key: Hex private key

        Returns:
            DER signature as hex

        Raises:
            AccountNotOpenError: If no address is bound
            SigningError: If the private key is invalid
        """
        self._require_open()
        try:
            return _sign_data(data, private_key)
        except SigningError as e:
            self.last_error = str(e)
            raise

    def derive_transaction_id(
        self,
        certificate_json: Union[bytes, str],
        timestamp: Optional[str] = None
    ) -> str:
        """
        Compute the ID of a certificate transaction from the current session state.

        Args:
            certificate_json: Certificate content
            timestamp: Formatted timestamp (defaults to now)

        Returns:
            Transaction ID as lowercase hex
        """
        self._require_open()
        return compute_transaction_id(
            self.blockchain,
            self.address,
            self.address,
            build_certificate_payload(certificate_json),
            self.nonce,
            timestamp or get_formatted_timestamp(),
        )

    def build_transaction(
        self,
        data: Union[bytes, str, Certificate],
        private_key: str,
        timestamp: Optional[str] = None
    ) -> TransactionRecord:
        """
        Build and sign a certificate transaction without sending it.

        Args:
            data: Certificate content, or a ``Certificate`` to serialize
            private_key: Hex private key
            timestamp: Formatted timestamp (defaults to now)

        Returns:
            The signed transaction record
        """
        self._require_open()
        if isinstance(data, Certificate):
            data = data.to_json()

        timestamp = timestamp or get_formatted_timestamp()
        payload = build_certificate_payload(data)
        tx_id = compute_transaction_id(
            self.blockchain, self.address, self.address, payload, self.nonce, timestamp
        )
        signature = self.sign_data(tx_id, private_key)

        return build_transaction_record(
            tx_id=tx_id,
            address=self.address,
            payload=payload,
            nonce=self.nonce,
            signature=signature,
            blockchain=self.blockchain,
            timestamp=timestamp,
            version=self.code_version,
        )

    def submit_certificate(
        self,
        data: Union[bytes, str, Certificate],
        private_key: str
    ) -> GatewayResponse:
        """
        Sign and submit a certificate transaction.

        The gateway's answer is returned as-is; inspect ``result`` or call
        ``raise_for_result()`` to check it. The transaction ID is kept in
        ``latest_tx_id`` for polling.

        Args:
            data: Certificate content, or a ``Certificate`` to serialize
            private_key: Hex private key

        Returns:
            Decoded gateway response

        Raises:
            AccountNotOpenError: If no address is bound (no request is sent)
            SigningError: If the private key is invalid
            TransportError: On connection failure or non-2xx HTTP status
            DecodeError: If the response is not valid JSON
        """
        record = self.build_transaction(data, private_key)

        try:
            response = self.gateway.add_transaction(record)
        except (TransportError, DecodeError) as e:
            self.last_error = str(e)
            raise

        self.latest_tx_id = record.id
        self.logger.info(f"Submitted transaction {record.id} (result {response.result})")
        return response

    # ------------------------------------------------------------------
    # Lookup and polling
    # ------------------------------------------------------------------

    def fetch_transaction_by_id(self, tx_id: str, start: int, end: int) -> TransactionLookupResponse:
        """
        Look up a transaction between two block numbers.

        Raises:
            AccountNotOpenError: If no address is bound
            TransportError: On connection failure or non-2xx HTTP status
            DecodeError: If the response is not valid JSON
        """
        self._require_open()
        try:
            return self.gateway.get_transaction_by_id(self.blockchain, tx_id, start, end)
        except (TransportError, DecodeError) as e:
            self.last_error = str(e)
            raise

    def fetch_transaction(self, block_num: int, tx_id: str) -> TransactionLookupResponse:
        """Look up a transaction in a single block."""
        return self.fetch_transaction_by_id(tx_id, block_num, block_num)

    def _poll_once(self, tx_id: str) -> Optional[TransactionDetail]:
        """One poll tick; transport and decode failures count as "not yet"."""
        try:
            lookup = self.fetch_transaction_by_id(tx_id, OUTCOME_START_BLOCK, OUTCOME_END_BLOCK)
        except (TransportError, DecodeError) as e:
            rate_limited_log(
                f"Transient error while polling {tx_id}: {e}",
                level="warning",
                interval=max(int(self.poll_interval * 10), 1),
                logger_instance=self.logger,
            )
            return None

        if lookup.is_found:
            return lookup.detail
        self.logger.debug(f"Transaction {tx_id} not final yet: {lookup.response!r}")
        return None

    def _timeout_error(self, tx_id: str, timeout: float, attempts: int) -> PollTimeoutError:
        self.last_error = f"Timeout exceeded waiting for transaction {tx_id}"
        self.logger.warning(f"Transaction {tx_id} not final after {timeout}s ({attempts} attempts)")
        return PollTimeoutError(
            f"Timeout exceeded: transaction {tx_id} not final after {timeout}s",
            tx_id=tx_id,
            attempts=attempts,
        )

    def await_outcome(
        self,
        tx_id: str,
        timeout: float,
        cancel_event: Optional[threading.Event] = None
    ) -> TransactionDetail:
        """
        Poll until a transaction is final, the timeout passes, or the caller cancels.

        Args:
            tx_id: Transaction ID to watch
            timeout: Maximum wait in seconds
            cancel_event: Optional event; setting it stops the poll at the next wait

        Returns:
            The final transaction detail

        Raises:
            AccountNotOpenError: If no address is bound
            PollTimeoutError: If the transaction is not final in time
            PollCancelledError: If ``cancel_event`` was set
        """
        self._require_open()
        start = time.monotonic()
        attempts = 0

        while True:
            if time.monotonic() - start > timeout:
                raise self._timeout_error(tx_id, timeout, attempts)

            attempts += 1
            detail = self._poll_once(tx_id)
            if detail is not None:
                self.logger.info(f"Transaction {tx_id} final with status {detail.status!r}")
                return detail

            if cancel_event is None:
                time.sleep(self.poll_interval)
            elif cancel_event.wait(self.poll_interval):
                self.last_error = f"Polling cancelled for transaction {tx_id}"
                raise PollCancelledError(self.last_error)

    # Name used by earlier releases
    get_transaction_outcome = await_outcome

    async def await_outcome_async(self, tx_id: str, timeout: float) -> TransactionDetail:
        """
        Asyncio version of ``await_outcome``.

        Lookups run in a worker thread and waits are ``asyncio.sleep``, so the
        coroutine can be cancelled or wrapped in ``asyncio.wait_for``.
        """
        self._require_open()
        loop = asyncio.get_running_loop()
        start = loop.time()
        attempts = 0

        while True:
            if loop.time() - start > timeout:
                raise self._timeout_error(tx_id, timeout, attempts)

            attempts += 1
            detail = await asyncio.to_thread(self._poll_once, tx_id)
            if detail is not None:
                self.logger.info(f"Transaction {tx_id} final with status {detail.status!r}")
                return detail

            await asyncio.sleep(self.poll_interval)

    def certify(
        self,
        data: Union[bytes, str, Certificate],
        private_key: str,
        timeout: float = 30
    ) -> TransactionDetail:
        """
        Refresh the nonce, submit a certificate and wait for its outcome.

        Raises:
            GatewayError: If the nonce cannot be refreshed
            GatewayRejectionError: If the gateway refuses the transaction
            PollTimeoutError: If the transaction is not final in time
        """
        if not self.refresh_nonce():
            raise GatewayError(f"Could not refresh nonce: {self.last_error}")

        response = self.submit_certificate(data, private_key)
        try:
            response.raise_for_result()
        except GatewayRejectionError as e:
            self.last_error = str(e)
            raise

        return self.await_outcome(self.latest_tx_id, timeout)
