"""
Pytest fixtures for the Circular Enterprise APIs tests.
"""
import pytest

import circular_enterprise_apis.account as account_module
from circular_enterprise_apis import CEPAccount, SessionConfig
from circular_enterprise_apis.gateway._rate_limited_log import reset_rate_limited_log

# Constants for testing
TEST_NAG_URL = "https://nag.example.com/NAG.php?cep="
TEST_DISCOVERY_URL = "https://discovery.example.com/network/getNAG"
TEST_NODE = "node1"
TEST_CHAIN = "0x" + "ab" * 32
TEST_ADDRESS = "0x" + "cd" * 32
TEST_PRIV_KEY = "0x0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"

NONCE_URL = TEST_NAG_URL + "Circular_GetWalletNonce_"
LOOKUP_URL = TEST_NAG_URL + "Circular_GetTransactionbyID_" + TEST_NODE
ADD_TX_URL = TEST_NAG_URL + "Circular_AddTransaction_" + TEST_NODE


class FakeClock:
    """Stands in for the ``time`` module: sleeping advances ``monotonic``."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def monotonic(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture(autouse=True)
def _reset_rate_limited_log():
    reset_rate_limited_log()
    yield
    reset_rate_limited_log()


@pytest.fixture
def config():
    return SessionConfig(
        nag_url=TEST_NAG_URL,
        discovery_url=TEST_DISCOVERY_URL,
        blockchain=TEST_CHAIN,
        network_node=TEST_NODE,
        poll_interval=2,
        request_timeout=5,
    )


@pytest.fixture
def account(config):
    acct = CEPAccount(config=config)
    yield acct
    acct.close_connection()


@pytest.fixture
def open_account(account):
    account.open(TEST_ADDRESS)
    return account


@pytest.fixture
def fake_clock(monkeypatch):
    clock = FakeClock()
    monkeypatch.setattr(account_module, "time", clock)
    return clock
