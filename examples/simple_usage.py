#!/usr/bin/env python3
"""
Simple example of using the Circular Enterprise APIs.
"""
import os

from circular_enterprise_apis import CEPAccount, Certificate, CircularError, SessionConfig


def main():
    """
    Demonstrate basic usage of CEPAccount.

    This example shows how to:
    1. Open an account session on a network
    2. Wrap data in a certificate
    3. Submit it and wait for the outcome
    """
    # Read configuration from environment
    ADDRESS = os.environ.get("CIRCULAR_ADDRESS")
    PRIVATE_KEY = os.environ.get("CIRCULAR_PRIVATE_KEY")
    NETWORK = os.environ.get("CIRCULAR_NETWORK", "testnet")

    # Verify configuration
    if not ADDRESS:
        print("ERROR: CIRCULAR_ADDRESS environment variable is required")
        return

    if not PRIVATE_KEY:
        print("ERROR: CIRCULAR_PRIVATE_KEY environment variable is required")
        return

    config = SessionConfig.from_env()

    with CEPAccount(config=config) as account:
        try:
            account.open(ADDRESS)
            print(f"Using gateway {account.select_network(NETWORK)}")

            cert = Certificate()
            cert.set_payload("Hello from the Circular Enterprise APIs")
            print(f"Certificate size: {cert.size_bytes()} bytes")

            detail = account.certify(cert, PRIVATE_KEY, timeout=60)

            print("Certificate recorded successfully!")
            print(f"Transaction ID: {account.latest_tx_id}")
            print(f"Status: {detail.status}")

        except CircularError as e:
            print(f"Error certifying data: {e}")
            print(f"Last error: {account.last_error}")


if __name__ == "__main__":
    main()
