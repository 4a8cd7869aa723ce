#!/usr/bin/env python3
"""
Look up a certificate transaction and optionally wait for it to finalize.
"""
import argparse
import logging
import sys

from circular_enterprise_apis import CEPAccount, CircularError, SessionConfig


def main():
    """Run the example."""
    parser = argparse.ArgumentParser(
        description="Look up a Circular certificate transaction.")
    parser.add_argument("address", help="Account address that sent the transaction")
    parser.add_argument("tx_id", help="Transaction ID to look up")
    parser.add_argument("--network", help="Network name to resolve (e.g. testnet)")
    parser.add_argument("--block", type=int, help="Search a single block instead of waiting")
    parser.add_argument("--timeout", type=float, default=30, help="Seconds to wait for finality")
    parser.add_argument("--debug", help="Enable debug output", action="store_true")

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)

    with CEPAccount(config=SessionConfig.from_env()) as account:
        try:
            account.open(args.address)
            if args.network:
                account.select_network(args.network)

            if args.block is not None:
                lookup = account.fetch_transaction(args.block, args.tx_id)
                print(f"Result {lookup.result}: {lookup.response}")
            else:
                detail = account.await_outcome(args.tx_id, args.timeout)
                print(f"Transaction {args.tx_id} is {detail.status}")
        except CircularError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)


if __name__ == "__main__":
    main()
