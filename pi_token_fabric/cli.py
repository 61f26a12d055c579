"""
Command-line wrapper.

  pi-token-fabric issue GCV --amount 7003 --limit 1000000000 --network "Pi Testnet"
  pi-token-fabric balances G... --network "Pi Network"

Secret keys are always read with a hidden prompt, never from arguments.
"""

import argparse
import asyncio
import getpass
import logging
import sys
from typing import List, Optional

from .balances import list_balances
from .config import DEFAULT_TIMEOUT, TESTNET_PASSPHRASE
from .errors import PiTokenError
from .issuer import TokenIssuer
from .request import IssuanceRequest


def short(key: str) -> str:
    return f"{key[:6]}...{key[-6:]}"


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="pi-token-fabric",
        description="Create a custom asset on Pi Network and inspect balances.",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Log Horizon calls")
    sub = ap.add_subparsers(dest="command", required=True)

    issue = sub.add_parser("issue", help="Trust and mint a new asset")
    issue.add_argument("asset_code", help="Asset code (1-12 letters or digits)")
    issue.add_argument("--amount", required=True, help="Initial supply to send to the distributor")
    issue.add_argument("--limit", required=True, help="Trustline limit on the distributor")
    issue.add_argument(
        "--network",
        default=TESTNET_PASSPHRASE,
        help=f'Network passphrase; only "Pi Network" is mainnet (default: {TESTNET_PASSPHRASE})',
    )
    issue.add_argument(
        "--timeout",
        type=int,
        default=DEFAULT_TIMEOUT,
        help=f"Seconds each transaction stays valid (default: {DEFAULT_TIMEOUT})",
    )
    issue.add_argument(
        "--base-fee",
        type=int,
        default=None,
        help="Fee per operation in stroops (default: fetched from Horizon)",
    )
    issue.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")
    issue.add_argument(
        "--show-balances",
        action="store_true",
        help="List distributor balances after issuing",
    )

    bal = sub.add_parser("balances", help="List balances of an account")
    bal.add_argument("public_key", help="Account public key (G...)")
    bal.add_argument("--network", default=TESTNET_PASSPHRASE, help="Network passphrase")
    return ap


async def print_balances(network, public_key: str) -> None:
    lines = await list_balances(network, public_key)
    print(f"Balances for account: {public_key}")
    for line in lines:
        print(f"  {line.describe()}")


def run_issue(args) -> int:
    issuer_secret = getpass.getpass("Enter issuer secret key (S...): ").strip()
    dist_secret = getpass.getpass("Enter distributor secret key (S...): ").strip()

    request = IssuanceRequest(
        asset_code=args.asset_code,
        amount=args.amount,
        limit=args.limit,
        issuer_secret=issuer_secret,
        distributor_secret=dist_secret,
        network=args.network,
    )
    issuer = TokenIssuer(request, timeout=args.timeout, base_fee=args.base_fee)
    info = issuer.info()

    print("=" * 60)
    print("TOKEN ISSUANCE SUMMARY")
    print("=" * 60)
    print(f"Token:       {info['asset_code']}")
    print(f"Issuer:      {info['issuer']}")
    print(f"Distributor: {info['distributor']}")
    print(f"Amount:      {request.amount}")
    print(f"Limit:       {request.limit}")
    print(f"Network:     {info['network']} ({issuer.horizon_url})")
    print("=" * 60)

    if not args.yes:
        confirm = input("Proceed with issuance? (yes/no): ").strip().lower()
        if confirm not in ("yes", "y"):
            print("Aborted.")
            return 0

    def on_phase(phase, resp):
        if phase == "trust":
            print(f"✓ Distributor trusts {info['asset_code']} (tx {resp.get('hash', 'N/A')})")
        else:
            print(f"✓ Issued {request.amount} {info['asset_code']} to {short(info['distributor'])}")

    issuer.observer = on_phase
    receipt = asyncio.run(issuer.issue_token())

    print(f"Trust tx: {receipt.trust_hash}")
    print(f"Issue tx: {receipt.issue_hash} (ledger {receipt.ledger})")

    if args.show_balances:
        print()
        asyncio.run(print_balances(request.network, receipt.distributor))
    return 0


def run_balances(args) -> int:
    asyncio.run(print_balances(args.network, args.public_key))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.command == "issue":
            return run_issue(args)
        return run_balances(args)
    except PiTokenError as e:
        print(f"✗ {type(e).__name__}: {e}", file=sys.stderr)
        return 1
    except (KeyboardInterrupt, EOFError):
        print("\nAborted by user.")
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
