"""
Read-only balance listing for a Pi account.

    lines = await list_balances("Pi Testnet", "GABC...")
    for line in lines:
        print(line.describe())
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Optional, Union

from . import horizon
from .config import NATIVE_SYMBOL
from .network import Network

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NativeBalance:
    balance: str
    kind = "native"

    def describe(self) -> str:
        return f"🔹 {NATIVE_SYMBOL} (native): {self.balance}"


@dataclass(frozen=True)
class AssetBalance:
    asset_code: str
    asset_issuer: str
    balance: str
    limit: Optional[str] = None
    kind = "asset"

    def describe(self) -> str:
        return f"🔸 {self.asset_code}: {self.balance} (issuer: {self.asset_issuer})"


@dataclass(frozen=True)
class PoolShareBalance:
    liquidity_pool_id: str
    balance: str
    kind = "liquidity_pool_shares"

    def describe(self) -> str:
        return f"💧 Liquidity Pool: {self.balance} shares (ID: {self.liquidity_pool_id})"


BalanceLine = Union[NativeBalance, AssetBalance, PoolShareBalance]


def iter_balance_lines(balances: Iterable[Dict[str, Any]]) -> Iterator[BalanceLine]:
    """Classify Horizon balance entries. Unrecognised entries are skipped."""
    for b in balances:
        if b.get("asset_type") == "native":
            yield NativeBalance(balance=b["balance"])
        elif "asset_code" in b and "asset_issuer" in b:
            yield AssetBalance(
                asset_code=b["asset_code"],
                asset_issuer=b["asset_issuer"],
                balance=b["balance"],
                limit=b.get("limit"),
            )
        elif b.get("asset_type") == "liquidity_pool_shares":
            yield PoolShareBalance(
                liquidity_pool_id=b["liquidity_pool_id"],
                balance=b["balance"],
            )
        else:
            logger.debug("Skipping balance entry of type %s", b.get("asset_type"))


async def list_balances(
    network: Union[Network, str], public_key: str, server=None
) -> Iterator[BalanceLine]:
    """
    Fetch one account snapshot and return its balances as a one-shot iterator.

    Raises AccountLookupError when the account is unknown or Horizon can't
    be reached; nothing is yielded in that case.
    """
    net = Network.from_identifier(network)
    if server is not None:
        record = await horizon.fetch_account_record(server, public_key)
    else:
        async with horizon.open_server(net.horizon_url) as server:
            record = await horizon.fetch_account_record(server, public_key)
    logger.debug("Fetched %d balances for %s", len(record.get("balances", [])), public_key)
    return iter_balance_lines(record.get("balances", []))
