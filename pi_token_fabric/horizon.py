"""
Horizon access shared by the issuer and the balance inspector.

Wraps stellar_sdk.ServerAsync calls and turns SDK exceptions into the
package's own error types. Nothing here retries.
"""

import logging
from typing import Any, Dict, Type

from stellar_sdk import Keypair, ServerAsync, TransactionBuilder, exceptions
from stellar_sdk.client.aiohttp_client import AiohttpClient

from .errors import AccountLookupError, NetworkError, RemoteRejectionError

logger = logging.getLogger(__name__)


def open_server(horizon_url: str) -> ServerAsync:
    """Async Horizon server over aiohttp. Use as `async with open_server(url) as server`."""
    return ServerAsync(horizon_url=horizon_url, client=AiohttpClient())


async def load_account(server, account_id: str):
    """Load the account with its current sequence number."""
    try:
        account = await server.load_account(account_id)
    except exceptions.NotFoundError:
        raise AccountLookupError(account_id) from None
    except exceptions.ConnectionError as e:
        raise NetworkError(f"Could not load account {account_id}: {e}") from e
    except exceptions.BaseHorizonError as e:
        raise NetworkError(
            f"Horizon error loading account {account_id}: {e.status} {e.title or e}"
        ) from e
    logger.debug("Loaded %s at sequence %s", account_id, account.sequence)
    return account


async def fetch_base_fee(server) -> int:
    try:
        fee = await server.fetch_base_fee()
    except exceptions.ConnectionError as e:
        raise NetworkError(f"Could not fetch base fee: {e}") from e
    except exceptions.BaseHorizonError as e:
        raise NetworkError(f"Horizon error fetching base fee: {e.status} {e.title or e}") from e
    logger.debug("Base fee is %s stroops", fee)
    return fee


async def fetch_account_record(server, account_id: str) -> Dict[str, Any]:
    """Raw /accounts/{id} record. Any failure is an AccountLookupError."""
    try:
        return await server.accounts().account_id(account_id).call()
    except exceptions.NotFoundError:
        raise AccountLookupError(account_id) from None
    except exceptions.ConnectionError as e:
        raise AccountLookupError(account_id, f"unreachable: {e}") from e
    except exceptions.BaseHorizonError as e:
        raise AccountLookupError(account_id, f"lookup failed: {e}") from e


def result_codes_of(error: exceptions.BaseHorizonError) -> Dict[str, Any]:
    extras = getattr(error, "extras", None) or {}
    return extras.get("result_codes") or {}


async def submit_tx(
    server,
    builder: TransactionBuilder,
    signer: Keypair,
    timeout: int,
    rejection: Type[RemoteRejectionError],
) -> Dict[str, Any]:
    """Set the validity window, sign once, submit once."""
    tx = builder.set_timeout(timeout).build()
    tx.sign(signer)
    try:
        return await server.submit_transaction(tx)
    except exceptions.ConnectionError as e:
        raise NetworkError(f"Connection error during {rejection.phase} submission: {e}") from e
    except exceptions.BaseHorizonError as e:
        raise rejection(
            f"{rejection.phase.capitalize()} transaction rejected by Horizon: {e.title or e}",
            status=e.status,
            result_codes=result_codes_of(e),
        ) from e
