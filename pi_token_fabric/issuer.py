"""
------------------------------------------------------------
Pi Network Asset Issuance
------------------------------------------------------------
Creates a custom asset and mints its initial supply.

Workflow:
  1. The DISTRIBUTOR creates a trustline for the new asset (up to LIMIT).
  2. The ISSUER authorizes that trustline and pays AMOUNT to the distributor,
     both operations in one transaction.

Key Points:
  - The asset is identified by (asset code, issuer public key).
  - Both accounts must already exist and be funded.
  - The two transactions are NOT atomic. If step 2 fails the distributor
    keeps an empty trustline; nothing is rolled back.
  - Every call reloads both accounts, so calling twice mints twice.
------------------------------------------------------------
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Dict, Optional, Tuple

from stellar_sdk import Asset, Keypair, TransactionBuilder

from . import horizon
from .config import DEFAULT_TIMEOUT
from .errors import IssueSubmissionError, TrustSubmissionError
from .request import IssuanceRequest

logger = logging.getLogger(__name__)

PhaseObserver = Callable[[str, Dict[str, Any]], None]


@dataclass(frozen=True)
class IssuanceReceipt:
    asset_code: str
    issuer: str
    distributor: str
    amount: Decimal
    trust_hash: Optional[str]
    issue_hash: Optional[str]
    ledger: Optional[int]
    response: Dict[str, Any] = field(repr=False, default_factory=dict)


class TokenIssuer:
    """
    Two-phase issuance of `request.asset_code` from the issuer to the distributor.

    `server` may be any object with the stellar_sdk.ServerAsync methods used
    here (load_account, fetch_base_fee, submit_transaction). When omitted, a
    ServerAsync for the request's network is opened per call and closed
    afterwards. `observer(phase, response)` is called after each successful
    submission with phase "trust" or "issue".
    """

    def __init__(
        self,
        request: IssuanceRequest,
        server=None,
        timeout: int = DEFAULT_TIMEOUT,
        base_fee: Optional[int] = None,
        observer: Optional[PhaseObserver] = None,
    ):
        self.request = request
        self.network = request.network
        self.timeout = timeout
        self.base_fee = base_fee
        self.observer = observer
        self._server = server

        self.issuer_keypair = Keypair.from_secret(request.issuer_secret)
        self.distributor_keypair = Keypair.from_secret(request.distributor_secret)
        self.asset = Asset(request.asset_code, self.issuer_keypair.public_key)

    @property
    def horizon_url(self) -> str:
        return self.network.horizon_url

    def info(self) -> Dict[str, str]:
        return {
            "asset_code": self.request.asset_code,
            "issuer": self.issuer_keypair.public_key,
            "distributor": self.distributor_keypair.public_key,
            "network": self.network.passphrase,
        }

    async def issue_token(self) -> IssuanceReceipt:
        if self._server is not None:
            return await self._issue(self._server)
        async with horizon.open_server(self.horizon_url) as server:
            return await self._issue(server)

    async def _issue(self, server) -> IssuanceReceipt:
        trust_resp, base_fee = await self._trust(server)
        issue_resp = await self._mint(server, base_fee)

        return IssuanceReceipt(
            asset_code=self.request.asset_code,
            issuer=self.issuer_keypair.public_key,
            distributor=self.distributor_keypair.public_key,
            amount=self.request.amount,
            trust_hash=trust_resp.get("hash"),
            issue_hash=issue_resp.get("hash"),
            ledger=issue_resp.get("ledger"),
            response=issue_resp,
        )

    def _builder(self, source_account, base_fee: int) -> TransactionBuilder:
        return TransactionBuilder(
            source_account=source_account,
            network_passphrase=self.network.passphrase,
            base_fee=base_fee,
        )

    async def _trust(self, server) -> Tuple[Dict[str, Any], int]:
        # Distributor opts in to hold the asset
        dist_pub = self.distributor_keypair.public_key
        dist_acct = await horizon.load_account(server, dist_pub)
        base_fee = self.base_fee
        if base_fee is None:
            base_fee = await horizon.fetch_base_fee(server)

        builder = self._builder(dist_acct, base_fee).append_change_trust_op(
            asset=self.asset,
            limit=format(self.request.limit, "f"),
        )
        resp = await horizon.submit_tx(
            server, builder, self.distributor_keypair, self.timeout, TrustSubmissionError
        )
        logger.info(
            "Distributor %s trusts %s (tx %s)", dist_pub, self.request.asset_code, resp.get("hash")
        )
        self._notify("trust", resp)
        return resp, base_fee

    async def _mint(self, server, base_fee: int) -> Dict[str, Any]:
        # Issuer authorizes the trustline, then pays the initial supply
        dist_pub = self.distributor_keypair.public_key
        issuer_acct = await horizon.load_account(server, self.issuer_keypair.public_key)

        # allow_trust, not set_trust_line_flags: same op the Pi token tooling
        # submits; the SDK flags it deprecated
        builder = (
            self._builder(issuer_acct, base_fee)
            .append_allow_trust_op(
                trustor=dist_pub,
                asset_code=self.request.asset_code,
                authorize=True,
            )
            .append_payment_op(
                destination=dist_pub,
                asset=self.asset,
                amount=format(self.request.amount, "f"),
            )
        )
        resp = await horizon.submit_tx(
            server, builder, self.issuer_keypair, self.timeout, IssueSubmissionError
        )
        logger.info(
            "Issued %s %s to %s (tx %s)",
            self.request.amount, self.request.asset_code, dist_pub, resp.get("hash"),
        )
        self._notify("issue", resp)
        return resp

    def _notify(self, phase: str, resp: Dict[str, Any]) -> None:
        if self.observer is not None:
            self.observer(phase, resp)


async def issue_token(request: IssuanceRequest, **kwargs) -> IssuanceReceipt:
    """Shortcut for TokenIssuer(request, **kwargs).issue_token()."""
    return await TokenIssuer(request, **kwargs).issue_token()
