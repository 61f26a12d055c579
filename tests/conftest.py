import copy
import json
from decimal import Decimal

import pytest
from stellar_sdk import Account, Keypair, exceptions
from stellar_sdk.client.response import Response
from stellar_sdk.operation import AllowTrust, ChangeTrust, Payment

from pi_token_fabric import horizon as horizon_module


def horizon_error(cls, status, title, result_codes=None):
    body = {"title": title, "status": status}
    if result_codes is not None:
        body["extras"] = {"result_codes": result_codes}
    return cls(Response(status_code=status, text=json.dumps(body), headers={}, url="fake"))


class _AccountCall:
    def __init__(self, server, account_id):
        self.server = server
        self.account_id = account_id

    async def call(self):
        return self.server.account_record(self.account_id)


class _AccountsBuilder:
    def __init__(self, server):
        self.server = server

    def account_id(self, account_id):
        return _AccountCall(self.server, account_id)


class FakeHorizon:
    """
    In-memory stand-in for stellar_sdk.ServerAsync.

    Assumes every asset is AUTH_REQUIRED: a payment only lands on a
    trustline the issuer has authorized. Sequence numbers, signatures,
    trustline limits and balances are checked the way Horizon would.
    """

    def __init__(self, base_fee=100_000):
        self.base_fee = base_fee
        self.accounts_state = {}
        self.calls = []
        self.submitted = []
        self.ledger = 1000
        self.fail_submit = None
        self.fail_load = None
        self.fail_fee = None
        self.unreachable = False
        self.closed = False
        self.extra_balances = {}

    # ---------- setup ----------

    def fund(self, public_key, sequence=4000, native="100"):
        self.accounts_state[public_key] = {
            "sequence": sequence,
            "native": Decimal(native),
            "trustlines": {},
        }

    def trustline(self, holder, code, issuer):
        return self.accounts_state[holder]["trustlines"].get((code, issuer))

    def call_names(self):
        return [name for name, _ in self.calls]

    # ---------- ServerAsync surface ----------

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.close()

    async def close(self):
        self.closed = True

    async def load_account(self, account_id):
        self.calls.append(("load_account", account_id))
        self._check_reachable()
        if self.fail_load is not None:
            raise self.fail_load
        state = self.accounts_state.get(account_id)
        if state is None:
            raise horizon_error(exceptions.NotFoundError, 404, "Resource Missing")
        return Account(account_id, state["sequence"])

    async def fetch_base_fee(self):
        self.calls.append(("fetch_base_fee", None))
        self._check_reachable()
        if self.fail_fee is not None:
            raise self.fail_fee
        return self.base_fee

    async def submit_transaction(self, envelope):
        self.calls.append(("submit_transaction", envelope))
        self._check_reachable()
        if self.fail_submit is not None:
            error, self.fail_submit = self.fail_submit, None
            raise error
        self._apply(envelope)
        self.submitted.append(envelope)
        self.ledger += 1
        return {"hash": envelope.hash_hex(), "ledger": self.ledger, "successful": True}

    def accounts(self):
        return _AccountsBuilder(self)

    def account_record(self, account_id):
        self.calls.append(("account_record", account_id))
        self._check_reachable()
        state = self.accounts_state.get(account_id)
        if state is None:
            raise horizon_error(exceptions.NotFoundError, 404, "Resource Missing")
        balances = []
        for (code, issuer), line in state["trustlines"].items():
            balances.append({
                "asset_type": "credit_alphanum4" if len(code) <= 4 else "credit_alphanum12",
                "asset_code": code,
                "asset_issuer": issuer,
                "balance": f"{line['balance']:.7f}",
                "limit": f"{line['limit']:.7f}",
                "is_authorized": line["authorized"],
            })
        balances.extend(self.extra_balances.get(account_id, []))
        balances.append({"asset_type": "native", "balance": f"{state['native']:.7f}"})
        return {"id": account_id, "sequence": str(state["sequence"]), "balances": balances}

    # ---------- ledger rules ----------

    def _check_reachable(self):
        if self.unreachable:
            raise exceptions.ConnectionError("Cannot connect to Horizon")

    def _reject(self, tx_code, op_codes=None):
        codes = {"transaction": tx_code}
        if op_codes:
            codes["operations"] = op_codes
        raise horizon_error(exceptions.BadRequestError, 400, "Transaction Failed", codes)

    def _apply(self, envelope):
        tx = envelope.transaction
        source = tx.source.account_id
        state = self.accounts_state.get(source)
        if state is None:
            self._reject("tx_no_source_account")
        if tx.sequence != state["sequence"] + 1:
            self._reject("tx_bad_seq")
        if len(envelope.signatures) != 1:
            self._reject("tx_bad_auth")
        try:
            Keypair.from_public_key(source).verify(
                envelope.hash(), envelope.signatures[0].signature
            )
        except exceptions.BadSignatureError:
            self._reject("tx_bad_auth")

        accounts = copy.deepcopy(self.accounts_state)
        for op in tx.operations:
            if isinstance(op, ChangeTrust):
                lines = accounts[source]["trustlines"]
                key = (op.asset.code, op.asset.issuer)
                line = lines.setdefault(
                    key, {"balance": Decimal(0), "limit": Decimal(0), "authorized": False}
                )
                line["limit"] = Decimal(op.limit)
            elif isinstance(op, AllowTrust):
                trustor = accounts.get(op.trustor)
                line = trustor and trustor["trustlines"].get((op.asset_code, source))
                if not line:
                    self._reject("tx_failed", ["op_no_trust_line"])
                line["authorized"] = bool(op.authorize)
            elif isinstance(op, Payment):
                if op.asset.issuer != source:
                    self._reject("tx_failed", ["op_underfunded"])
                dest = accounts.get(op.destination.account_id)
                line = dest and dest["trustlines"].get((op.asset.code, op.asset.issuer))
                if not line:
                    self._reject("tx_failed", ["op_no_trust"])
                if not line["authorized"]:
                    self._reject("tx_failed", ["op_not_authorized"])
                new_balance = line["balance"] + Decimal(op.amount)
                if new_balance > line["limit"]:
                    self._reject("tx_failed", ["op_line_full"])
                line["balance"] = new_balance
            else:
                self._reject("tx_failed", ["op_not_supported"])

        accounts[source]["sequence"] = tx.sequence
        self.accounts_state = accounts


@pytest.fixture
def horizon():
    return FakeHorizon()


@pytest.fixture
def issuer_kp(horizon):
    kp = Keypair.random()
    horizon.fund(kp.public_key, sequence=7000)
    return kp


@pytest.fixture
def dist_kp(horizon):
    kp = Keypair.random()
    horizon.fund(kp.public_key, sequence=9000)
    return kp


@pytest.fixture
def opened_urls(monkeypatch, horizon):
    """Route horizon.open_server to the fake and record the URLs it was asked for."""
    urls = []

    def fake_open_server(url):
        urls.append(url)
        return horizon

    monkeypatch.setattr(horizon_module, "open_server", fake_open_server)
    return urls
