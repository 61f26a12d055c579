import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Union

from .config import AMOUNT_DECIMAL_PLACES, MAX_AMOUNT, MAX_ASSET_CODE_LENGTH
from .errors import (
    AmountExceedsLimitError,
    InvalidAmountError,
    InvalidAssetCodeError,
)
from .network import Network
from .validation import validate_secret_seed

Amount = Union[Decimal, int, float, str]

_ASSET_CODE_RE = re.compile(r"[A-Za-z0-9]{1,%d}" % MAX_ASSET_CODE_LENGTH)


def to_decimal(name: str, value: Amount) -> Decimal:
    """Coerce an amount to Decimal. Floats go through str() to avoid binary noise."""
    if isinstance(value, bool):
        raise InvalidAmountError(f"{name} must be a number, got {value!r}")
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmountError(f"{name} must be a number, got {value!r}") from None
    if not amount.is_finite():
        raise InvalidAmountError(f"{name} must be finite, got {value!r}")
    if amount.as_tuple().exponent < -AMOUNT_DECIMAL_PLACES:
        raise InvalidAmountError(
            f"{name} has more than {AMOUNT_DECIMAL_PLACES} decimal places: {value!r}"
        )
    if amount > MAX_AMOUNT:
        raise InvalidAmountError(f"{name} exceeds the ledger maximum of {MAX_AMOUNT}: {value!r}")
    return amount


@dataclass(frozen=True)
class IssuanceRequest:
    """
    Everything needed to mint the initial supply of a new asset.

    Validated on construction, so a request that exists can be submitted:
      - amount <= limit, both positive
      - asset code is 1-12 letters or digits
      - both secrets are well formed StrKey secret seeds
      - network resolves to mainnet or testnet
    """

    asset_code: str
    amount: Decimal
    limit: Decimal
    issuer_secret: str = field(repr=False)
    distributor_secret: str = field(repr=False)
    network: Network = Network.TESTNET

    def __post_init__(self):
        amount = to_decimal("amount", self.amount)
        limit = to_decimal("limit", self.limit)
        if amount > limit:
            raise AmountExceedsLimitError(
                f"Amount cannot be greater than the limit ({amount} > {limit})"
            )
        if amount <= 0 or limit <= 0:
            raise InvalidAmountError("Amount and limit must be greater than zero")

        if not isinstance(self.asset_code, str) or not _ASSET_CODE_RE.fullmatch(self.asset_code):
            raise InvalidAssetCodeError(
                f"Asset code must be 1-{MAX_ASSET_CODE_LENGTH} alphanumeric characters, "
                f"got {self.asset_code!r}"
            )

        validate_secret_seed(self.issuer_secret)
        validate_secret_seed(self.distributor_secret)

        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "limit", limit)
        object.__setattr__(self, "network", Network.from_identifier(self.network))
