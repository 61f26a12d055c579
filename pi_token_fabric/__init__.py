"""Create and mint custom assets on Pi Network."""

from .balances import (
    AssetBalance,
    BalanceLine,
    NativeBalance,
    PoolShareBalance,
    list_balances,
)
from .errors import (
    AccountLookupError,
    AmountExceedsLimitError,
    BadSeedLengthError,
    BadSeedPrefixError,
    ConfigurationError,
    InvalidAmountError,
    InvalidAssetCodeError,
    InvalidSeedChecksumError,
    InvalidSeedTypeError,
    IssueSubmissionError,
    MissingSeedError,
    NetworkError,
    PiTokenError,
    RemoteRejectionError,
    TrustSubmissionError,
    UnknownNetworkError,
)
from .issuer import IssuanceReceipt, TokenIssuer, issue_token
from .network import Network, horizon_url_for
from .request import IssuanceRequest
from .validation import validate_secret_seed

__version__ = "0.1.0"
