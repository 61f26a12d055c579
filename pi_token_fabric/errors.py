"""Exceptions raised by pi_token_fabric."""

from typing import Any, Dict, Optional


class PiTokenError(Exception):
    """Base class for every error raised by this package."""


# ---------- caller input ----------

class ConfigurationError(PiTokenError, ValueError):
    """Bad input detected before any request reaches Horizon."""

    code = "configuration_error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.code)


class MissingSeedError(ConfigurationError):
    code = "missing_wallet_private_seed"


class InvalidSeedTypeError(ConfigurationError, TypeError):
    code = "wallet_private_seed_not_string"


class BadSeedPrefixError(ConfigurationError):
    code = "wallet_private_seed_not_starts_with_S"


class BadSeedLengthError(ConfigurationError):
    code = "wallet_private_seed_not_56_chars_long"


class InvalidSeedChecksumError(ConfigurationError):
    code = "invalid_wallet_private_seed"


class AmountExceedsLimitError(ConfigurationError):
    code = "amount_exceeds_limit"


class InvalidAmountError(ConfigurationError):
    code = "invalid_amount"


class InvalidAssetCodeError(ConfigurationError):
    code = "invalid_asset_code"


class UnknownNetworkError(ConfigurationError):
    code = "unknown_network"


# ---------- Horizon ----------

class RemoteRejectionError(PiTokenError):
    """Horizon refused a submitted transaction."""

    phase = "submit"

    def __init__(self, message: str, status: Optional[int] = None,
                 result_codes: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.status = status
        self.result_codes = result_codes or {}

    def __str__(self) -> str:
        base = super().__str__()
        if self.result_codes:
            return f"{base} (result codes: {self.result_codes})"
        return base


class TrustSubmissionError(RemoteRejectionError):
    phase = "trust"


class IssueSubmissionError(RemoteRejectionError):
    phase = "issue"


class NetworkError(PiTokenError):
    """Horizon could not be reached or did not answer in time."""


class AccountLookupError(PiTokenError):
    """Account does not exist on the ledger or could not be fetched."""

    def __init__(self, account_id: str, reason: str = "not found"):
        super().__init__(f"Account {account_id} {reason}")
        self.account_id = account_id
        self.reason = reason
