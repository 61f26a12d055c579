from stellar_sdk import StrKey

from .config import SECRET_SEED_LENGTH, SECRET_SEED_PREFIX
from .errors import (
    BadSeedLengthError,
    BadSeedPrefixError,
    InvalidSeedChecksumError,
    InvalidSeedTypeError,
    MissingSeedError,
)


def validate_secret_seed(seed) -> None:
    """
    Check a wallet secret seed before handing it to Keypair.from_secret.

    Checks run in this order and stop at the first failure: presence,
    type, 'S' prefix, 56 character length, then the StrKey checksum.
    """
    if not seed:
        raise MissingSeedError()
    if not isinstance(seed, str):
        raise InvalidSeedTypeError()
    if not seed.startswith(SECRET_SEED_PREFIX):
        raise BadSeedPrefixError()
    if len(seed) != SECRET_SEED_LENGTH:
        raise BadSeedLengthError()
    if not StrKey.is_valid_ed25519_secret_seed(seed):
        raise InvalidSeedChecksumError()
