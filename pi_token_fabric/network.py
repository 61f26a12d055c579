import logging
from enum import Enum
from typing import Union

from .config import (
    MAINNET_HORIZON_URL,
    MAINNET_PASSPHRASE,
    TESTNET_HORIZON_URL,
    TESTNET_PASSPHRASE,
)
from .errors import UnknownNetworkError

logger = logging.getLogger(__name__)


class Network(Enum):
    """The two Pi ledgers. Member values are the network passphrases."""

    MAINNET = MAINNET_PASSPHRASE
    TESTNET = TESTNET_PASSPHRASE

    @property
    def passphrase(self) -> str:
        return self.value

    @property
    def horizon_url(self) -> str:
        if self is Network.MAINNET:
            return MAINNET_HORIZON_URL
        return TESTNET_HORIZON_URL

    @classmethod
    def from_identifier(cls, identifier: Union["Network", str]) -> "Network":
        """
        Route a network identifier to one of the two ledgers.

        Only the exact string "Pi Network" selects mainnet. Every other
        string selects testnet, including case variants such as
        "pi Network", which are logged since they usually mean the caller
        wanted mainnet.
        """
        if isinstance(identifier, Network):
            return identifier
        if not isinstance(identifier, str):
            raise UnknownNetworkError(
                f"Network identifier must be a string, got {type(identifier).__name__}"
            )
        if identifier == MAINNET_PASSPHRASE:
            return cls.MAINNET
        if identifier.strip().lower() == MAINNET_PASSPHRASE.lower():
            logger.warning(
                "Network identifier %r is not exactly %r; routing to testnet",
                identifier, MAINNET_PASSPHRASE,
            )
        return cls.TESTNET


def horizon_url_for(identifier: Union[Network, str]) -> str:
    return Network.from_identifier(identifier).horizon_url
