"""
Network and format constants for Pi Network token issuance.

Horizon servers:
  - Mainnet: https://api.mainnet.minepi.com  (passphrase "Pi Network")
  - Testnet: https://api.testnet.minepi.com  (passphrase "Pi Testnet")
"""

from decimal import Decimal

# ---------- NETWORKS ----------
MAINNET_PASSPHRASE = "Pi Network"
TESTNET_PASSPHRASE = "Pi Testnet"

MAINNET_HORIZON_URL = "https://api.mainnet.minepi.com"
TESTNET_HORIZON_URL = "https://api.testnet.minepi.com"

# ---------- TRANSACTIONS ----------
DEFAULT_TIMEOUT = 100  # seconds a signed envelope stays valid

# ---------- FORMATS ----------
SECRET_SEED_PREFIX = "S"
SECRET_SEED_LENGTH = 56
MAX_ASSET_CODE_LENGTH = 12
AMOUNT_DECIMAL_PLACES = 7  # 1 stroop = 0.0000001
MAX_AMOUNT = Decimal("922337203685.4775807")  # int64 stroops

NATIVE_SYMBOL = "Pi"
