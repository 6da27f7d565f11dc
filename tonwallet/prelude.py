"""Shared constants used across the wallet service."""

TOKEN_FEE: int = 500_000_000  # 0.5 TON in nanotons
DEPLOY_TOKEN_VALUE: int = 200_000_000  # 0.2 TON in nanotons

DEFAULT_EXPIRATION_TIMEOUT: int = 60  # seconds

MAX_LIMIT_SEARCH: int = 100