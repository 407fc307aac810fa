"""Package-wide constants and defaults."""

from __future__ import annotations

APP_NAME = "dais"

CONFIG_FILENAME = ".daisconfig"

ENV_LOG_LEVEL = "DAIS_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "INFO"

DEFAULT_SOLVER_VERSION = "0.6.12"

# Skeleton directories created before any contract import is dispatched.
BASE_DIRS = (
    "contracts/interfaces",
    "contracts/libraries",
    "lib",
    "migrations",
)

ABI_REGISTRY_PATH = "lib/abis.ts"
ADDRESS_REGISTRY_PATH = "lib/addresses.ts"
