"""Configuration constants for rcc-stake-deployer."""

# Compiler settings used by the external build step (hardhat.config.js).
# Recorded on every profile for reference only; nothing here compiles.
SOLIDITY_SETTINGS = {
    "version": "0.8.20",
    "optimizer": {"enabled": True},
    "allow_unlimited_contract_size": True,
}

# Development key shared by the local node profiles. Never fund it on a real chain.
LOCAL_DEV_PRIVATE_KEY = "0x56f3d77274b35d709cfbdcb4bc38fc90cbe2313573332da7ec6dda0836694068"

# Statically configured network profiles, keyed by profile name.
# Environment overrides: RCC_<NAME>_RPC_URL and RCC_<NAME>_PRIVATE_KEYS (comma-separated)
NETWORK_PROFILES = {
    "local": {
        "url": "http://127.0.0.1:8545",
        "accounts": [LOCAL_DEV_PRIVATE_KEY],
    },
    "ganache": {
        "url": "http://127.0.0.1:8545",
        "accounts": [LOCAL_DEV_PRIVATE_KEY],
    },
}

ENV_PREFIX = "RCC"
ARTIFACTS_DIR_ENV = "RCC_ARTIFACTS_DIR"

DEFAULT_CONTRACT_NAME = "RCCStake"

# Seconds
DEFAULT_RPC_TIMEOUT = 30
DEFAULT_POLL_INTERVAL = 0.5
