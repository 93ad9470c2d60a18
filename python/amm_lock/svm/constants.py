"""Constants for Solana (SVM) networks."""

# CAIP-2 network identifiers (genesis hash prefix)
SOLANA_MAINNET_CAIP2 = "solana:5eykt4UsFv8P8NJdTREpY1vzqKqZKvdp"
SOLANA_DEVNET_CAIP2 = "solana:EtWTRABZaYq6iMfeYKouRu166VU2xqa1"
SOLANA_TESTNET_CAIP2 = "solana:4uhcVJyU9pJkvQyS88uRDiswHXSCkY3z"

# Legacy network names
NETWORK_ALIASES = {
    "solana": SOLANA_MAINNET_CAIP2,
    "mainnet-beta": SOLANA_MAINNET_CAIP2,
    "solana-devnet": SOLANA_DEVNET_CAIP2,
    "devnet": SOLANA_DEVNET_CAIP2,
    "solana-testnet": SOLANA_TESTNET_CAIP2,
    "testnet": SOLANA_TESTNET_CAIP2,
}

NETWORK_CONFIGS = {
    SOLANA_MAINNET_CAIP2: {
        "name": "mainnet-beta",
        "rpc_url": "https://api.mainnet-beta.solana.com",
    },
    SOLANA_DEVNET_CAIP2: {
        "name": "devnet",
        "rpc_url": "https://api.devnet.solana.com",
    },
    SOLANA_TESTNET_CAIP2: {
        "name": "testnet",
        "rpc_url": "https://api.testnet.solana.com",
    },
}

DEFAULT_NETWORK = SOLANA_DEVNET_CAIP2

# Environment variable holding the operator's base58 secret key
PAYER_SECRET_KEY_ENV = "PAYER_SECRET_KEY"

# Seconds between signature status polls while waiting for finality
DEFAULT_CONFIRM_SLEEP_SECONDS = 0.5

# Base58 alphabet, 32-44 chars for a 32-byte public key
SVM_ADDRESS_REGEX = r"^[1-9A-HJ-NP-Za-km-z]{32,44}$"

# Base58 encoding of a 64-byte secret key
SVM_SECRET_KEY_REGEX = r"^[1-9A-HJ-NP-Za-km-z]{86,88}$"
