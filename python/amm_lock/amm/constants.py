"""Constants for the Meteora dynamic AMM and dynamic vault programs."""

from solders.pubkey import Pubkey  # type: ignore

# Dynamic AMM program (same id on mainnet and devnet)
PROGRAM_ID = Pubkey.from_string("Eo7WjKq67rjJQSZxS6z3YkapzY3eMj6Xy8X5EQVn5UaB")

# Dynamic vault program holding each token's pool reserves
VAULT_PROGRAM_ID = Pubkey.from_string("24Uqj9JCLxUeoC3hGfh5W3s9FM9uCHDS2SG3LYwBpyTi")

# Base key the vault program uses for its canonical vault PDAs
VAULT_BASE_KEY = Pubkey.from_string("HWzXGcGHy4tcpYfaRDCyLNzXqBTv3E6BttpCH2vJxArv")

METAPLEX_PROGRAM_ID = Pubkey.from_string("metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s")


class SEEDS:
    """PDA seed prefixes."""

    LP_MINT = b"lp_mint"
    FEE = b"fee"
    LOCK_ESCROW = b"lock_escrow"
    METADATA = b"metadata"
    VAULT = b"vault"
    TOKEN_VAULT = b"token_vault"


# Instruction names (Anchor discriminator = sha256("global:<name>")[:8])
IX_INITIALIZE_POOL_WITH_CONFIG = "initialize_permissionless_constant_product_pool_with_config"
IX_CREATE_LOCK_ESCROW = "create_lock_escrow"
IX_LOCK = "lock"
IX_INITIALIZE_VAULT = "initialize"

# Anchor account discriminator length
ACCOUNT_DISCRIMINATOR_SIZE = 8

POOL_CREATION_COMPUTE_UNITS = 1_400_000

U64_MAX = 2**64 - 1
