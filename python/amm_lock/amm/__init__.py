"""Meteora dynamic AMM: address derivation and transaction builders."""

from .client import AmmClient, AmmPool, DynamicAmmClient, DynamicAmmPool
from .types import PoolState
from .utils import (
    derive_lock_escrow,
    derive_lp_mint,
    derive_pool_address_with_config,
    get_associated_token_account,
)

__all__ = [
    "AmmClient",
    "AmmPool",
    "DynamicAmmClient",
    "DynamicAmmPool",
    "PoolState",
    "derive_pool_address_with_config",
    "derive_lp_mint",
    "derive_lock_escrow",
    "get_associated_token_account",
]
