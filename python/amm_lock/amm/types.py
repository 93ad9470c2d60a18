"""Types for dynamic AMM pools."""

from dataclasses import dataclass

from solders.pubkey import Pubkey  # type: ignore

from .constants import ACCOUNT_DISCRIMINATOR_SIZE
from .utils import derive_vault_lp_mint

# lp_mint, token_a_mint, token_b_mint, a_vault, b_vault, a_vault_lp, b_vault_lp
_POOL_HEADER_KEYS = 7


@dataclass(frozen=True)
class PoolState:
    """Accounts of a live pool needed to lock its liquidity."""

    address: Pubkey
    lp_mint: Pubkey
    token_a_mint: Pubkey
    token_b_mint: Pubkey
    a_vault: Pubkey
    b_vault: Pubkey
    a_vault_lp: Pubkey
    b_vault_lp: Pubkey

    @property
    def a_vault_lp_mint(self) -> Pubkey:
        return derive_vault_lp_mint(self.a_vault)

    @property
    def b_vault_lp_mint(self) -> Pubkey:
        return derive_vault_lp_mint(self.b_vault)

    @classmethod
    def from_account_data(cls, address: Pubkey, data: bytes) -> "PoolState":
        """Decode the leading pubkeys of an on-chain pool account.

        Raises:
            ValueError: If the account is too short to be a pool.
        """
        end = ACCOUNT_DISCRIMINATOR_SIZE + 32 * _POOL_HEADER_KEYS
        if len(data) < end:
            raise ValueError(f"Account {address} is not a dynamic AMM pool ({len(data)} bytes)")
        keys = [
            Pubkey.from_bytes(data[offset:offset + 32])
            for offset in range(ACCOUNT_DISCRIMINATOR_SIZE, end, 32)
        ]
        return cls(address, *keys)
