"""PDA derivations and instruction encoding for the dynamic AMM."""

import hashlib
import struct

from solders.pubkey import Pubkey  # type: ignore

from ..svm.utils import derive_ata, to_pubkey
from .constants import METAPLEX_PROGRAM_ID, PROGRAM_ID, SEEDS, U64_MAX, VAULT_BASE_KEY, VAULT_PROGRAM_ID


def anchor_discriminator(name: str) -> bytes:
    """First 8 bytes of sha256("global:<name>")."""
    return hashlib.sha256(f"global:{name}".encode()).digest()[:8]


def encode_u64(value: int) -> bytes:
    if not 0 <= value <= U64_MAX:
        raise ValueError(f"Amount does not fit in u64: {value}")
    return struct.pack("<Q", value)


def get_first_key(key1: Pubkey, key2: Pubkey) -> Pubkey:
    """Return the larger of two keys by byte order."""
    return key1 if bytes(key1) > bytes(key2) else key2


def get_second_key(key1: Pubkey, key2: Pubkey) -> Pubkey:
    return key2 if bytes(key1) > bytes(key2) else key1


def derive_pool_address_with_config(
    token_a_mint: "str | Pubkey",
    token_b_mint: "str | Pubkey",
    config: "str | Pubkey",
    program_id: Pubkey = PROGRAM_ID,
) -> Pubkey:
    """Derive the address of the pool for a mint pair and fee config.

    The mints are ordered by byte value, so the result does not depend
    on which token is passed as A.
    """
    mint_a, mint_b = to_pubkey(token_a_mint), to_pubkey(token_b_mint)
    pool, _ = Pubkey.find_program_address(
        [bytes(get_first_key(mint_a, mint_b)), bytes(get_second_key(mint_a, mint_b)), bytes(to_pubkey(config))],
        program_id,
    )
    return pool


def derive_lp_mint(pool: Pubkey, program_id: Pubkey = PROGRAM_ID) -> Pubkey:
    lp_mint, _ = Pubkey.find_program_address([SEEDS.LP_MINT, bytes(pool)], program_id)
    return lp_mint


def derive_protocol_fee(mint: Pubkey, pool: Pubkey, program_id: Pubkey = PROGRAM_ID) -> Pubkey:
    fee, _ = Pubkey.find_program_address([SEEDS.FEE, bytes(mint), bytes(pool)], program_id)
    return fee


def derive_vault_lp(vault: Pubkey, pool: Pubkey, program_id: Pubkey = PROGRAM_ID) -> Pubkey:
    """Token account holding the pool's share of a vault."""
    vault_lp, _ = Pubkey.find_program_address([bytes(vault), bytes(pool)], program_id)
    return vault_lp


def derive_lock_escrow(pool: Pubkey, owner: Pubkey, program_id: Pubkey = PROGRAM_ID) -> Pubkey:
    escrow, _ = Pubkey.find_program_address([SEEDS.LOCK_ESCROW, bytes(pool), bytes(owner)], program_id)
    return escrow


def derive_mint_metadata(lp_mint: Pubkey) -> Pubkey:
    metadata, _ = Pubkey.find_program_address(
        [SEEDS.METADATA, bytes(METAPLEX_PROGRAM_ID), bytes(lp_mint)],
        METAPLEX_PROGRAM_ID,
    )
    return metadata


def derive_vault(mint: Pubkey, vault_program_id: Pubkey = VAULT_PROGRAM_ID) -> Pubkey:
    vault, _ = Pubkey.find_program_address(
        [SEEDS.VAULT, bytes(mint), bytes(VAULT_BASE_KEY)], vault_program_id
    )
    return vault


def derive_token_vault(vault: Pubkey, vault_program_id: Pubkey = VAULT_PROGRAM_ID) -> Pubkey:
    token_vault, _ = Pubkey.find_program_address([SEEDS.TOKEN_VAULT, bytes(vault)], vault_program_id)
    return token_vault


def derive_vault_lp_mint(vault: Pubkey, vault_program_id: Pubkey = VAULT_PROGRAM_ID) -> Pubkey:
    lp_mint, _ = Pubkey.find_program_address([SEEDS.LP_MINT, bytes(vault)], vault_program_id)
    return lp_mint


def get_associated_token_account(mint: "str | Pubkey", owner: "str | Pubkey") -> Pubkey:
    """Associated token account of ``owner`` for ``mint`` (argument order of the AMM SDK)."""
    return derive_ata(owner, mint)
