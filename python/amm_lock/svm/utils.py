"""Utility functions for Solana (SVM) addresses and networks."""

import re
from typing import Any

from solders.pubkey import Pubkey  # type: ignore
from spl.token.constants import TOKEN_PROGRAM_ID  # type: ignore
from spl.token.instructions import get_associated_token_address  # type: ignore

from .constants import NETWORK_ALIASES, NETWORK_CONFIGS, SVM_ADDRESS_REGEX


def validate_svm_address(address: str) -> bool:
    """Check that a string is a valid base58 Solana public key."""
    if not isinstance(address, str) or not re.match(SVM_ADDRESS_REGEX, address):
        return False
    try:
        Pubkey.from_string(address)
    except ValueError:
        return False
    return True


def to_pubkey(address: "str | Pubkey") -> Pubkey:
    """Convert a base58 string to a Pubkey, passing Pubkeys through.

    Raises:
        ValueError: If the address is not a valid Solana public key.
    """
    if isinstance(address, Pubkey):
        return address
    if not validate_svm_address(address):
        raise ValueError(f"Invalid Solana address: {address}")
    return Pubkey.from_string(address)


def normalize_network(network: str) -> str:
    """Normalize a network name to its CAIP-2 identifier.

    Raises:
        ValueError: If the network is not a known Solana network.
    """
    if network in NETWORK_CONFIGS:
        return network
    if network in NETWORK_ALIASES:
        return NETWORK_ALIASES[network]
    raise ValueError(f"Not a Solana network: {network}")


def get_network_config(network: str) -> dict[str, Any]:
    """Get the configuration (name, rpc_url) for a Solana network."""
    return NETWORK_CONFIGS[normalize_network(network)]


def derive_ata(
    owner: "str | Pubkey",
    mint: "str | Pubkey",
    token_program: "str | Pubkey" = TOKEN_PROGRAM_ID,
) -> Pubkey:
    """Derive the associated token account of ``owner`` for ``mint``.

    Owners may be off-curve (PDAs such as lock escrows).
    """
    return get_associated_token_address(
        to_pubkey(owner), to_pubkey(mint), to_pubkey(token_program)
    )
