"""Solana (SVM) signing, RPC session and sequential submission."""

from .constants import (
    SOLANA_DEVNET_CAIP2,
    SOLANA_MAINNET_CAIP2,
    SOLANA_TESTNET_CAIP2,
)
from .runner import TransactionRunner
from .session import LockSession
from .signers import KeypairSigner

__all__ = [
    "SOLANA_MAINNET_CAIP2",
    "SOLANA_DEVNET_CAIP2",
    "SOLANA_TESTNET_CAIP2",
    "KeypairSigner",
    "LockSession",
    "TransactionRunner",
]
