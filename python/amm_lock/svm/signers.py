"""Operator signer for Solana transactions."""

import os
import re

from solders.keypair import Keypair  # type: ignore
from solders.pubkey import Pubkey  # type: ignore
from solders.transaction import Transaction  # type: ignore

from .constants import PAYER_SECRET_KEY_ENV, SVM_SECRET_KEY_REGEX


class KeypairSigner:
    """Signs transactions with a single in-memory keypair.

    Signing is local and deterministic: the transaction is signed
    against the recent blockhash already present in its message.
    """

    def __init__(self, keypair: Keypair):
        self._keypair = keypair

    @property
    def address(self) -> str:
        """Base58 public key of the signer."""
        return str(self._keypair.pubkey())

    @property
    def pubkey(self) -> Pubkey:
        return self._keypair.pubkey()

    @property
    def keypair(self) -> Keypair:
        return self._keypair

    def sign_transaction(self, tx: Transaction) -> Transaction:
        """Sign ``tx`` in place and return it."""
        tx.sign([self._keypair], tx.message.recent_blockhash)
        return tx

    @classmethod
    def from_base58(cls, secret: str) -> "KeypairSigner":
        """Create a signer from a base58 encoded 64-byte secret key."""
        return cls(Keypair.from_base58_string(secret))

    @classmethod
    def from_bytes(cls, secret: bytes) -> "KeypairSigner":
        return cls(Keypair.from_bytes(secret))

    @classmethod
    def from_env(cls, var: str = PAYER_SECRET_KEY_ENV) -> "KeypairSigner":
        """Create a signer from a base58 secret key in the environment.

        Raises:
            ValueError: If the variable is missing or not a valid key.
        """
        secret = os.getenv(var, "")
        if not secret:
            raise ValueError(f"Missing required environment variable: {var}")
        if not re.match(SVM_SECRET_KEY_REGEX, secret):
            raise ValueError(f"Malformed secret key in {var}: not a base58 64-byte key")
        try:
            return cls.from_base58(secret)
        except Exception as e:
            raise ValueError(f"Malformed secret key in {var}: {e}") from e
