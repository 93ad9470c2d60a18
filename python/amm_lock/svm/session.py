"""Explicit RPC session shared by the pool creation and lock steps."""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from solana.rpc.api import Client
from solana.rpc.commitment import Commitment, Confirmed, Finalized
from solana.rpc.types import TxOpts
from solders.hash import Hash  # type: ignore
from solders.pubkey import Pubkey  # type: ignore
from solders.signature import Signature  # type: ignore

from .constants import DEFAULT_CONFIRM_SLEEP_SECONDS, DEFAULT_NETWORK
from .signers import KeypairSigner
from .utils import get_network_config, normalize_network

logger = logging.getLogger(__name__)


@dataclass
class LockSession:
    """Connection, operator signer and commitment levels for one run.

    Attributes:
        client: Synchronous Solana RPC client.
        signer: Operator signer (payer of every transaction).
        network: CAIP-2 network identifier.
        finality: Commitment a transaction must reach before the next one
            is submitted.
        preflight_commitment: Commitment used for preflight simulation.
    """

    client: Client
    signer: KeypairSigner
    network: str = DEFAULT_NETWORK
    finality: Commitment = Finalized
    preflight_commitment: Commitment = Confirmed
    confirm_sleep_seconds: float = DEFAULT_CONFIRM_SLEEP_SECONDS

    @classmethod
    def connect(
        cls,
        signer: KeypairSigner,
        network: str = DEFAULT_NETWORK,
        rpc_url: Optional[str] = None,
    ) -> "LockSession":
        """Open a session against ``rpc_url`` or the network's default RPC."""
        network = normalize_network(network)
        url = rpc_url or get_network_config(network)["rpc_url"]
        logger.info("connecting to %s (%s)", url, network)
        return cls(client=Client(url, commitment=Confirmed), signer=signer, network=network)

    @property
    def payer(self) -> Pubkey:
        return self.signer.pubkey

    def send_transaction(self, raw: bytes) -> Signature:
        """Submit a signed, serialized transaction without waiting for it."""
        opts = TxOpts(skip_confirmation=True, preflight_commitment=self.preflight_commitment)
        return self.client.send_raw_transaction(raw, opts=opts).value

    def await_finality(self, signature: Signature) -> Any:
        """Block until ``signature`` reaches the session's finality level.

        Returns:
            The on-chain transaction error, or None if it succeeded.
        """
        resp = self.client.confirm_transaction(
            signature,
            commitment=self.finality,
            sleep_seconds=self.confirm_sleep_seconds,
        )
        statuses = resp.value
        if not statuses or statuses[0] is None:
            return None
        return statuses[0].err

    def get_token_balance(self, account: Pubkey) -> int:
        """Raw (atomic units) balance of an SPL token account."""
        resp = self.client.get_token_account_balance(account, commitment=self.finality)
        return int(resp.value.amount)

    def get_latest_blockhash(self, commitment: Optional[Commitment] = None) -> Hash:
        """Blockhash for building transactions, at the preflight commitment by default."""
        resp = self.client.get_latest_blockhash(commitment=commitment or self.preflight_commitment)
        return resp.value.blockhash

    def get_account_data(self, account: Pubkey) -> Optional[bytes]:
        """Raw account data, or None if the account does not exist."""
        resp = self.client.get_account_info(account, commitment=self.finality)
        if resp.value is None:
            return None
        return bytes(resp.value.data)

    def account_exists(self, account: Pubkey) -> bool:
        return self.get_account_data(account) is not None
