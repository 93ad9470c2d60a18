"""Shared fixtures: offline transactions and a mocked RPC client."""

from unittest.mock import MagicMock

import pytest
from solders.hash import Hash  # type: ignore
from solders.keypair import Keypair  # type: ignore
from solders.message import Message  # type: ignore
from solders.pubkey import Pubkey  # type: ignore
from solders.system_program import TransferParams, transfer  # type: ignore
from solders.transaction import Transaction  # type: ignore

from amm_lock.svm.session import LockSession
from amm_lock.svm.signers import KeypairSigner


def make_transaction(payer: Pubkey, lamports: int = 1) -> Transaction:
    """Unsigned transfer transaction with a fixed blockhash."""
    ix = transfer(TransferParams(from_pubkey=payer, to_pubkey=Pubkey.new_unique(), lamports=lamports))
    message = Message.new_with_blockhash([ix], payer, Hash.new_unique())
    return Transaction.new_unsigned(message)


class RecordingClient:
    """Stand-in for solana.rpc.api.Client recording call order.

    ``fail_send_at`` / ``fail_confirm_at`` make the n-th (1-based) send
    raise, or the n-th confirmation report an on-chain error.
    """

    def __init__(self, fail_send_at=None, fail_confirm_at=None, lp_balance="1000"):
        self.events = []
        self.fail_send_at = fail_send_at
        self.fail_confirm_at = fail_confirm_at
        self.lp_balance = lp_balance
        self.accounts = {}
        self._sends = 0
        self._confirms = 0

    def send_raw_transaction(self, raw, opts=None):
        self._sends += 1
        if self._sends == self.fail_send_at:
            self.events.append(("send_failed", self._sends))
            raise RuntimeError("Transaction simulation failed: insufficient funds")
        signature = Transaction.from_bytes(raw).signatures[0]
        self.events.append(("send", signature))
        return MagicMock(value=signature)

    def confirm_transaction(self, tx_sig, commitment=None, sleep_seconds=0.5, last_valid_block_height=None):
        self._confirms += 1
        self.events.append(("finalized", tx_sig))
        err = "InstructionError" if self._confirms == self.fail_confirm_at else None
        return MagicMock(value=[MagicMock(err=err)])

    def get_token_account_balance(self, pubkey, commitment=None):
        self.events.append(("balance", pubkey))
        return MagicMock(value=MagicMock(amount=self.lp_balance))

    def get_latest_blockhash(self, commitment=None):
        return MagicMock(value=MagicMock(blockhash=Hash.new_unique()))

    def get_account_info(self, pubkey, commitment=None):
        data = self.accounts.get(pubkey)
        return MagicMock(value=None if data is None else MagicMock(data=data))


@pytest.fixture
def keypair():
    return Keypair()


@pytest.fixture
def signer(keypair):
    return KeypairSigner(keypair)


@pytest.fixture
def client():
    return RecordingClient()


@pytest.fixture
def session(client, signer):
    return LockSession(client=client, signer=signer)


@pytest.fixture
def make_tx(signer):
    """Factory of unsigned transactions paid by the operator."""

    def _make(lamports: int = 1) -> Transaction:
        return make_transaction(signer.pubkey, lamports)

    return _make


@pytest.fixture
def sent_signatures(client):
    def _sent():
        return [e[1] for e in client.events if e[0] == "send"]

    return _sent
