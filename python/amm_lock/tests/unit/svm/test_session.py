"""Tests for the RPC session wrapper."""

from unittest.mock import MagicMock

import pytest
from solana.rpc.commitment import Confirmed, Finalized
from solders.pubkey import Pubkey  # type: ignore
from solders.signature import Signature  # type: ignore

from amm_lock.svm import SOLANA_DEVNET_CAIP2
from amm_lock.svm.session import LockSession


def _session(signer):
    return LockSession(client=MagicMock(), signer=signer)


class TestLockSession:
    def test_defaults_to_devnet_and_finalized(self, signer):
        session = _session(signer)
        assert session.network == SOLANA_DEVNET_CAIP2
        assert session.finality == Finalized
        assert session.payer == signer.pubkey

    def test_send_transaction_skips_confirmation(self, signer):
        session = _session(signer)
        sig = Signature.new_unique()
        session.client.send_raw_transaction.return_value = MagicMock(value=sig)

        assert session.send_transaction(b"raw") == sig

        args, kwargs = session.client.send_raw_transaction.call_args
        assert args == (b"raw",)
        assert kwargs["opts"].skip_confirmation is True
        assert kwargs["opts"].preflight_commitment == Confirmed

    def test_await_finality_uses_finalized_commitment(self, signer):
        session = _session(signer)
        sig = Signature.new_unique()
        session.client.confirm_transaction.return_value = MagicMock(value=[MagicMock(err=None)])

        assert session.await_finality(sig) is None

        _, kwargs = session.client.confirm_transaction.call_args
        assert kwargs["commitment"] == Finalized

    def test_await_finality_returns_onchain_error(self, signer):
        session = _session(signer)
        session.client.confirm_transaction.return_value = MagicMock(value=[MagicMock(err="custom program error: 0x1")])

        assert session.await_finality(Signature.new_unique()) == "custom program error: 0x1"

    def test_get_token_balance_parses_raw_amount(self, signer):
        """Balances come back as strings and may exceed 64 bits."""
        session = _session(signer)
        session.client.get_token_account_balance.return_value = MagicMock(
            value=MagicMock(amount="340282366920938463463374607431768211455")
        )

        assert session.get_token_balance(Pubkey.new_unique()) == 2**128 - 1

    def test_account_exists(self, signer):
        session = _session(signer)
        session.client.get_account_info.return_value = MagicMock(value=None)
        assert session.account_exists(Pubkey.new_unique()) is False

        session.client.get_account_info.return_value = MagicMock(value=MagicMock(data=b"\x01\x02"))
        assert session.account_exists(Pubkey.new_unique()) is True
        assert session.get_account_data(Pubkey.new_unique()) == b"\x01\x02"

    def test_connect_uses_network_rpc(self, signer):
        session = LockSession.connect(signer, network="devnet")
        assert session.network == SOLANA_DEVNET_CAIP2

    def test_connect_rejects_unknown_network(self, signer):
        with pytest.raises(ValueError, match="Not a Solana network"):
            LockSession.connect(signer, network="eip155:1")

    def test_latest_blockhash_defaults_to_confirmed(self, signer):
        """Builders get a confirmed blockhash, leaving the full validity window."""
        session = _session(signer)
        session.client.get_latest_blockhash.return_value = MagicMock(value=MagicMock(blockhash="hash"))

        assert session.get_latest_blockhash() == "hash"
        _, kwargs = session.client.get_latest_blockhash.call_args
        assert kwargs["commitment"] == Confirmed

        session.get_latest_blockhash(Finalized)
        _, kwargs = session.client.get_latest_blockhash.call_args
        assert kwargs["commitment"] == Finalized
