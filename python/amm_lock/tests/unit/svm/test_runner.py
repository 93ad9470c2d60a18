"""Tests for the sequential transaction runner."""

import pytest
from solders.pubkey import Pubkey  # type: ignore
from solders.signature import Signature  # type: ignore

from amm_lock.errors import ConfirmationError, SigningError, SubmissionError
from amm_lock.svm.runner import TransactionRunner

from conftest import make_transaction


class TestSubmitAll:
    """Test the sign / submit / finalize loop."""

    def test_returns_signatures_in_order(self, session, make_tx, sent_signatures):
        txs = [make_tx(i) for i in range(1, 4)]

        signatures = TransactionRunner(session).submit_all(txs, label="create pool")

        assert signatures == sent_signatures()
        assert signatures == [tx.signatures[0] for tx in txs]

    def test_signs_with_operator_key(self, session, make_tx, signer):
        tx = make_tx()

        TransactionRunner(session).submit_all([tx])

        assert tx.signatures[0] != Signature.default()
        tx.verify()  # raises if the signature does not match the payer

    def test_finality_gates_next_submission(self, session, client, make_tx):
        """Each send happens only after the previous transaction finalized."""
        TransactionRunner(session).submit_all([make_tx(i) for i in range(1, 4)])

        kinds = [e[0] for e in client.events]
        assert kinds == ["send", "finalized", "send", "finalized", "send", "finalized"]
        # Each finalization is for the transaction sent just before it
        for send, final in zip(client.events[::2], client.events[1::2]):
            assert send[1] == final[1]

    def test_empty_sequence(self, session, client):
        assert TransactionRunner(session).submit_all([]) == []
        assert client.events == []


class TestSequentialAbort:
    """Test that the first failure stops the run."""

    def test_submission_failure_stops_remaining(self, session, client, make_tx):
        client.fail_send_at = 2
        txs = [make_tx(i) for i in range(1, 5)]

        with pytest.raises(SubmissionError) as exc_info:
            TransactionRunner(session).submit_all(txs, label="create pool")

        err = exc_info.value
        assert (err.label, err.index, err.total) == ("create pool", 2, 4)
        assert "insufficient funds" in str(err)
        assert "create pool 2/4" in str(err)
        assert [e[0] for e in client.events] == ["send", "finalized", "send_failed"]
        # Transactions after the failed one were never signed
        assert txs[2].signatures[0] == Signature.default()
        assert txs[3].signatures[0] == Signature.default()

    def test_onchain_error_raises_confirmation_error(self, session, client, make_tx):
        client.fail_confirm_at = 1
        txs = [make_tx(1), make_tx(2)]

        with pytest.raises(ConfirmationError) as exc_info:
            TransactionRunner(session).submit_all(txs, label="lock liquidity")

        err = exc_info.value
        assert err.index == 1
        assert err.total == 2
        assert err.signature == txs[0].signatures[0]
        assert err.cause == "InstructionError"
        assert len([e for e in client.events if e[0] == "send"]) == 1

    def test_confirmation_timeout_raises_confirmation_error(self, session, client, make_tx):
        def never_finalizes(tx_sig, **kwargs):
            raise TimeoutError(f"Unable to confirm transaction {tx_sig}")

        client.confirm_transaction = never_finalizes
        tx = make_tx()

        with pytest.raises(ConfirmationError, match="Unable to confirm") as exc_info:
            TransactionRunner(session).submit(tx, "create pool", 3, 3)

        assert exc_info.value.signature == tx.signatures[0]
        assert isinstance(exc_info.value.__cause__, TimeoutError)

    def test_signing_failure_sends_nothing(self, session, client, make_tx):
        """A transaction the operator cannot sign is reported before any send."""
        foreign = make_transaction(Pubkey.new_unique())
        txs = [make_tx(1), foreign, make_tx(3)]

        with pytest.raises(SigningError) as exc_info:
            TransactionRunner(session).submit_all(txs, label="create pool")

        err = exc_info.value
        assert (err.label, err.index, err.total) == ("create pool", 2, 3)
        assert "signing failed" in str(err)
        assert not isinstance(err, SubmissionError)
        assert [e[0] for e in client.events] == ["send", "finalized"]
