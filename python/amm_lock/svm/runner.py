"""Sequential sign / submit / finalize loop for chained transactions."""

import logging
from typing import Sequence

from solders.signature import Signature  # type: ignore
from solders.transaction import Transaction  # type: ignore

from ..errors import ConfirmationError, SigningError, SubmissionError
from .session import LockSession

logger = logging.getLogger(__name__)


class TransactionRunner:
    """Drives transactions to finality one at a time.

    Each transaction is signed, submitted and awaited at the session's
    finality level before the next one is touched. The first failure
    aborts the run; remaining transactions are never signed or sent.
    """

    def __init__(self, session: LockSession):
        self._session = session

    def submit(self, tx: Transaction, label: str, index: int = 1, total: int = 1) -> Signature:
        """Sign, submit and finalize a single transaction.

        Raises:
            SigningError: If the operator key could not sign it.
            SubmissionError: If the network rejected the transaction.
            ConfirmationError: If it failed on-chain or never finalized.
        """
        try:
            self._session.signer.sign_transaction(tx)
        except Exception as e:
            raise SigningError(label, index, total, e) from e

        try:
            signature = self._session.send_transaction(bytes(tx))
        except Exception as e:
            raise SubmissionError(label, index, total, e) from e

        logger.info("%s %d/%d: submitted %s", label, index, total, signature)

        try:
            err = self._session.await_finality(signature)
        except Exception as e:
            raise ConfirmationError(label, index, total, signature, e) from e
        if err is not None:
            raise ConfirmationError(label, index, total, signature, err)

        logger.info("transaction %s", signature)
        return signature

    def submit_all(self, transactions: Sequence[Transaction], label: str = "transaction") -> list[Signature]:
        """Submit ``transactions`` in order, waiting for finality between each.

        Returns:
            Finalized signatures, same order as ``transactions``.
        """
        total = len(transactions)
        signatures: list[Signature] = []
        for index, tx in enumerate(transactions, start=1):
            signatures.append(self.submit(tx, label, index, total))
        return signatures
