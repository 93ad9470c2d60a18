"""Errors raised while creating a pool and locking its liquidity."""

from typing import Any


class LockLiquidityError(Exception):
    """Base class for all pool creation / liquidity lock failures."""


class InvalidAllocationError(LockLiquidityError, ValueError):
    """Allocation input is malformed (empty list, zero total weight...)."""


class StepError(LockLiquidityError):
    """A step of the run failed; the run must resume from that step.

    Attributes:
        label: Step being executed (e.g. "create pool", "read LP balance").
        index: 1-based position of the failed item within the step.
        total: Number of items in the step.
        cause: Underlying error.
    """

    action = "failed"

    def __init__(self, label: str, index: int = 1, total: int = 1, cause: Any = None):
        self.label = label
        self.index = index
        self.total = total
        self.cause = cause
        super().__init__(f"{label} {index}/{total}: {self.action}: {cause}")


class SigningError(StepError):
    """The operator key could not sign a transaction. Nothing was sent."""

    action = "signing failed"


class SubmissionError(StepError):
    """The network rejected a signed transaction."""

    action = "submission failed"


class ConfirmationError(StepError):
    """A submitted transaction did not reach finality.

    Attributes:
        signature: Signature returned at submission.
    """

    def __init__(
        self,
        label: str,
        index: int,
        total: int,
        signature: Any,
        cause: Any = None,
    ):
        self.signature = signature
        self.action = f"transaction {signature} not finalized"
        super().__init__(label, index, total, cause)
