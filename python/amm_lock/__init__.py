"""Create a Meteora dynamic AMM pool and lock its liquidity.

The LP tokens minted to the payer are split across beneficiaries by
relative weight (remainder to the last one) and locked into one escrow
per beneficiary. Every transaction is finalized before the next is sent.
"""

from .allocation import (
    AllocationByAmount,
    AllocationByPercentage,
    from_allocations_to_amount,
    split,
)
from .create_pool import (
    LockedAllocation,
    PoolLockResult,
    create_pool_and_lock_liquidity,
    lock_liquidity,
)
from .errors import (
    ConfirmationError,
    InvalidAllocationError,
    LockLiquidityError,
    SigningError,
    StepError,
    SubmissionError,
)
from .svm import KeypairSigner, LockSession, TransactionRunner

__all__ = [
    # Allocation
    "AllocationByPercentage",
    "AllocationByAmount",
    "from_allocations_to_amount",
    "split",
    # Orchestration
    "create_pool_and_lock_liquidity",
    "lock_liquidity",
    "PoolLockResult",
    "LockedAllocation",
    # Session
    "KeypairSigner",
    "LockSession",
    "TransactionRunner",
    # Errors
    "LockLiquidityError",
    "InvalidAllocationError",
    "StepError",
    "SigningError",
    "SubmissionError",
    "ConfirmationError",
]
