"""Create a dynamic AMM pool and lock its LP across beneficiaries."""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from solders.pubkey import Pubkey  # type: ignore
from solders.signature import Signature  # type: ignore

from .allocation import AllocationByAmount, AllocationByPercentage, from_allocations_to_amount
from .amm.client import AmmClient, DynamicAmmClient
from .amm.utils import derive_lp_mint, get_associated_token_account
from .errors import StepError
from .svm.runner import TransactionRunner
from .svm.session import LockSession
from .svm.utils import to_pubkey

logger = logging.getLogger(__name__)

LABEL_CREATE_POOL = "create pool"
LABEL_LOCK_LIQUIDITY = "lock liquidity"
LABEL_BUILD_POOL = "build pool transactions"
LABEL_READ_BALANCE = "read LP balance"
LABEL_LOAD_POOL = "load pool"


@dataclass
class LockedAllocation:
    """A finalized lock for one beneficiary."""

    address: str
    amount: int
    transaction: Signature

    def to_dict(self) -> dict[str, Any]:
        return {"address": self.address, "amount": str(self.amount), "transaction": str(self.transaction)}


@dataclass
class PoolLockResult:
    """Outcome of a complete run."""

    pool: Pubkey
    lp_mint: Pubkey
    lp_balance: int
    pool_transactions: list[Signature] = field(default_factory=list)
    locks: list[LockedAllocation] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "pool": str(self.pool),
            "lpMint": str(self.lp_mint),
            "lpBalance": str(self.lp_balance),
            "poolTransactions": [str(sig) for sig in self.pool_transactions],
            "locks": [lock.to_dict() for lock in self.locks],
        }


def create_pool_and_lock_liquidity(
    session: LockSession,
    token_a_mint: "str | Pubkey",
    token_b_mint: "str | Pubkey",
    token_a_amount: int,
    token_b_amount: int,
    config: "str | Pubkey",
    allocations: Sequence[AllocationByPercentage],
    amm: Optional[AmmClient] = None,
) -> PoolLockResult:
    """Create a pool from a fee config, then lock the payer's LP for each beneficiary.

    Every transaction is finalized before the next one is built or sent.
    The LP balance is read only after pool creation is finalized.

    Args:
        session: RPC session; its signer pays for and signs everything.
        token_a_mint: Mint of token A.
        token_b_mint: Mint of token B.
        token_a_amount: Initial deposit of token A (atomic units).
        token_b_amount: Initial deposit of token B (atomic units).
        config: Fee configuration account of the pool.
        allocations: Beneficiaries and their relative weights. The last one
            receives the rounding remainder.
        amm: AMM builder; defaults to DynamicAmmClient bound to ``session``.

    Raises:
        InvalidAllocationError: Allocations are malformed. Checked before
            any transaction is sent.
        StepError: A build or read step failed (base of the two below).
        SubmissionError: A transaction was rejected.
        ConfirmationError: A transaction did not reach finality.
    """
    # Reject bad allocations before touching the network
    from_allocations_to_amount(0, allocations)
    for allocation in allocations:
        to_pubkey(allocation.address)

    amm = amm or DynamicAmmClient(session)
    runner = TransactionRunner(session)
    payer = session.payer
    token_a_mint, token_b_mint = to_pubkey(token_a_mint), to_pubkey(token_b_mint)
    config = to_pubkey(config)

    pool = amm.derive_pool_address(token_a_mint, token_b_mint, config)
    logger.info("create pool %s", pool)
    try:
        transactions = amm.build_pool_creation_transactions(
            payer,
            token_a_mint,
            token_b_mint,
            token_a_amount,
            token_b_amount,
            config,
        )
    except Exception as e:
        raise StepError(LABEL_BUILD_POOL, cause=e) from e
    pool_signatures = runner.submit_all(transactions, label=LABEL_CREATE_POOL)

    lp_mint = derive_lp_mint(pool)
    payer_pool_lp = get_associated_token_account(lp_mint, payer)
    try:
        lp_balance = session.get_token_balance(payer_pool_lp)
    except Exception as e:
        raise StepError(LABEL_READ_BALANCE, cause=e) from e
    logger.info("payer pool LP balance %s", lp_balance)

    result = PoolLockResult(
        pool=pool,
        lp_mint=lp_mint,
        lp_balance=lp_balance,
        pool_transactions=pool_signatures,
    )

    amounts = from_allocations_to_amount(lp_balance, allocations)
    result.locks = lock_liquidity(session, amm, pool, amounts, runner=runner)
    return result


def lock_liquidity(
    session: LockSession,
    amm: AmmClient,
    pool: Pubkey,
    amounts: Sequence[AllocationByAmount],
    runner: Optional[TransactionRunner] = None,
) -> list[LockedAllocation]:
    """Lock each allocation's amount for its beneficiary, in order.

    Each lock transaction is built only after the previous one is
    finalized, so it sees the escrow state left by its predecessor.
    """
    runner = runner or TransactionRunner(session)
    try:
        handle = amm.load_pool(pool)
    except Exception as e:
        raise StepError(LABEL_LOAD_POOL, cause=e) from e
    total = len(amounts)
    locked: list[LockedAllocation] = []

    for index, allocation in enumerate(amounts, start=1):
        label = f"{LABEL_LOCK_LIQUIDITY} {allocation.address}"
        logger.info("Lock liquidity %s", allocation.address)
        try:
            tx = handle.build_lock_liquidity_transaction(
                to_pubkey(allocation.address),
                allocation.amount,
                session.payer,
            )
        except Exception as e:
            raise StepError(label, index, total, e) from e
        signature = runner.submit(tx, label, index, total)
        locked.append(LockedAllocation(allocation.address, allocation.amount, signature))

    return locked
