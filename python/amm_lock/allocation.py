"""Split an LP balance across beneficiaries by relative weight."""

from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import Any, Sequence, Union

from .errors import InvalidAllocationError

Weight = Union[int, float, Decimal, Fraction]


@dataclass(frozen=True)
class AllocationByPercentage:
    """A beneficiary and its relative weight.

    Weights do not need to sum to 100; each beneficiary receives
    weight / sum(weights) of the total.
    """

    address: str  # Solana address (base58)
    percentage: Weight

    def to_dict(self) -> dict[str, Any]:
        return {"address": self.address, "percentage": self.percentage}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AllocationByPercentage":
        return cls(address=data["address"], percentage=data["percentage"])


@dataclass(frozen=True)
class AllocationByAmount:
    """A beneficiary and the exact amount of LP tokens it receives."""

    address: str
    amount: int

    def to_dict(self) -> dict[str, Any]:
        return {"address": self.address, "amount": str(self.amount)}


def _as_fraction(weight: Weight) -> Fraction:
    # str() keeps the decimal value a user wrote (0.1 -> 1/10, not the binary float)
    if isinstance(weight, (int, Fraction)):
        return Fraction(weight)
    try:
        return Fraction(str(weight))
    except (TypeError, ValueError) as e:
        raise InvalidAllocationError(f"percentage must be a finite number, got {weight!r}") from e


def from_allocations_to_amount(
    total: int,
    allocations: Sequence[AllocationByPercentage],
) -> list[AllocationByAmount]:
    """Calculate per-beneficiary amounts from a total and relative weights.

    Uses floor division with exact rational arithmetic. The remainder
    (dust) goes to the last beneficiary so the amounts always sum to
    ``total``.

    Args:
        total: Amount to split, in atomic units.
        allocations: Beneficiaries in payout order.

    Returns:
        One AllocationByAmount per input allocation, same order.

    Raises:
        InvalidAllocationError: If the list is empty, a weight is
            negative, the weights sum to zero or total is not a
            non-negative integer.
    """
    if isinstance(total, bool) or not isinstance(total, int):
        raise InvalidAllocationError(f"total must be an integer, got {total!r}")
    if total < 0:
        raise InvalidAllocationError(f"total must be non-negative, got {total}")
    if not allocations:
        raise InvalidAllocationError("At least one allocation is required")

    weights = [_as_fraction(a.percentage) for a in allocations]
    for allocation, weight in zip(allocations, weights):
        if weight < 0:
            raise InvalidAllocationError(
                f"percentage must be non-negative, got {allocation.percentage} "
                f"for {allocation.address}"
            )

    sum_percentage = sum(weights, Fraction(0))
    if sum_percentage == 0:
        raise InvalidAllocationError("Sum of percentages is zero")

    amounts: list[AllocationByAmount] = []
    allocated = 0

    for allocation, weight in zip(allocations[:-1], weights[:-1]):
        amount = (total * weight) // sum_percentage
        allocated += amount
        amounts.append(AllocationByAmount(address=allocation.address, amount=amount))

    # Last beneficiary gets the remainder
    amounts.append(
        AllocationByAmount(address=allocations[-1].address, amount=total - allocated)
    )
    return amounts


split = from_allocations_to_amount
