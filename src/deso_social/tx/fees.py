"""
Transaction fee calculation for balance-model transactions.

The network fee is rate-based: fee-rate-per-kilobyte times the size of the
signed transaction. The signature is not known until after the fee is
fixed, so the size is measured unsigned and padded by the largest DER
signature the ledger accepts.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import math
from typing import List, Optional

from ..transactions import TransactionFee, TransactionRequest

DEFAULT_FEE_RATE_NANOS_PER_KB = 1000
MAX_SIGNATURE_LENGTH = 72

# The fee's own uvarint width feeds back into the size; it settles within a few rounds.
_MAX_FEE_ROUNDS = 8


@dataclass(frozen=True)
class FeeSpecification:
    """Fee-rate override plus additional named fees."""

    min_fee_rate_nanos_per_kb: int = DEFAULT_FEE_RATE_NANOS_PER_KB
    transaction_fees: List[TransactionFee] = field(default_factory=list)

    @classmethod
    def from_request(cls, request: TransactionRequest) -> FeeSpecification:
        rate = request.min_fee_rate_nanos_per_kb
        return cls(
            min_fee_rate_nanos_per_kb=DEFAULT_FEE_RATE_NANOS_PER_KB if rate is None else rate,
            transaction_fees=list(request.transaction_fees or []),
        )

    @property
    def additional_fees_nanos(self) -> int:
        return sum_transaction_fees(self.transaction_fees)


def sum_transaction_fees(fees: Optional[List[TransactionFee]]) -> int:
    """Total of all additional named fees; 0 when there are none."""
    return sum(fee.amount_nanos for fee in fees or [])


def fee_for_size(size_bytes: int, fee_rate_nanos_per_kb: int) -> int:
    """
    Rate-derived fee for a transaction of `size_bytes`.

    Args:
        size_bytes: Unsigned transaction size
        fee_rate_nanos_per_kb: Fee rate in nanos per 1000 bytes

    Returns:
        Fee in nanos, rounded up
    """
    return math.ceil((size_bytes + MAX_SIGNATURE_LENGTH) * fee_rate_nanos_per_kb / 1000)


def compute_fee(transaction, fee_rate_nanos_per_kb: int) -> int:
    """
    Smallest fee that covers the transaction once the fee itself is encoded.

    Args:
        transaction: Unsigned Transaction; its current fee_nanos is ignored
        fee_rate_nanos_per_kb: Fee rate in nanos per 1000 bytes

    Returns:
        Fee in nanos
    """
    fee = 0
    for _ in range(_MAX_FEE_ROUNDS):
        size = len(transaction.with_fee(fee).to_bytes(include_signature=False))
        needed = fee_for_size(size, fee_rate_nanos_per_kb)
        if needed <= fee:
            return fee
        fee = needed
    return fee


__all__ = [
    "DEFAULT_FEE_RATE_NANOS_PER_KB",
    "MAX_SIGNATURE_LENGTH",
    "FeeSpecification",
    "sum_transaction_fees",
    "fee_for_size",
    "compute_fee",
]
