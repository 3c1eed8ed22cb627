"""
Pre-submission permission checks.

A PermissionGuard is asked before a transaction is submitted whether the
signing identity may spend `total_spend_nanos` on one more transaction of
the given type. Refusal raises PermissionDeniedError and the pipeline stops
before any network call. A guard that holds allowance in `check` gets it back
through `release` when the call fails afterwards.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import logging
import threading
from typing import Callable, Dict, Optional

from .enums import TransactionType
from .runtime.errors import ErrorCode, PermissionDeniedError

logger = logging.getLogger(__name__)


class PermissionGuard(ABC):
    """Authorization oracle consulted before submission."""

    @abstractmethod
    def check(self, txn_type: TransactionType, *, limit_override: Optional[int] = None,
              total_spend_nanos: Optional[int] = None) -> None:
        """
        Authorize one transaction.

        Args:
            txn_type: Transaction type being submitted
            limit_override: Count to request if new permission is needed
            total_spend_nanos: Fee plus additional fees, when known

        Raises:
            PermissionDeniedError: If the transaction is not allowed
        """
        pass

    def release(self, txn_type: TransactionType, *, total_spend_nanos: Optional[int] = None) -> None:
        """Give back what a successful `check` held for a call that then failed."""
        return None


class AllowAllGuard(PermissionGuard):
    """Guard for callers that hold the owner key and need no limits."""

    def check(self, txn_type: TransactionType, *, limit_override: Optional[int] = None,
              total_spend_nanos: Optional[int] = None) -> None:
        return None


@dataclass
class SpendingLimits:
    """Remaining allowance of a derived key."""
    global_limit_nanos: int = 0
    transaction_counts: Dict[TransactionType, int] = field(default_factory=dict)


# (txn_type, requested_count, total_spend_nanos) -> granted?
PermissionRequester = Callable[[TransactionType, int, int], bool]


class SpendingLimitGuard(PermissionGuard):
    """
    Tracks a derived key's spending limits locally.

    Each successful check holds one transaction of the type and the spend
    amount from the global limit; `release` puts them back if the call is
    abandoned. When the allowance is short and a requester is configured,
    the requester is asked to grant more; a grant raises the type's count to
    `limit_override` (default 1) and the global limit to cover the spend.

    The requester runs without the lock held, so it may block on the user
    and may call back into the guard.
    """

    def __init__(self, limits: Optional[SpendingLimits] = None,
                 requester: Optional[PermissionRequester] = None):
        self.limits = limits or SpendingLimits()
        self._requester = requester
        self._lock = threading.Lock()

    def _allowed(self, txn_type: TransactionType, amount: int) -> bool:
        return (self.limits.transaction_counts.get(txn_type, 0) > 0
                and self.limits.global_limit_nanos >= amount)

    def _take(self, txn_type: TransactionType, amount: int) -> None:
        self.limits.transaction_counts[txn_type] -= 1
        self.limits.global_limit_nanos -= amount

    def check(self, txn_type: TransactionType, *, limit_override: Optional[int] = None,
              total_spend_nanos: Optional[int] = None) -> None:
        amount = total_spend_nanos or 0
        with self._lock:
            if self._allowed(txn_type, amount):
                self._take(txn_type, amount)
                return
            remaining = self.limits.global_limit_nanos

        requested = limit_override or 1
        if self._requester is None or not self._requester(txn_type, requested, amount):
            raise PermissionDeniedError(
                f"Not authorized to submit {txn_type.wire_name}",
                ErrorCode.SPENDING_LIMIT_EXCEEDED,
                details={
                    "txn_type": txn_type.wire_name,
                    "requested_count": requested,
                    "spend_nanos": amount,
                    "remaining_nanos": remaining,
                },
            )
        logger.info(f"Granted {requested} more {txn_type.wire_name} transaction(s)")

        with self._lock:
            counts = self.limits.transaction_counts
            counts[txn_type] = max(counts.get(txn_type, 0), requested)
            self.limits.global_limit_nanos = max(self.limits.global_limit_nanos, amount)
            self._take(txn_type, amount)

    def release(self, txn_type: TransactionType, *, total_spend_nanos: Optional[int] = None) -> None:
        amount = total_spend_nanos or 0
        with self._lock:
            counts = self.limits.transaction_counts
            counts[txn_type] = counts.get(txn_type, 0) + 1
            self.limits.global_limit_nanos += amount
        logger.debug(f"Released {txn_type.wire_name} allowance of {amount} nanos")


__all__ = [
    "PermissionGuard",
    "AllowAllGuard",
    "SpendingLimits",
    "SpendingLimitGuard",
]
