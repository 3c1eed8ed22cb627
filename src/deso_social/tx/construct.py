"""
Balance-model transaction construction.

Combines a TransactionPlan (identity, metadata, consensus KVs) with a fee
specification and caller extra data into an unsigned Transaction.

The fee is computed once, against a placeholder nonce of maximal encoded
width, and reused unchanged when the real nonce is filled in. The fee that
the permission guard sees is therefore exactly the fee that gets paid.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
import logging
import os
from typing import Any, Callable, Dict, Optional

from ..crypto.keys import public_key_to_compressed_bytes
from ..runtime.errors import ConstructionError, DesoError
from .builders.registry import TransactionPlan
from .extra_data import extra_data_from_map, merge_extra_data
from .fees import FeeSpecification, compute_fee
from .transaction import Transaction, TransactionNonce, TransactionOutput

logger = logging.getLogger(__name__)

# Blocks a locally built transaction stays valid for.
NONCE_EXPIRATION_BLOCK_BUFFER = 275

_MAX_UINT32 = 2 ** 32 - 1
_PLACEHOLDER_NONCE = TransactionNonce(expiration_block_height=_MAX_UINT32, partial_id=_MAX_UINT32)


@dataclass
class ConstructedTransaction:
    """
    An unsigned transaction ready for signing.

    Produced either locally (transaction is set) or from a backend
    construction endpoint (response holds the backend's full answer).
    """
    transaction_hex: str
    fee_nanos: int
    additional_fees_nanos: int = 0
    transaction: Optional[Transaction] = None
    response: Dict[str, Any] = field(default_factory=dict)

    @property
    def total_fees_nanos(self) -> int:
        """Network fee plus all additional named fees."""
        return self.fee_nanos + self.additional_fees_nanos

    @classmethod
    def from_response(cls, response: Dict[str, Any], additional_fees_nanos: int = 0) -> ConstructedTransaction:
        """
        Normalize a backend construction response.

        Raises:
            ConstructionError: If the response has no TransactionHex
        """
        transaction_hex = response.get("TransactionHex") if isinstance(response, dict) else None
        if not transaction_hex:
            raise ConstructionError("Construction response has no TransactionHex",
                                    details={"response": response})
        return cls(
            transaction_hex=transaction_hex,
            fee_nanos=int(response.get("FeeNanos") or 0),
            additional_fees_nanos=additional_fees_nanos,
            response=response,
        )


class BalanceModelConstructor:
    """
    Builds unsigned balance-model transactions.

    Args:
        block_height_source: Callable returning the current block height;
            only needed for `construct`, not for fee estimation
        partial_id_source: Callable returning a 32-bit nonce partial id
    """

    def __init__(self, block_height_source: Optional[Callable[[], int]] = None,
                 partial_id_source: Optional[Callable[[], int]] = None):
        self._block_height_source = block_height_source
        self._partial_id_source = partial_id_source or (lambda: int.from_bytes(os.urandom(4), "big"))

    def transaction_with_fee(self, plan: TransactionPlan, fee_spec: FeeSpecification,
                             extra_data: Optional[Dict[str, str]] = None) -> Transaction:
        """
        Assemble the transaction with its fee and a placeholder nonce.

        No network access. The returned fee is authoritative for permission
        checks and is reused by `construct`.

        Args:
            plan: Identity, metadata and consensus KVs
            fee_spec: Fee rate and additional fees
            extra_data: Caller extra data map

        Returns:
            Unsigned Transaction with fee_nanos set
        """
        outputs = tuple(
            TransactionOutput(public_key_to_compressed_bytes(fee.public_key), fee.amount_nanos)
            for fee in fee_spec.transaction_fees
        )
        tx = Transaction(
            txn_type=int(plan.metadata.txn_type),
            metadata=plan.metadata.to_bytes(),
            public_key=public_key_to_compressed_bytes(plan.public_key),
            outputs=outputs,
            extra_data=tuple(merge_extra_data(extra_data_from_map(extra_data), plan.consensus_kvs)),
            nonce=_PLACEHOLDER_NONCE,
        )
        return tx.with_fee(compute_fee(tx, fee_spec.min_fee_rate_nanos_per_kb))

    def construct(self, plan: TransactionPlan, fee_spec: FeeSpecification,
                  extra_data: Optional[Dict[str, str]] = None,
                  priced: Optional[Transaction] = None) -> ConstructedTransaction:
        """
        Build the final unsigned transaction with a real nonce.

        Args:
            plan: Identity, metadata and consensus KVs
            fee_spec: Fee rate and additional fees
            extra_data: Caller extra data map
            priced: Result of an earlier `transaction_with_fee` for the same
                inputs; reused so the fee is not recomputed

        Returns:
            ConstructedTransaction

        Raises:
            ConstructionError: If the block height cannot be obtained
        """
        if self._block_height_source is None:
            raise ConstructionError("Local construction needs a block height source")
        if priced is None:
            priced = self.transaction_with_fee(plan, fee_spec, extra_data)

        try:
            block_height = int(self._block_height_source())
        except DesoError as e:
            raise ConstructionError(f"Could not read block height: {e.message}", cause=e)

        nonce = TransactionNonce(
            expiration_block_height=block_height + NONCE_EXPIRATION_BLOCK_BUFFER,
            partial_id=self._partial_id_source(),
        )
        tx = replace(priced, nonce=nonce)
        logger.debug(f"Constructed {plan.metadata.txn_type.name} locally, fee {tx.fee_nanos} nanos")
        return ConstructedTransaction(
            transaction_hex=tx.to_hex(),
            fee_nanos=tx.fee_nanos,
            additional_fees_nanos=fee_spec.additional_fees_nanos,
            transaction=tx,
        )


__all__ = [
    "NONCE_EXPIRATION_BLOCK_BUFFER",
    "ConstructedTransaction",
    "BalanceModelConstructor",
]
