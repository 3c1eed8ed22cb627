"""
Transaction execution for social operations.

Chooses where the unsigned transaction comes from (the backend's
construction endpoint or a local construction function), then signs,
submits and normalizes the result. Each stage raises its own error type;
nothing is retried.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import Any, Callable, Dict, Optional

from ..runtime.errors import (
    ConstructionError,
    DesoError,
    SigningError,
    SubmissionError,
    UnsupportedOperationError,
    ValidationError,
)
from ..transactions import TransactionRequest
from .construct import ConstructedTransaction
from .fees import sum_transaction_fees

logger = logging.getLogger(__name__)

ConstructionFunction = Callable[[TransactionRequest], ConstructedTransaction]


@dataclass
class TxRequestOptions:
    """Per-call options for social operations."""

    check_permissions: bool = True
    tx_limit_count: Optional[int] = None
    local_construction: bool = False
    broadcast: bool = True
    construction_function: Optional[ConstructionFunction] = None
    send_message_unencrypted: bool = False


@dataclass
class SubmissionResult:
    """
    Normalized outcome of an operation.

    `submitted` is None when broadcast was skipped; `constructed` is always
    present and carries the fee.
    """

    constructed: ConstructedTransaction
    submitted: Optional[Dict[str, Any]] = None

    @property
    def fee_nanos(self) -> int:
        return self.constructed.fee_nanos

    @property
    def is_submitted(self) -> bool:
        return self.submitted is not None

    @property
    def transaction_hex(self) -> str:
        return self.constructed.transaction_hex

    @property
    def txn_hash_hex(self) -> Optional[str]:
        if self.submitted:
            return self.submitted.get("TxnHashHex")
        return None


class SubmissionOrchestrator:
    """
    Construct, sign and submit.

    Args:
        client: DesoClient used for remote construction and submission
        signer: Signer for the acting identity; required only to broadcast
    """

    def __init__(self, client, signer=None):
        self.client = client
        self.signer = signer

    def sign_and_submit(self, endpoint: str, request: TransactionRequest,
                        options: Optional[TxRequestOptions] = None,
                        construction_function: Optional[ConstructionFunction] = None) -> SubmissionResult:
        """
        Run the pipeline for one request.

        Local construction is used when the caller supplies a construction
        function in the options, or sets `local_construction` and the
        operation has one. Otherwise the backend endpoint constructs.

        Args:
            endpoint: Backend construction endpoint for the operation
            request: Request model
            options: Per-call options
            construction_function: The operation's local construction function

        Returns:
            SubmissionResult

        Raises:
            ConstructionError, SigningError, SubmissionError: by stage
            UnsupportedOperationError, ValidationError: from local construction
        """
        options = options or TxRequestOptions()
        local = options.construction_function
        if local is None and options.local_construction:
            local = construction_function

        constructed = self._construct(endpoint, request, local)
        if not options.broadcast:
            logger.debug(f"Broadcast skipped for {endpoint}")
            return SubmissionResult(constructed=constructed)

        signed_hex = self._sign(constructed)
        submitted = self._submit(endpoint, signed_hex)
        logger.info(f"Submitted {endpoint} transaction {submitted.get('TxnHashHex', '')}, "
                    f"fee {constructed.fee_nanos} nanos")
        return SubmissionResult(constructed=constructed, submitted=submitted)

    def _construct(self, endpoint: str, request: TransactionRequest,
                   local: Optional[ConstructionFunction]) -> ConstructedTransaction:
        if local is not None:
            logger.debug(f"Constructing {endpoint} locally")
            try:
                return local(request)
            except (ConstructionError, UnsupportedOperationError, ValidationError):
                raise
            except DesoError as e:
                raise ConstructionError(f"Local construction failed: {e.message}", cause=e)

        logger.debug(f"Constructing {endpoint} remotely")
        try:
            response = self.client.post(endpoint, request.to_wire())
        except DesoError as e:
            raise ConstructionError(f"Remote construction failed: {e.message}",
                                    details={"endpoint": endpoint}, cause=e)
        return ConstructedTransaction.from_response(
            response, additional_fees_nanos=sum_transaction_fees(request.transaction_fees))

    def _sign(self, constructed: ConstructedTransaction) -> str:
        if self.signer is None:
            raise SigningError("No signer configured; pass broadcast=False to only construct")
        try:
            if constructed.transaction is not None:
                return self.signer.sign_transaction(constructed.transaction).to_hex()
            return self.signer.sign_transaction_hex(constructed.transaction_hex)
        except SigningError:
            raise
        except DesoError as e:
            raise SigningError(f"Signing failed: {e.message}", cause=e)

    def _submit(self, endpoint: str, signed_hex: str) -> Dict[str, Any]:
        try:
            return self.client.submit_transaction(signed_hex)
        except DesoError as e:
            raise SubmissionError(f"Submission failed: {e.message}",
                                  details={"endpoint": endpoint}, cause=e)


__all__ = [
    "TxRequestOptions",
    "SubmissionResult",
    "SubmissionOrchestrator",
    "ConstructionFunction",
]
