"""
Transaction construction and execution for DeSo social operations.

Provides metadata records and builders, consensus extra data, the
balance-model transaction codec, fee calculation, local construction, and
the sign-and-submit pipeline.
"""

from .metadata import (
    UpdateProfileMetadata,
    SubmitPostMetadata,
    FollowMetadata,
    LikeMetadata,
    NewMessageMetadata,
    TransactionMetadata,
    encode_metadata,
    decode_metadata,
)
from .extra_data import (
    ExtraDataKV,
    build_submit_post_consensus_kvs,
    build_diamond_consensus_kvs,
)
from .transaction import Transaction, TransactionOutput, TransactionNonce
from .fees import FeeSpecification, compute_fee, sum_transaction_fees, DEFAULT_FEE_RATE_NANOS_PER_KB
from .builders import TransactionPlan, build_plan, get_builder_for
from .construct import BalanceModelConstructor, ConstructedTransaction
from .execute import SubmissionOrchestrator, SubmissionResult, TxRequestOptions

__all__ = [
    "UpdateProfileMetadata",
    "SubmitPostMetadata",
    "FollowMetadata",
    "LikeMetadata",
    "NewMessageMetadata",
    "TransactionMetadata",
    "encode_metadata",
    "decode_metadata",
    "ExtraDataKV",
    "build_submit_post_consensus_kvs",
    "build_diamond_consensus_kvs",
    "Transaction",
    "TransactionOutput",
    "TransactionNonce",
    "FeeSpecification",
    "compute_fee",
    "sum_transaction_fees",
    "DEFAULT_FEE_RATE_NANOS_PER_KB",
    "TransactionPlan",
    "build_plan",
    "get_builder_for",
    "BalanceModelConstructor",
    "ConstructedTransaction",
    "SubmissionOrchestrator",
    "SubmissionResult",
    "TxRequestOptions",
]
