"""
Transaction builders for DeSo social operations.

Pure mappers from request models to metadata records, plus the registry
that pairs each operation with its builder.
"""

from .social import *
from .registry import (
    TransactionPlan,
    BUILDER_REGISTRY,
    REQUEST_TYPES,
    DIAMONDS_NOT_SUPPORTED,
    get_builder_for,
    build_plan,
    list_operations,
)

__all__ = [
    "POST_CREATOR_BASIS_POINTS",
    "POST_STAKE_MULTIPLE_BASIS_POINTS",
    "build_update_profile_metadata",
    "build_submit_post_metadata",
    "encode_post_body",
    "build_follow_metadata",
    "build_like_metadata",
    "build_new_message_metadata",
    "TransactionPlan",
    "BUILDER_REGISTRY",
    "REQUEST_TYPES",
    "DIAMONDS_NOT_SUPPORTED",
    "get_builder_for",
    "build_plan",
    "list_operations",
]
