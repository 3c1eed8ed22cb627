"""
Transaction builder registry for social operations.

Maps each SocialOperation to the function that turns its request into a
TransactionPlan: the acting identity, the metadata record and the consensus
extra-data KVs. The operation tag selects the builder explicitly.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Type

from ...enums import NewMessageOperation, NewMessageType, SocialOperation
from ...runtime.clock import Clock, SystemClock
from ...runtime.errors import UnsupportedOperationError, ValidationError
from ...transactions import (
    CreateFollowTxnRequest,
    CreateLikeRequest,
    SendDiamondsRequest,
    SendNewMessageRequest,
    SubmitPostRequest,
    TransactionRequest,
    UpdateMessageRequest,
    UpdateProfileRequest,
)
from ..extra_data import ExtraDataKV, build_diamond_consensus_kvs, build_submit_post_consensus_kvs
from ..metadata import TransactionMetadata
from .social import (
    build_follow_metadata,
    build_like_metadata,
    build_new_message_metadata,
    build_submit_post_metadata,
    build_update_profile_metadata,
)

DIAMONDS_NOT_SUPPORTED = "Local construction for diamonds not supported yet."


@dataclass(frozen=True)
class TransactionPlan:
    """Everything local construction needs besides fees and the nonce."""
    public_key: str
    metadata: TransactionMetadata
    consensus_kvs: List[ExtraDataKV] = field(default_factory=list)


PlanBuilder = Callable[[TransactionRequest, Clock], TransactionPlan]


def _plan_update_profile(request: UpdateProfileRequest, clock: Clock) -> TransactionPlan:
    return TransactionPlan(request.updater_public_key, build_update_profile_metadata(request))


def _plan_submit_post(request: SubmitPostRequest, clock: Clock) -> TransactionPlan:
    return TransactionPlan(
        request.updater_public_key,
        build_submit_post_metadata(request, clock),
        build_submit_post_consensus_kvs(request),
    )


def _plan_follow(request: CreateFollowTxnRequest, clock: Clock) -> TransactionPlan:
    return TransactionPlan(request.follower_public_key, build_follow_metadata(request))


def _plan_like(request: CreateLikeRequest, clock: Clock) -> TransactionPlan:
    return TransactionPlan(request.reader_public_key, build_like_metadata(request))


def _plan_diamonds(request: SendDiamondsRequest, clock: Clock) -> TransactionPlan:
    # Same KVs the backend attaches; local construction is not implemented yet.
    build_diamond_consensus_kvs(request)
    raise UnsupportedOperationError(
        DIAMONDS_NOT_SUPPORTED,
        details={"endpoint": SocialOperation.SEND_DIAMONDS.endpoint},
    )


def _message_planner(message_type: NewMessageType, operation: NewMessageOperation) -> PlanBuilder:
    def plan(request: SendNewMessageRequest, clock: Clock) -> TransactionPlan:
        return TransactionPlan(
            request.sender_access_group_owner_public_key,
            build_new_message_metadata(request, message_type, operation, clock),
        )
    return plan


# Builder registry - maps operations to plan builders
BUILDER_REGISTRY: Dict[SocialOperation, PlanBuilder] = {
    SocialOperation.UPDATE_PROFILE: _plan_update_profile,
    SocialOperation.SUBMIT_POST: _plan_submit_post,
    SocialOperation.UPDATE_FOLLOWING_STATUS: _plan_follow,
    SocialOperation.SEND_DIAMONDS: _plan_diamonds,
    SocialOperation.UPDATE_LIKE_STATUS: _plan_like,
    SocialOperation.SEND_DM_MESSAGE: _message_planner(NewMessageType.DIRECT, NewMessageOperation.NEW),
    SocialOperation.UPDATE_DM_MESSAGE: _message_planner(NewMessageType.DIRECT, NewMessageOperation.UPDATE),
    SocialOperation.SEND_GROUP_CHAT_MESSAGE: _message_planner(NewMessageType.GROUP, NewMessageOperation.NEW),
    SocialOperation.UPDATE_GROUP_CHAT_MESSAGE: _message_planner(NewMessageType.GROUP, NewMessageOperation.UPDATE),
}

REQUEST_TYPES: Dict[SocialOperation, Type[TransactionRequest]] = {
    SocialOperation.UPDATE_PROFILE: UpdateProfileRequest,
    SocialOperation.SUBMIT_POST: SubmitPostRequest,
    SocialOperation.UPDATE_FOLLOWING_STATUS: CreateFollowTxnRequest,
    SocialOperation.SEND_DIAMONDS: SendDiamondsRequest,
    SocialOperation.UPDATE_LIKE_STATUS: CreateLikeRequest,
    SocialOperation.SEND_DM_MESSAGE: SendNewMessageRequest,
    SocialOperation.UPDATE_DM_MESSAGE: UpdateMessageRequest,
    SocialOperation.SEND_GROUP_CHAT_MESSAGE: SendNewMessageRequest,
    SocialOperation.UPDATE_GROUP_CHAT_MESSAGE: UpdateMessageRequest,
}


def get_builder_for(operation: SocialOperation) -> PlanBuilder:
    """
    Get the plan builder for an operation.

    Args:
        operation: Social operation tag

    Returns:
        Plan builder function
    """
    return BUILDER_REGISTRY[SocialOperation(operation)]


def build_plan(operation: SocialOperation, request: TransactionRequest,
               clock: Clock = None) -> TransactionPlan:
    """
    Build the local-construction plan for a request.

    Args:
        operation: Social operation tag
        request: Request model matching the operation
        clock: Timestamp source; the system clock when omitted

    Returns:
        TransactionPlan

    Raises:
        ValidationError: If the request type does not match the operation
        UnsupportedOperationError: For diamonds
    """
    operation = SocialOperation(operation)
    expected = REQUEST_TYPES[operation]
    if not isinstance(request, expected):
        raise ValidationError(
            f"{operation.name} expects {expected.__name__}, got {type(request).__name__}"
        )
    return get_builder_for(operation)(request, clock or SystemClock())


def list_operations() -> List[SocialOperation]:
    return list(BUILDER_REGISTRY)


__all__ = [
    "TransactionPlan",
    "BUILDER_REGISTRY",
    "REQUEST_TYPES",
    "DIAMONDS_NOT_SUPPORTED",
    "get_builder_for",
    "build_plan",
    "list_operations",
]
