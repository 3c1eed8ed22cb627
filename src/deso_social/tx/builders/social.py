"""
Metadata builders for social transactions.

One pure function per transaction kind maps a validated request onto its
metadata record. Only the post and new-message builders read the clock.
"""

from __future__ import annotations
import json
from typing import Optional

from ...codec.hashes import hex_to_bytes
from ...crypto.keys import public_key_to_compressed_bytes
from ...enums import NewMessageOperation, NewMessageType
from ...runtime.clock import Clock, SystemClock
from ...runtime.errors import ValidationError
from ...transactions import (
    CreateFollowTxnRequest,
    CreateLikeRequest,
    SendNewMessageRequest,
    SubmitPostRequest,
    UpdateMessageRequest,
    UpdateProfileRequest,
)
from ..metadata import (
    FollowMetadata,
    LikeMetadata,
    NewMessageMetadata,
    SubmitPostMetadata,
    UpdateProfileMetadata,
)

# Fixed by policy for every post; not caller-configurable.
POST_CREATOR_BASIS_POINTS = 1000
POST_STAKE_MULTIPLE_BASIS_POINTS = 12500

_SYSTEM_CLOCK = SystemClock()


def _utf8(s: Optional[str]) -> bytes:
    return (s or "").encode("utf-8")


def build_update_profile_metadata(request: UpdateProfileRequest) -> UpdateProfileMetadata:
    # A self-update omits the profile key; the ledger uses the signer's key.
    if request.is_self_update:
        profile_public_key = b""
    else:
        profile_public_key = public_key_to_compressed_bytes(request.profile_public_key)
    return UpdateProfileMetadata(
        profile_public_key=profile_public_key,
        new_username=_utf8(request.new_username),
        new_description=_utf8(request.new_description),
        new_profile_pic=_utf8(request.new_profile_pic),
        new_creator_basis_points=request.new_creator_basis_points,
        new_stake_multiple_basis_points=request.new_stake_multiple_basis_points,
        is_hidden=request.is_hidden,
    )


def encode_post_body(request: SubmitPostRequest) -> bytes:
    """Post body as compact UTF-8 JSON with empty fields removed."""
    return json.dumps(
        request.body_obj.compact(),
        separators=(",", ":"),
        ensure_ascii=False,
    ).encode("utf-8")


def build_submit_post_metadata(request: SubmitPostRequest, clock: Clock = _SYSTEM_CLOCK) -> SubmitPostMetadata:
    return SubmitPostMetadata(
        post_hash_to_modify=hex_to_bytes(request.post_hash_hex_to_modify, "PostHashHexToModify"),
        parent_stake_id=hex_to_bytes(request.parent_stake_id, "ParentStakeID"),
        body=encode_post_body(request),
        creator_basis_points=POST_CREATOR_BASIS_POINTS,
        stake_multiple_basis_points=POST_STAKE_MULTIPLE_BASIS_POINTS,
        timestamp_nanos=clock.now_nanos(),
        is_hidden=bool(request.is_hidden),
    )


def build_follow_metadata(request: CreateFollowTxnRequest) -> FollowMetadata:
    return FollowMetadata(
        followed_public_key=public_key_to_compressed_bytes(request.followed_public_key),
        is_unfollow=bool(request.is_unfollow),
    )


def build_like_metadata(request: CreateLikeRequest) -> LikeMetadata:
    return LikeMetadata(
        liked_post_hash=hex_to_bytes(request.liked_post_hash_hex, "LikedPostHashHex"),
        is_unlike=bool(request.is_unlike),
    )


def build_new_message_metadata(
    request: SendNewMessageRequest,
    message_type: NewMessageType,
    operation: NewMessageOperation,
    clock: Clock = _SYSTEM_CLOCK,
) -> NewMessageMetadata:
    """
    Metadata shared by the four message transactions.

    New messages are stamped from the clock. Updates reuse the timestamp of
    the message they replace, so they require an UpdateMessageRequest.
    """
    if operation == NewMessageOperation.UPDATE:
        if not isinstance(request, UpdateMessageRequest):
            raise ValidationError("Message updates require TimestampNanosString")
        timestamp_nanos = request.timestamp_nanos
    else:
        timestamp_nanos = clock.now_nanos()

    return NewMessageMetadata(
        sender_access_group_owner_public_key=public_key_to_compressed_bytes(
            request.sender_access_group_owner_public_key),
        sender_access_group_key_name=_utf8(request.sender_access_group_key_name),
        sender_access_group_public_key=public_key_to_compressed_bytes(
            request.sender_access_group_public_key),
        recipient_access_group_owner_public_key=public_key_to_compressed_bytes(
            request.recipient_access_group_owner_public_key),
        recipient_access_group_key_name=_utf8(request.recipient_access_group_key_name),
        recipient_access_group_public_key=public_key_to_compressed_bytes(
            request.recipient_access_group_public_key),
        encrypted_text=_utf8(request.encrypted_message_text),
        timestamp_nanos=timestamp_nanos,
        new_message_type=message_type,
        new_message_operation=operation,
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
]
