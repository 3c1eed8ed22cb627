"""
Transaction metadata records for DeSo social transactions.

Each record is an immutable value with a fixed wire layout. Records form a
tagged union keyed by `txn_type`; `encode_metadata` selects the encoder for
the tag explicitly instead of relying on per-class dispatch.

Wire layouts (in order):

    UpdateProfile  profile_public_key(var) new_username(var) new_description(var)
                   new_profile_pic(var) new_creator_basis_points(uvarint)
                   new_stake_multiple_basis_points(uvarint) is_hidden(bool)
    SubmitPost     post_hash_to_modify(var) parent_stake_id(var) body(var)
                   creator_basis_points(uvarint) stake_multiple_basis_points(uvarint)
                   timestamp_nanos(uvarint) is_hidden(bool)
    Follow         followed_public_key(33) is_unfollow(bool)
    Like           liked_post_hash(32) is_unlike(bool)
    NewMessage     sender owner/key name/group key (var x3)
                   recipient owner/key name/group key (var x3)
                   encrypted_text(var) timestamp_nanos(uvarint)
                   new_message_type(u8) new_message_operation(u8)

`var` is a uvarint length prefix followed by the raw bytes.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, Union

from ..codec.reader import BinaryReader
from ..codec.writer import BinaryWriter
from ..enums import NewMessageOperation, NewMessageType, TransactionType
from ..runtime.errors import EncodingError

POST_HASH_LENGTH = 32
PUBLIC_KEY_LENGTH = 33


@dataclass(frozen=True)
class UpdateProfileMetadata:
    profile_public_key: bytes
    new_username: bytes
    new_description: bytes
    new_profile_pic: bytes
    new_creator_basis_points: int
    new_stake_multiple_basis_points: int
    is_hidden: bool

    txn_type = TransactionType.UPDATE_PROFILE

    def to_bytes(self) -> bytes:
        return encode_metadata(self)


@dataclass(frozen=True)
class SubmitPostMetadata:
    post_hash_to_modify: bytes
    parent_stake_id: bytes
    body: bytes
    creator_basis_points: int
    stake_multiple_basis_points: int
    timestamp_nanos: int
    is_hidden: bool

    txn_type = TransactionType.SUBMIT_POST

    def to_bytes(self) -> bytes:
        return encode_metadata(self)


@dataclass(frozen=True)
class FollowMetadata:
    followed_public_key: bytes
    is_unfollow: bool

    txn_type = TransactionType.FOLLOW

    def to_bytes(self) -> bytes:
        return encode_metadata(self)


@dataclass(frozen=True)
class LikeMetadata:
    liked_post_hash: bytes
    is_unlike: bool

    txn_type = TransactionType.LIKE

    def to_bytes(self) -> bytes:
        return encode_metadata(self)


@dataclass(frozen=True)
class NewMessageMetadata:
    sender_access_group_owner_public_key: bytes
    sender_access_group_key_name: bytes
    sender_access_group_public_key: bytes
    recipient_access_group_owner_public_key: bytes
    recipient_access_group_key_name: bytes
    recipient_access_group_public_key: bytes
    encrypted_text: bytes
    timestamp_nanos: int
    new_message_type: NewMessageType
    new_message_operation: NewMessageOperation

    txn_type = TransactionType.NEW_MESSAGE

    def to_bytes(self) -> bytes:
        return encode_metadata(self)


TransactionMetadata = Union[
    UpdateProfileMetadata,
    SubmitPostMetadata,
    FollowMetadata,
    LikeMetadata,
    NewMessageMetadata,
]


def _encode_update_profile(m: UpdateProfileMetadata, w: BinaryWriter) -> None:
    w.len_prefixed_bytes(m.profile_public_key)
    w.len_prefixed_bytes(m.new_username)
    w.len_prefixed_bytes(m.new_description)
    w.len_prefixed_bytes(m.new_profile_pic)
    w.uvarint(m.new_creator_basis_points)
    w.uvarint(m.new_stake_multiple_basis_points)
    w.boolean(m.is_hidden)


def _encode_submit_post(m: SubmitPostMetadata, w: BinaryWriter) -> None:
    w.len_prefixed_bytes(m.post_hash_to_modify)
    w.len_prefixed_bytes(m.parent_stake_id)
    w.len_prefixed_bytes(m.body)
    w.uvarint(m.creator_basis_points)
    w.uvarint(m.stake_multiple_basis_points)
    w.uvarint(m.timestamp_nanos)
    w.boolean(m.is_hidden)


def _encode_follow(m: FollowMetadata, w: BinaryWriter) -> None:
    w.bytes(m.followed_public_key)
    w.boolean(m.is_unfollow)


def _encode_like(m: LikeMetadata, w: BinaryWriter) -> None:
    w.bytes(m.liked_post_hash)
    w.boolean(m.is_unlike)


def _encode_new_message(m: NewMessageMetadata, w: BinaryWriter) -> None:
    w.len_prefixed_bytes(m.sender_access_group_owner_public_key)
    w.len_prefixed_bytes(m.sender_access_group_key_name)
    w.len_prefixed_bytes(m.sender_access_group_public_key)
    w.len_prefixed_bytes(m.recipient_access_group_owner_public_key)
    w.len_prefixed_bytes(m.recipient_access_group_key_name)
    w.len_prefixed_bytes(m.recipient_access_group_public_key)
    w.len_prefixed_bytes(m.encrypted_text)
    w.uvarint(m.timestamp_nanos)
    w.u8(int(m.new_message_type))
    w.u8(int(m.new_message_operation))


_ENCODERS: Dict[TransactionType, Callable] = {
    TransactionType.UPDATE_PROFILE: _encode_update_profile,
    TransactionType.SUBMIT_POST: _encode_submit_post,
    TransactionType.FOLLOW: _encode_follow,
    TransactionType.LIKE: _encode_like,
    TransactionType.NEW_MESSAGE: _encode_new_message,
}


def encode_metadata(metadata: TransactionMetadata) -> bytes:
    """
    Encode a metadata record to its wire bytes.

    Args:
        metadata: Any record of the TransactionMetadata union

    Returns:
        Encoded metadata

    Raises:
        EncodingError: If the record's tag has no encoder
    """
    encoder = _ENCODERS.get(metadata.txn_type)
    if encoder is None:
        raise EncodingError(f"No metadata encoder for transaction type {metadata.txn_type!r}")
    w = BinaryWriter()
    encoder(metadata, w)
    return w.to_bytes()


def decode_metadata(txn_type: int, data: bytes) -> TransactionMetadata:
    """Decode metadata bytes for one of the supported transaction types."""
    r = BinaryReader(data)
    if txn_type == TransactionType.UPDATE_PROFILE:
        out = UpdateProfileMetadata(
            profile_public_key=r.len_prefixed_bytes(),
            new_username=r.len_prefixed_bytes(),
            new_description=r.len_prefixed_bytes(),
            new_profile_pic=r.len_prefixed_bytes(),
            new_creator_basis_points=r.uvarint(),
            new_stake_multiple_basis_points=r.uvarint(),
            is_hidden=r.boolean(),
        )
    elif txn_type == TransactionType.SUBMIT_POST:
        out = SubmitPostMetadata(
            post_hash_to_modify=r.len_prefixed_bytes(),
            parent_stake_id=r.len_prefixed_bytes(),
            body=r.len_prefixed_bytes(),
            creator_basis_points=r.uvarint(),
            stake_multiple_basis_points=r.uvarint(),
            timestamp_nanos=r.uvarint(),
            is_hidden=r.boolean(),
        )
    elif txn_type == TransactionType.FOLLOW:
        out = FollowMetadata(followed_public_key=r.bytes(PUBLIC_KEY_LENGTH), is_unfollow=r.boolean())
    elif txn_type == TransactionType.LIKE:
        out = LikeMetadata(liked_post_hash=r.bytes(POST_HASH_LENGTH), is_unlike=r.boolean())
    elif txn_type == TransactionType.NEW_MESSAGE:
        out = NewMessageMetadata(
            sender_access_group_owner_public_key=r.len_prefixed_bytes(),
            sender_access_group_key_name=r.len_prefixed_bytes(),
            sender_access_group_public_key=r.len_prefixed_bytes(),
            recipient_access_group_owner_public_key=r.len_prefixed_bytes(),
            recipient_access_group_key_name=r.len_prefixed_bytes(),
            recipient_access_group_public_key=r.len_prefixed_bytes(),
            encrypted_text=r.len_prefixed_bytes(),
            timestamp_nanos=r.uvarint(),
            new_message_type=NewMessageType(r.u8()),
            new_message_operation=NewMessageOperation(r.u8()),
        )
    else:
        raise EncodingError(f"No metadata decoder for transaction type {txn_type}")
    if not r.eof:
        raise EncodingError(f"Trailing bytes after {TransactionType(txn_type).name} metadata")
    return out


__all__ = [
    "UpdateProfileMetadata",
    "SubmitPostMetadata",
    "FollowMetadata",
    "LikeMetadata",
    "NewMessageMetadata",
    "TransactionMetadata",
    "encode_metadata",
    "decode_metadata",
]
