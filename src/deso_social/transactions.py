# Request models for DeSo social transactions
# Field aliases are the backend's JSON names; Python code uses snake_case.

from __future__ import annotations
from pydantic import BaseModel, Field, PrivateAttr, field_validator, model_validator
from typing import Optional, List, Dict, Any

from .enums import DEFAULT_ACCESS_GROUP_KEY_NAME


class TransactionFee(BaseModel):
    """An additional named fee paid to a public key."""
    public_key: str = Field(..., alias="PublicKeyBase58Check")
    amount_nanos: int = Field(..., alias="AmountNanos", ge=0)

    model_config = {"populate_by_name": True}


class TransactionRequest(BaseModel):
    """Fields every social transaction request may carry."""
    extra_data: Optional[Dict[str, str]] = Field(None, alias="ExtraData")
    min_fee_rate_nanos_per_kb: Optional[int] = Field(None, alias="MinFeeRateNanosPerKB", ge=0)
    transaction_fees: Optional[List[TransactionFee]] = Field(None, alias="TransactionFees")

    model_config = {"populate_by_name": True}

    def to_wire(self) -> Dict[str, Any]:
        """JSON body for the backend construction endpoint."""
        return self.model_dump(by_alias=True, exclude_none=True)


# =============================================================================
# Profiles
# =============================================================================

class UpdateProfileRequest(TransactionRequest):
    """Create or update a profile."""
    updater_public_key: str = Field(..., alias="UpdaterPublicKeyBase58Check")
    profile_public_key: str = Field("", alias="ProfilePublicKeyBase58Check")
    new_username: str = Field("", alias="NewUsername")
    new_description: str = Field("", alias="NewDescription")
    new_profile_pic: str = Field("", alias="NewProfilePic")
    new_creator_basis_points: int = Field(10000, alias="NewCreatorBasisPoints", ge=0)
    new_stake_multiple_basis_points: int = Field(12500, alias="NewStakeMultipleBasisPoints", ge=0)
    is_hidden: bool = Field(False, alias="IsHidden")

    @property
    def is_self_update(self) -> bool:
        return not self.profile_public_key or self.profile_public_key == self.updater_public_key


# =============================================================================
# Posts
# =============================================================================

class PostBody(BaseModel):
    """
    Post body object, embedded in the transaction as JSON.

    Unknown keys are kept so that clients can attach fields the backend
    understands without a model change. The caller's key order is kept too:
    the JSON bytes, and so the fee, depend on it.
    """
    body: Optional[str] = Field(None, alias="Body")
    image_urls: Optional[List[str]] = Field(None, alias="ImageURLs")
    video_urls: Optional[List[str]] = Field(None, alias="VideoURLs")

    model_config = {"populate_by_name": True, "extra": "allow"}

    _key_order: List[str] = PrivateAttr(default_factory=list)

    @model_validator(mode="wrap")
    @classmethod
    def remember_key_order(cls, data: Any, handler):
        model = handler(data)
        if isinstance(data, dict):
            aliases = {name: info.alias or name for name, info in cls.model_fields.items()}
            model._key_order = [aliases.get(key, key) for key in data]
        return model

    def compact(self) -> Dict[str, Any]:
        """Wire dict with falsy values (None, "", []) dropped, in the caller's key order."""
        dumped = self.model_dump(by_alias=True)
        order = [key for key in self._key_order if key in dumped]
        order += [key for key in dumped if key not in order]
        return {key: dumped[key] for key in order if dumped[key]}

    @property
    def has_content(self) -> bool:
        return bool(self.body or self.image_urls or self.video_urls)


class SubmitPostRequest(TransactionRequest):
    """Create, edit, repost or quote-repost a post."""
    updater_public_key: str = Field(..., alias="UpdaterPublicKeyBase58Check")
    body_obj: PostBody = Field(..., alias="BodyObj")
    post_hash_hex_to_modify: Optional[str] = Field(None, alias="PostHashHexToModify")
    parent_stake_id: Optional[str] = Field(None, alias="ParentStakeID")
    reposted_post_hash_hex: Optional[str] = Field(None, alias="RepostedPostHashHex")
    post_extra_data: Optional[Dict[str, str]] = Field(None, alias="PostExtraData")
    is_hidden: Optional[bool] = Field(None, alias="IsHidden")


# =============================================================================
# Follows, likes, diamonds
# =============================================================================

class CreateFollowTxnRequest(TransactionRequest):
    """Follow or unfollow a profile."""
    follower_public_key: str = Field(..., alias="FollowerPublicKeyBase58Check")
    followed_public_key: str = Field(..., alias="FollowedPublicKeyBase58Check")
    is_unfollow: Optional[bool] = Field(None, alias="IsUnfollow")


class CreateLikeRequest(TransactionRequest):
    """Like or unlike a post."""
    reader_public_key: str = Field(..., alias="ReaderPublicKeyBase58Check")
    liked_post_hash_hex: str = Field(..., alias="LikedPostHashHex")
    is_unlike: Optional[bool] = Field(None, alias="IsUnlike")


class SendDiamondsRequest(TransactionRequest):
    """Tip a post's author with diamonds."""
    sender_public_key: str = Field(..., alias="SenderPublicKeyBase58Check")
    receiver_public_key: str = Field(..., alias="ReceiverPublicKeyBase58Check")
    diamond_post_hash_hex: str = Field(..., alias="DiamondPostHashHex")
    diamond_level: int = Field(..., alias="DiamondLevel", ge=0)


# =============================================================================
# Messages
# =============================================================================

class SendNewMessageRequest(TransactionRequest):
    """New direct or group-chat message between two resolved access groups."""
    sender_access_group_owner_public_key: str = Field(..., alias="SenderAccessGroupOwnerPublicKeyBase58Check")
    sender_access_group_public_key: str = Field(..., alias="SenderAccessGroupPublicKeyBase58Check")
    sender_access_group_key_name: str = Field(..., alias="SenderAccessGroupKeyName")
    recipient_access_group_owner_public_key: str = Field(..., alias="RecipientAccessGroupOwnerPublicKeyBase58Check")
    recipient_access_group_public_key: str = Field(..., alias="RecipientAccessGroupPublicKeyBase58Check")
    recipient_access_group_key_name: str = Field(..., alias="RecipientAccessGroupKeyName")
    encrypted_message_text: str = Field(..., alias="EncryptedMessageText")


class UpdateMessageRequest(SendNewMessageRequest):
    """
    Edit of an existing message.

    The timestamp identifies the message being replaced, so it is supplied by
    the caller as a decimal string rather than read from the clock.
    """
    timestamp_nanos_string: str = Field(..., alias="TimestampNanosString")

    @field_validator("timestamp_nanos_string")
    @classmethod
    def check_decimal(cls, v: str) -> str:
        if not (v.isascii() and v.isdigit()):
            raise ValueError(f"TimestampNanosString must be a decimal integer, got {v!r}")
        return v

    @property
    def timestamp_nanos(self) -> int:
        return int(self.timestamp_nanos_string)


class SendMessageRequest(BaseModel):
    """Convenience request: plaintext message, access groups resolved for you."""
    sender_public_key: str = Field(..., alias="SenderPublicKeyBase58Check")
    recipient_public_key: str = Field(..., alias="RecipientPublicKeyBase58Check")
    message: str = Field(..., alias="Message")
    access_group: Optional[str] = Field(None, alias="AccessGroup")
    extra_data: Optional[Dict[str, str]] = Field(None, alias="ExtraData")
    min_fee_rate_nanos_per_kb: Optional[int] = Field(None, alias="MinFeeRateNanosPerKB", ge=0)

    model_config = {"populate_by_name": True}

    @property
    def access_group_key_name(self) -> str:
        return self.access_group or DEFAULT_ACCESS_GROUP_KEY_NAME


__all__ = [
    "TransactionFee",
    "TransactionRequest",
    "UpdateProfileRequest",
    "PostBody",
    "SubmitPostRequest",
    "CreateFollowTxnRequest",
    "CreateLikeRequest",
    "SendDiamondsRequest",
    "SendNewMessageRequest",
    "UpdateMessageRequest",
    "SendMessageRequest",
]
