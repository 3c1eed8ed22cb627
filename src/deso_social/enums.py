# Enumerations for DeSo social transactions
# Numeric values are the ledger's on-wire transaction type ids.

from enum import Enum, IntEnum


class TransactionType(IntEnum):
    """DeSo transaction types used by this SDK."""
    BASIC_TRANSFER = 2
    SUBMIT_POST = 5
    UPDATE_PROFILE = 6
    FOLLOW = 9
    LIKE = 10
    NEW_MESSAGE = 33

    @property
    def wire_name(self) -> str:
        """Name used by the backend, e.g. in spending-limit maps."""
        return _WIRE_NAMES[self]


_WIRE_NAMES = {
    TransactionType.BASIC_TRANSFER: "BASIC_TRANSFER",
    TransactionType.SUBMIT_POST: "SUBMIT_POST",
    TransactionType.UPDATE_PROFILE: "UPDATE_PROFILE",
    TransactionType.FOLLOW: "FOLLOW",
    TransactionType.LIKE: "LIKE",
    TransactionType.NEW_MESSAGE: "NEW_MESSAGE",
}


class NewMessageOperation(IntEnum):
    NEW = 0
    UPDATE = 1


class NewMessageType(IntEnum):
    DIRECT = 0
    GROUP = 1


class SocialOperation(str, Enum):
    """Public operations and the backend endpoint each one posts to."""
    UPDATE_PROFILE = "api/v0/update-profile"
    SUBMIT_POST = "api/v0/submit-post"
    UPDATE_FOLLOWING_STATUS = "api/v0/create-follow-txn-stateless"
    SEND_DIAMONDS = "api/v0/send-diamonds"
    UPDATE_LIKE_STATUS = "api/v0/create-like-stateless"
    SEND_DM_MESSAGE = "api/v0/send-dm-message"
    UPDATE_DM_MESSAGE = "api/v0/update-dm-message"
    SEND_GROUP_CHAT_MESSAGE = "api/v0/send-group-chat-message"
    UPDATE_GROUP_CHAT_MESSAGE = "api/v0/update-group-chat-message"

    @property
    def endpoint(self) -> str:
        return self.value


DEFAULT_ACCESS_GROUP_KEY_NAME = "default-key"

__all__ = [
    "TransactionType",
    "NewMessageOperation",
    "NewMessageType",
    "SocialOperation",
    "DEFAULT_ACCESS_GROUP_KEY_NAME",
]
