"""
Message routing for the send-message convenience operation.

Resolves sender and recipient access groups, encrypts (or hex-encodes) the
plaintext, and decides between the direct-message and group-chat paths.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging
from typing import Any, Dict, Optional, Tuple

from .enums import DEFAULT_ACCESS_GROUP_KEY_NAME, SocialOperation
from .runtime.errors import DesoError, EncryptionError, ValidationError
from .transactions import SendMessageRequest, SendNewMessageRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessGroupIdentity:
    """One party's resolved access group."""
    owner_public_key: str
    access_group_public_key: str
    access_group_key_name: str


@dataclass(frozen=True)
class PartyAccessGroups:
    sender: AccessGroupIdentity
    recipient: AccessGroupIdentity


class AccessGroupDirectory(ABC):
    """Looks up the access groups two parties would message through."""

    @abstractmethod
    def check_party_access_groups(self, sender_public_key: str, sender_key_name: str,
                                  recipient_public_key: str, recipient_key_name: str) -> PartyAccessGroups:
        """
        Resolve both parties' access groups.

        A party without the requested group comes back with an empty key name.
        """
        pass


class ApiAccessGroupDirectory(AccessGroupDirectory):
    """Directory backed by the node's check-party-access-groups endpoint."""

    def __init__(self, client):
        self.client = client

    def check_party_access_groups(self, sender_public_key: str, sender_key_name: str,
                                  recipient_public_key: str, recipient_key_name: str) -> PartyAccessGroups:
        response = self.client.check_party_access_groups(
            sender_public_key, sender_key_name, recipient_public_key, recipient_key_name)
        return parse_party_access_groups(response, sender_public_key, recipient_public_key)


def parse_party_access_groups(response: Dict[str, Any], sender_public_key: str,
                              recipient_public_key: str) -> PartyAccessGroups:
    """Map a check-party-access-groups response onto PartyAccessGroups."""
    return PartyAccessGroups(
        sender=AccessGroupIdentity(
            owner_public_key=response.get("SenderPublicKeyBase58Check") or sender_public_key,
            access_group_public_key=response.get("SenderAccessGroupPublicKeyBase58Check") or "",
            access_group_key_name=response.get("SenderAccessGroupKeyName") or "",
        ),
        recipient=AccessGroupIdentity(
            owner_public_key=response.get("RecipientPublicKeyBase58Check") or recipient_public_key,
            access_group_public_key=response.get("RecipientAccessGroupPublicKeyBase58Check") or "",
            access_group_key_name=response.get("RecipientAccessGroupKeyName") or "",
        ),
    )


class MessageEncryptor(ABC):
    """Encrypts message text for a recipient access group."""

    @abstractmethod
    def encrypt(self, recipient_access_group_public_key: str, plaintext: str) -> str:
        """
        Encrypt plaintext for the holder of the group key.

        Returns:
            Ciphertext as hex; an empty string signals failure
        """
        pass


def hex_encode_plain_text(plaintext: str) -> str:
    """UTF-8 bytes of the message as lowercase hex."""
    return plaintext.encode("utf-8").hex()


class MessageRoutingResolver:
    """
    Turns a plaintext SendMessageRequest into a routed message request.

    Args:
        directory: Access-group directory
        encryptor: Message encryptor; only needed for encrypted sends
    """

    def __init__(self, directory: AccessGroupDirectory, encryptor: Optional[MessageEncryptor] = None):
        self.directory = directory
        self.encryptor = encryptor

    def resolve(self, request: SendMessageRequest,
                send_unencrypted: bool = False) -> Tuple[SocialOperation, SendNewMessageRequest]:
        """
        Resolve identities, encrypt and route.

        The group-chat path is chosen exactly when the requested access group
        name is not the default messaging group name.

        Returns:
            (operation, request) where operation is SEND_DM_MESSAGE or
            SEND_GROUP_CHAT_MESSAGE

        Raises:
            ValidationError: If the sender has no default messaging group
            EncryptionError: If encryption yields nothing
        """
        access_group = request.access_group_key_name
        parties = self.directory.check_party_access_groups(
            request.sender_public_key,
            DEFAULT_ACCESS_GROUP_KEY_NAME,
            request.recipient_public_key,
            access_group,
        )
        if not parties.sender.access_group_key_name:
            raise ValidationError("Sender does not have default messaging group",
                                  details={"sender": request.sender_public_key})

        if send_unencrypted:
            encrypted_text = hex_encode_plain_text(request.message)
        else:
            encrypted_text = self._encrypt(parties.recipient.access_group_public_key, request.message)

        routed = SendNewMessageRequest(
            sender_access_group_owner_public_key=request.sender_public_key,
            sender_access_group_public_key=parties.sender.access_group_public_key,
            sender_access_group_key_name=parties.sender.access_group_key_name,
            recipient_access_group_owner_public_key=request.recipient_public_key,
            recipient_access_group_public_key=parties.recipient.access_group_public_key,
            recipient_access_group_key_name=parties.recipient.access_group_key_name,
            encrypted_message_text=encrypted_text,
            extra_data=request.extra_data,
            min_fee_rate_nanos_per_kb=request.min_fee_rate_nanos_per_kb,
        )
        if access_group == DEFAULT_ACCESS_GROUP_KEY_NAME:
            operation = SocialOperation.SEND_DM_MESSAGE
        else:
            operation = SocialOperation.SEND_GROUP_CHAT_MESSAGE
        logger.debug(f"Routing message to {operation.name} via access group {access_group!r}")
        return operation, routed

    def _encrypt(self, recipient_group_public_key: str, plaintext: str) -> str:
        if self.encryptor is None:
            raise EncryptionError("No message encryptor configured")
        try:
            ciphertext = self.encryptor.encrypt(recipient_group_public_key, plaintext)
        except DesoError as e:
            raise EncryptionError(f"Failed to encrypt message: {e.message}", cause=e)
        if not ciphertext:
            raise EncryptionError()
        return ciphertext


__all__ = [
    "AccessGroupIdentity",
    "PartyAccessGroups",
    "AccessGroupDirectory",
    "ApiAccessGroupDirectory",
    "parse_party_access_groups",
    "MessageEncryptor",
    "hex_encode_plain_text",
    "MessageRoutingResolver",
]
