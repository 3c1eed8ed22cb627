"""
Test access-group resolution, encryption and direct/group routing.
"""

import pytest

from deso_social.enums import SocialOperation
from deso_social.messaging import (
    ApiAccessGroupDirectory,
    MessageRoutingResolver,
    hex_encode_plain_text,
    parse_party_access_groups,
)
from deso_social.runtime.errors import EncryptionError, ValidationError
from deso_social.transactions import SendMessageRequest

from helpers import FakeEncryptor, MockTransport, StaticDirectory, mk_mock_client, mk_public_key


def _request(**kwargs) -> SendMessageRequest:
    return SendMessageRequest(
        sender_public_key=mk_public_key(1),
        recipient_public_key=mk_public_key(2),
        message=kwargs.pop("message", "gm fren"),
        **kwargs,
    )


@pytest.fixture
def directory():
    return StaticDirectory(sender_group_key=mk_public_key(101), recipient_group_key=mk_public_key(102))


def test_default_access_group_routes_to_direct_message(directory):
    encryptor = FakeEncryptor("c1f3e7")
    operation, routed = MessageRoutingResolver(directory, encryptor).resolve(_request())

    assert operation == SocialOperation.SEND_DM_MESSAGE
    assert directory.calls == [(mk_public_key(1), "default-key", mk_public_key(2), "default-key")]
    assert encryptor.calls == [(mk_public_key(102), "gm fren")]
    assert routed.encrypted_message_text == "c1f3e7"
    assert routed.sender_access_group_owner_public_key == mk_public_key(1)
    assert routed.sender_access_group_public_key == mk_public_key(101)
    assert routed.sender_access_group_key_name == "default-key"
    assert routed.recipient_access_group_owner_public_key == mk_public_key(2)
    assert routed.recipient_access_group_public_key == mk_public_key(102)
    assert routed.recipient_access_group_key_name == "default-key"


@pytest.mark.parametrize("group", ["friends", "Default-Key", "default-key "])
def test_other_access_group_routes_to_group_chat(directory, group):
    """Only the literal default group name means a direct message."""
    operation, routed = MessageRoutingResolver(directory, FakeEncryptor()).resolve(_request(access_group=group))
    assert operation == SocialOperation.SEND_GROUP_CHAT_MESSAGE
    assert directory.calls[0][1] == "default-key"
    assert directory.calls[0][3] == group
    assert routed.recipient_access_group_key_name == group


def test_explicit_default_group_is_direct(directory):
    operation, _ = MessageRoutingResolver(directory, FakeEncryptor()).resolve(_request(access_group="default-key"))
    assert operation == SocialOperation.SEND_DM_MESSAGE


def test_unencrypted_send_hex_encodes(directory):
    encryptor = FakeEncryptor()
    _, routed = MessageRoutingResolver(directory, encryptor).resolve(_request(message="héllo"), send_unencrypted=True)
    assert routed.encrypted_message_text == "héllo".encode("utf-8").hex() == "68c3a96c6c6f"
    assert encryptor.calls == []


def test_hex_encode_plain_text():
    assert hex_encode_plain_text("gm") == "676d"
    assert hex_encode_plain_text("") == ""


def test_empty_ciphertext_fails(directory):
    with pytest.raises(EncryptionError, match="Failed to encrypt message"):
        MessageRoutingResolver(directory, FakeEncryptor("")).resolve(_request())


def test_missing_encryptor_fails(directory):
    with pytest.raises(EncryptionError):
        MessageRoutingResolver(directory).resolve(_request())


def test_sender_without_default_group_fails():
    directory = StaticDirectory(mk_public_key(101), mk_public_key(102), sender_has_default=False)
    encryptor = FakeEncryptor()
    with pytest.raises(ValidationError, match="Sender does not have default messaging group"):
        MessageRoutingResolver(directory, encryptor).resolve(_request())
    assert encryptor.calls == []


def test_api_directory_posts_lookup():
    transport = MockTransport({"api/v0/check-party-access-groups": {
        "SenderPublicKeyBase58Check": mk_public_key(1),
        "SenderAccessGroupPublicKeyBase58Check": mk_public_key(101),
        "SenderAccessGroupKeyName": "default-key",
        "RecipientPublicKeyBase58Check": mk_public_key(2),
        "RecipientAccessGroupPublicKeyBase58Check": mk_public_key(102),
        "RecipientAccessGroupKeyName": "friends",
    }})
    directory = ApiAccessGroupDirectory(mk_mock_client(transport))
    parties = directory.check_party_access_groups(mk_public_key(1), "default-key", mk_public_key(2), "friends")

    assert transport.payloads_for("api/v0/check-party-access-groups") == [{
        "SenderPublicKeyBase58Check": mk_public_key(1),
        "SenderAccessGroupKeyName": "default-key",
        "RecipientPublicKeyBase58Check": mk_public_key(2),
        "RecipientAccessGroupKeyName": "friends",
    }]
    assert parties.sender.access_group_public_key == mk_public_key(101)
    assert parties.recipient.access_group_key_name == "friends"


def test_parse_missing_fields_as_empty():
    parties = parse_party_access_groups({}, "A", "B")
    assert parties.sender.owner_public_key == "A"
    assert parties.sender.access_group_key_name == ""
    assert parties.recipient.owner_public_key == "B"
    assert parties.recipient.access_group_public_key == ""
