from .mocks import MockTransport, RecordingGuard, StaticDirectory, FakeEncryptor, mk_mock_client
from .factories import (
    BLOCK_HEIGHT,
    FIXED_NANOS,
    POST_HASH_HEX,
    mk_private_key,
    mk_public_key,
    mk_compressed_key,
    mk_signer,
    mk_follow_request,
    mk_like_request,
    mk_post_request,
    mk_message_request,
    mk_update_message_request,
)
from .parity import assert_hex_equal

__all__ = [
    "MockTransport",
    "RecordingGuard",
    "StaticDirectory",
    "FakeEncryptor",
    "mk_mock_client",
    "BLOCK_HEIGHT",
    "FIXED_NANOS",
    "POST_HASH_HEX",
    "mk_private_key",
    "mk_public_key",
    "mk_compressed_key",
    "mk_signer",
    "mk_follow_request",
    "mk_like_request",
    "mk_post_request",
    "mk_message_request",
    "mk_update_message_request",
    "assert_hex_equal",
]
