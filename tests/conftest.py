"""
Test bootstrap:
- Make src/ and the tests helpers importable at collection time
- Provide shared fixtures for clients, signers and collaborators
"""
import sys
import pathlib
import pytest

TESTS = pathlib.Path(__file__).parent.resolve()
SRC = TESTS.parent / "src"

for path in (SRC, TESTS):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from helpers import (  # noqa: E402
    BLOCK_HEIGHT,
    FIXED_NANOS,
    FakeEncryptor,
    MockTransport,
    RecordingGuard,
    StaticDirectory,
    mk_mock_client,
    mk_public_key,
    mk_signer,
)


@pytest.fixture
def transport():
    """MockTransport preloaded with app state and submission answers."""
    return MockTransport({
        "api/v0/get-app-state": {"BlockHeight": BLOCK_HEIGHT},
        "api/v0/submit-transaction": {"TxnHashHex": "feed" * 16},
    })


@pytest.fixture
def client(transport):
    return mk_mock_client(transport)


@pytest.fixture
def signer():
    return mk_signer(1)


@pytest.fixture
def guard():
    return RecordingGuard()


@pytest.fixture
def directory():
    return StaticDirectory(sender_group_key=mk_public_key(101), recipient_group_key=mk_public_key(102))


@pytest.fixture
def encryptor():
    return FakeEncryptor()


@pytest.fixture
def clock():
    from deso_social.runtime.clock import FixedClock
    return FixedClock(FIXED_NANOS)


@pytest.fixture
def social(client, signer, guard, directory, encryptor, clock):
    """SocialTransactions with every collaborator faked."""
    from deso_social.social import SocialTransactions
    from deso_social.tx.construct import BalanceModelConstructor

    constructor = BalanceModelConstructor(block_height_source=client.get_block_height,
                                          partial_id_source=lambda: 42)
    return SocialTransactions(client, signer=signer, guard=guard, directory=directory,
                              encryptor=encryptor, clock=clock, constructor=constructor)
