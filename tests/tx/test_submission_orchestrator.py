"""
Test the construct, sign and submit pipeline.

Uses a MockTransport-backed client; remote construction answers with a real
unsigned transaction so that signing can decode it.
"""

import pytest

from deso_social.enums import SocialOperation
from deso_social.runtime.errors import (
    APIError,
    ConstructionError,
    NetworkError,
    SigningError,
    SubmissionError,
    UnsupportedOperationError,
)
from deso_social.tx.construct import ConstructedTransaction
from deso_social.tx.execute import SubmissionOrchestrator, TxRequestOptions
from deso_social.tx.transaction import Transaction

from helpers import MockTransport, mk_compressed_key, mk_follow_request, mk_mock_client, mk_signer

ENDPOINT = SocialOperation.UPDATE_FOLLOWING_STATUS.endpoint
TXN_HASH = "ab" * 32


def _unsigned_tx() -> Transaction:
    return Transaction(txn_type=9, metadata=mk_compressed_key(2) + b"\x00", public_key=mk_compressed_key(1),
                       fee_nanos=168)


@pytest.fixture
def transport():
    return MockTransport({
        ENDPOINT: {"TransactionHex": _unsigned_tx().to_hex(), "FeeNanos": 168},
        "api/v0/submit-transaction": {"TxnHashHex": TXN_HASH},
    })


@pytest.fixture
def orchestrator(transport):
    return SubmissionOrchestrator(mk_mock_client(transport), mk_signer(1))


def test_remote_construction_happy_path(orchestrator, transport):
    request = mk_follow_request()
    result = orchestrator.sign_and_submit(ENDPOINT, request)

    assert transport.endpoints() == [ENDPOINT, "api/v0/submit-transaction"]
    assert transport.payloads_for(ENDPOINT) == [request.to_wire()]
    assert result.is_submitted
    assert result.fee_nanos == 168
    assert result.txn_hash_hex == TXN_HASH

    submitted = Transaction.from_hex(transport.payloads_for("api/v0/submit-transaction")[0]["TransactionHex"])
    assert mk_signer(1).verify(submitted.signature, _unsigned_tx().signing_digest())


def test_request_goes_out_with_wire_names(orchestrator, transport):
    orchestrator.sign_and_submit(ENDPOINT, mk_follow_request(is_unfollow=True))
    payload = transport.payloads_for(ENDPOINT)[0]
    assert set(payload) == {"FollowerPublicKeyBase58Check", "FollowedPublicKeyBase58Check", "IsUnfollow"}
    assert payload["IsUnfollow"] is True


def test_broadcast_false_only_constructs(orchestrator, transport):
    result = orchestrator.sign_and_submit(ENDPOINT, mk_follow_request(), TxRequestOptions(broadcast=False))
    assert transport.endpoints() == [ENDPOINT]
    assert not result.is_submitted
    assert result.submitted is None
    assert result.txn_hash_hex is None
    assert result.fee_nanos == 168


def test_local_construction_flag_uses_operation_function(orchestrator, transport):
    calls = []

    def construct(request):
        calls.append(request)
        tx = _unsigned_tx()
        return ConstructedTransaction(transaction_hex=tx.to_hex(), fee_nanos=tx.fee_nanos, transaction=tx)

    request = mk_follow_request()
    result = orchestrator.sign_and_submit(ENDPOINT, request, TxRequestOptions(local_construction=True),
                                          construction_function=construct)
    assert calls == [request]
    assert transport.endpoints() == ["api/v0/submit-transaction"]
    assert result.fee_nanos == 168


def test_operation_function_ignored_without_flag(orchestrator, transport):
    def construct(request):
        raise AssertionError("local construction should not run")

    orchestrator.sign_and_submit(ENDPOINT, mk_follow_request(), construction_function=construct)
    assert transport.endpoints()[0] == ENDPOINT


def test_options_construction_function_overrides(orchestrator, transport):
    tx = _unsigned_tx()
    custom = ConstructedTransaction(transaction_hex=tx.to_hex(), fee_nanos=99)
    result = orchestrator.sign_and_submit(
        ENDPOINT, mk_follow_request(), TxRequestOptions(construction_function=lambda r: custom))
    assert result.fee_nanos == 99
    assert transport.endpoints() == ["api/v0/submit-transaction"]


def test_unsupported_local_construction_passes_through(orchestrator, transport):
    def construct(request):
        raise UnsupportedOperationError("nope")

    with pytest.raises(UnsupportedOperationError):
        orchestrator.sign_and_submit(ENDPOINT, mk_follow_request(), TxRequestOptions(local_construction=True),
                                     construction_function=construct)
    assert transport.calls == []


def test_remote_construction_failure(transport, orchestrator):
    transport.set_response(ENDPOINT, {"error": "Problem creating follow transaction"})
    with pytest.raises(ConstructionError) as exc_info:
        orchestrator.sign_and_submit(ENDPOINT, mk_follow_request())
    assert isinstance(exc_info.value.cause, APIError)
    assert transport.endpoints() == [ENDPOINT]


def test_missing_transaction_hex_is_construction_error(transport, orchestrator):
    transport.set_response(ENDPOINT, {"FeeNanos": 1})
    with pytest.raises(ConstructionError):
        orchestrator.sign_and_submit(ENDPOINT, mk_follow_request())


def test_signing_failures(transport):
    no_signer = SubmissionOrchestrator(mk_mock_client(transport))
    with pytest.raises(SigningError):
        no_signer.sign_and_submit(ENDPOINT, mk_follow_request())

    transport.set_response(ENDPOINT, {"TransactionHex": "00ff", "FeeNanos": 1})
    with pytest.raises(SigningError):
        SubmissionOrchestrator(mk_mock_client(transport), mk_signer(1)).sign_and_submit(
            ENDPOINT, mk_follow_request())
    assert "api/v0/submit-transaction" not in transport.endpoints()


def test_submission_failure(transport, orchestrator):
    transport.set_response("api/v0/submit-transaction", NetworkError("connection reset"))
    with pytest.raises(SubmissionError) as exc_info:
        orchestrator.sign_and_submit(ENDPOINT, mk_follow_request())
    assert isinstance(exc_info.value.cause, NetworkError)
    assert exc_info.value.details["endpoint"] == ENDPOINT
