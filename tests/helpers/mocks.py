"""
Mock collaborators for testing.

MockTransport stands in for HTTP on DesoClient; the fakes stand in for the
permission guard, access-group directory and message encryptor.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from deso_social.api_client import ClientConfig, DesoClient
from deso_social.enums import DEFAULT_ACCESS_GROUP_KEY_NAME
from deso_social.messaging import (
    AccessGroupDirectory,
    AccessGroupIdentity,
    MessageEncryptor,
    PartyAccessGroups,
)
from deso_social.permissions import PermissionGuard
from deso_social.runtime.errors import PermissionDeniedError

Response = Union[Dict[str, Any], Exception, Callable[[Dict[str, Any]], Dict[str, Any]]]


class MockTransport:
    """
    Transport that answers from a per-endpoint response table.

    A response may be a dict, an exception to raise, or a callable taking the
    request payload. Every call is recorded in `calls`.
    """

    def __init__(self, responses: Optional[Dict[str, Response]] = None):
        self.responses: Dict[str, Response] = dict(responses or {})
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    def set_response(self, endpoint: str, response: Response) -> None:
        self.responses[endpoint] = response

    def post(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append((endpoint, payload))
        if endpoint not in self.responses:
            return {"error": f"no mock response for {endpoint}"}
        response = self.responses[endpoint]
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(payload)
        return response

    def endpoints(self) -> List[str]:
        return [endpoint for endpoint, _ in self.calls]

    def payloads_for(self, endpoint: str) -> List[Dict[str, Any]]:
        return [payload for called, payload in self.calls if called == endpoint]


def mk_mock_client(transport: Optional[MockTransport] = None) -> DesoClient:
    """DesoClient wired to a MockTransport instead of HTTP."""
    client = DesoClient(ClientConfig(endpoint="http://mock.local"))
    client.transport = transport or MockTransport()
    return client


class RecordingGuard(PermissionGuard):
    """Records every check and release; raises PermissionDeniedError when `deny` is set."""

    def __init__(self, deny: bool = False):
        self.deny = deny
        self.calls: List[Dict[str, Any]] = []
        self.released: List[Dict[str, Any]] = []

    def check(self, txn_type, *, limit_override=None, total_spend_nanos=None) -> None:
        self.calls.append({
            "txn_type": txn_type,
            "limit_override": limit_override,
            "total_spend_nanos": total_spend_nanos,
        })
        if self.deny:
            raise PermissionDeniedError(f"denied {txn_type.wire_name}")

    def release(self, txn_type, *, total_spend_nanos=None) -> None:
        self.released.append({"txn_type": txn_type, "total_spend_nanos": total_spend_nanos})


class StaticDirectory(AccessGroupDirectory):
    """
    Directory with fixed group keys.

    `sender_has_default` False simulates a sender with no default messaging
    group (empty key name in the answer).
    """

    def __init__(self, sender_group_key: str, recipient_group_key: str, sender_has_default: bool = True):
        self.sender_group_key = sender_group_key
        self.recipient_group_key = recipient_group_key
        self.sender_has_default = sender_has_default
        self.calls: List[Tuple[str, str, str, str]] = []

    def check_party_access_groups(self, sender_public_key, sender_key_name,
                                  recipient_public_key, recipient_key_name) -> PartyAccessGroups:
        self.calls.append((sender_public_key, sender_key_name, recipient_public_key, recipient_key_name))
        return PartyAccessGroups(
            sender=AccessGroupIdentity(
                owner_public_key=sender_public_key,
                access_group_public_key=self.sender_group_key if self.sender_has_default else "",
                access_group_key_name=DEFAULT_ACCESS_GROUP_KEY_NAME if self.sender_has_default else "",
            ),
            recipient=AccessGroupIdentity(
                owner_public_key=recipient_public_key,
                access_group_public_key=self.recipient_group_key,
                access_group_key_name=recipient_key_name,
            ),
        )


class FakeEncryptor(MessageEncryptor):
    """Returns a fixed ciphertext (possibly empty) and records its inputs."""

    def __init__(self, ciphertext: str = "c1f3e7"):
        self.ciphertext = ciphertext
        self.calls: List[Tuple[str, str]] = []

    def encrypt(self, recipient_access_group_public_key: str, plaintext: str) -> str:
        self.calls.append((recipient_access_group_public_key, plaintext))
        return self.ciphertext
