"""
DeSo Backend API Client

Thin JSON-over-HTTP client for the backend endpoints the social pipeline
uses: the per-operation construction endpoints, transaction submission,
app state (block height, fee rate) and access-group lookup.

The client never retries; a failed call raises and the caller decides.
"""

from __future__ import annotations
import json
import logging
from typing import Any, Dict, Optional, Union
from dataclasses import dataclass
from urllib.parse import urlparse

import requests

from .runtime.errors import APIError, NetworkError


WELL_KNOWN_ENDPOINTS = {
    'mainnet': 'https://node.deso.org',
    'testnet': 'https://test.deso.org',
    'local': 'http://127.0.0.1:17001',
}


@dataclass
class ClientConfig:
    """Configuration for the DeSo API client."""

    endpoint: str
    timeout: float = 30.0
    debug: bool = False
    verify_ssl: bool = True
    user_agent: str = "deso-social-python/0.1.0"
    network: str = "mainnet"


class DesoClient:
    """
    DeSo backend client.

    Posts JSON bodies to `api/v0/...` paths relative to the configured node
    and returns the decoded JSON response.
    """

    SUBMIT_TRANSACTION = "api/v0/submit-transaction"
    GET_APP_STATE = "api/v0/get-app-state"
    CHECK_PARTY_ACCESS_GROUPS = "api/v0/check-party-access-groups"

    def __init__(self, config: Union[str, ClientConfig]):
        """
        Initialize the client.

        Args:
            config: Either an endpoint URL / well-known name or a ClientConfig
        """
        if isinstance(config, str):
            config = ClientConfig(endpoint=config)
        self.config = config

        self.logger = logging.getLogger(__name__)
        if self.config.debug:
            self.logger.setLevel(logging.DEBUG)

        name = self.config.endpoint.lower()
        if name in WELL_KNOWN_ENDPOINTS:
            if name == 'testnet':
                self.config.network = 'testnet'
            self.base_url = WELL_KNOWN_ENDPOINTS[name]
        else:
            parsed = urlparse(self.config.endpoint)
            if not parsed.scheme:
                raise ValueError(f"Endpoint must include a scheme: {self.config.endpoint!r}")
            self.base_url = self.config.endpoint.rstrip('/')

        # Transport for testing - if set, will be used instead of HTTP
        self.transport = None
        self._session = requests.Session()

    def url_for(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def post(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST a JSON body to a backend endpoint.

        Args:
            endpoint: Path such as "api/v0/submit-post"
            payload: JSON-serializable request body

        Returns:
            Decoded JSON response

        Raises:
            NetworkError: On connection failures and timeouts
            APIError: On non-2xx responses or an "error" field in the body
        """
        if self.config.debug:
            self.logger.debug(f"Request: {endpoint} -> {json.dumps(payload, indent=2)}")

        if self.transport:
            response = self.transport.post(endpoint, payload)
        else:
            response = self._post_with_requests(endpoint, payload)

        if self.config.debug:
            self.logger.debug(f"Response: {endpoint} -> {json.dumps(response, indent=2)}")

        if isinstance(response, dict) and response.get("error"):
            raise APIError(str(response["error"]), details={"endpoint": endpoint})
        return response

    def _post_with_requests(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Make request using the requests library."""
        headers = {
            "Content-Type": "application/json",
            "User-Agent": self.config.user_agent,
            "Accept": "application/json",
        }
        url = self.url_for(endpoint)
        try:
            response = self._session.post(
                url,
                json=payload,
                headers=headers,
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
        except requests.exceptions.Timeout as e:
            raise NetworkError(f"Request to {endpoint} timed out", details={"url": url}, cause=e)
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Network error calling {endpoint}: {e}", details={"url": url}, cause=e)

        if not response.ok:
            raise APIError(
                _error_message(response),
                status=response.status_code,
                details={"endpoint": endpoint},
            )
        try:
            return response.json()
        except ValueError as e:
            raise APIError(f"Invalid JSON from {endpoint}", status=response.status_code, cause=e)

    # ==== Endpoints used by the pipeline ====

    def submit_transaction(self, transaction_hex: str) -> Dict[str, Any]:
        """
        Broadcast a signed transaction.

        Args:
            transaction_hex: Signed transaction bytes as hex

        Returns:
            Backend submission response (TxnHashHex, Transaction, ...)
        """
        return self.post(self.SUBMIT_TRANSACTION, {"TransactionHex": transaction_hex})

    def get_app_state(self) -> Dict[str, Any]:
        """Current node state: BlockHeight, MinSatoshisBurnedForProfileCreation, fee rates."""
        return self.post(self.GET_APP_STATE, {})

    def get_block_height(self) -> int:
        state = self.get_app_state()
        try:
            return int(state["BlockHeight"])
        except (KeyError, TypeError, ValueError) as e:
            raise APIError("App state response has no BlockHeight", cause=e)

    def check_party_access_groups(self, sender_public_key: str, sender_key_name: str,
                                  recipient_public_key: str, recipient_key_name: str) -> Dict[str, Any]:
        """
        Resolve both parties' access groups for a message.

        Returns:
            Backend response with Sender*/Recipient* access group fields
        """
        return self.post(self.CHECK_PARTY_ACCESS_GROUPS, {
            "SenderPublicKeyBase58Check": sender_public_key,
            "SenderAccessGroupKeyName": sender_key_name,
            "RecipientPublicKeyBase58Check": recipient_public_key,
            "RecipientAccessGroupKeyName": recipient_key_name,
        })

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> DesoClient:
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}: {response.reason}"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"HTTP {response.status_code}: {response.reason}"


def mainnet_client(**kwargs) -> DesoClient:
    return DesoClient(ClientConfig(endpoint='mainnet', **kwargs))


def testnet_client(**kwargs) -> DesoClient:
    kwargs.setdefault('network', 'testnet')
    return DesoClient(ClientConfig(endpoint='testnet', **kwargs))


def local_client(**kwargs) -> DesoClient:
    return DesoClient(ClientConfig(endpoint='local', **kwargs))


__all__ = [
    "ClientConfig",
    "DesoClient",
    "WELL_KNOWN_ENDPOINTS",
    "mainnet_client",
    "testnet_client",
    "local_client",
]
