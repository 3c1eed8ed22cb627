"""
DeSo Social Python SDK

Builds, prices, signs and submits DeSo social transactions: profile updates,
posts, follows, likes, diamonds, and direct or group-chat messages.
"""

# Core types
from .enums import *
from .transactions import *

# Client and runtime
from .api_client import DesoClient, ClientConfig, mainnet_client, testnet_client, local_client
from .runtime.errors import *
from .runtime.clock import Clock, SystemClock, FixedClock

# Signing and transaction infrastructure
from .crypto import *
from .signers import *
from .tx import *

# Collaborators and public operations
from .permissions import PermissionGuard, AllowAllGuard, SpendingLimits, SpendingLimitGuard
from .messaging import (
    AccessGroupIdentity, PartyAccessGroups, AccessGroupDirectory, ApiAccessGroupDirectory,
    MessageEncryptor, MessageRoutingResolver, hex_encode_plain_text,
)
from .social import SocialTransactions

__version__ = "0.1.0"
__all__ = [
    # Client
    "DesoClient",
    "ClientConfig",
    "mainnet_client",
    "testnet_client",
    "local_client",

    # Runtime
    "Clock",
    "SystemClock",
    "FixedClock",
    "DesoError",
    "ErrorCode",
    "ValidationError",
    "UnsupportedOperationError",
    "PermissionDeniedError",
    "EncryptionError",
    "ConstructionError",
    "SigningError",
    "SubmissionError",

    # Signing
    "Signer",
    "Secp256k1Signer",
    "Secp256k1PrivateKey",

    # Transactions
    "TransactionType",
    "SocialOperation",
    "Transaction",
    "TxRequestOptions",
    "SubmissionResult",

    # Collaborators
    "PermissionGuard",
    "AllowAllGuard",
    "SpendingLimits",
    "SpendingLimitGuard",
    "AccessGroupIdentity",
    "PartyAccessGroups",
    "AccessGroupDirectory",
    "ApiAccessGroupDirectory",
    "MessageEncryptor",
    "MessageRoutingResolver",
    "hex_encode_plain_text",

    # Operations
    "SocialTransactions",
]
