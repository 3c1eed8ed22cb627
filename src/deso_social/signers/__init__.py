"""
Transaction signers.
"""

from .signer import Signer
from .secp256k1 import Secp256k1Signer

__all__ = ["Signer", "Secp256k1Signer"]
