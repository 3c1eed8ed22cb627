"""
Base signer interface for DeSo transactions.

Defines the signing interface the submission pipeline depends on.
"""

from __future__ import annotations
from abc import ABC, abstractmethod

from ..runtime.errors import DesoError, SigningError
from ..tx.transaction import Transaction


class Signer(ABC):
    """
    Base signer interface.

    Implementations own a key and produce DER signatures over a 32-byte
    digest. Transaction handling is shared.
    """

    @abstractmethod
    def sign(self, digest: bytes) -> bytes:
        """
        Sign a digest.

        Args:
            digest: 32-byte hash to sign

        Returns:
            DER-encoded signature bytes

        Raises:
            SigningError: If signing fails
        """
        pass

    @abstractmethod
    def get_public_key(self) -> bytes:
        """
        Get the public key bytes.

        Returns:
            33-byte compressed public key
        """
        pass

    def sign_transaction(self, transaction: Transaction) -> Transaction:
        """
        Sign an unsigned transaction.

        Args:
            transaction: Transaction to sign; any existing signature is replaced

        Returns:
            Copy of the transaction carrying the signature
        """
        return transaction.with_signature(self.sign(transaction.signing_digest()))

    def sign_transaction_hex(self, transaction_hex: str) -> str:
        """
        Decode, sign and re-encode a transaction given as hex.

        Raises:
            SigningError: If the hex does not decode or signing fails
        """
        try:
            transaction = Transaction.from_hex(transaction_hex)
        except DesoError as e:
            raise SigningError(f"Cannot decode transaction for signing: {e.message}", cause=e)
        return self.sign_transaction(transaction).to_hex()
