"""
DeSo Social Error Model

This module provides the error handling framework for the social transaction
SDK. Every pipeline stage (validation, construction, permission check,
encryption, signing, submission) raises its own error type so callers can
tell which stage aborted the call.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Error codes for the social transaction pipeline."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2

    # Encoding errors (100-199)
    ENCODING_ERROR = 100
    INVALID_HEX = 101
    INVALID_BINARY = 102
    INVALID_PUBLIC_KEY = 103

    # Network errors (200-299)
    NETWORK_ERROR = 200
    CONNECTION_FAILED = 201
    TIMEOUT = 202
    API_ERROR = 203

    # Authorization errors (300-399)
    PERMISSION_DENIED = 300
    SPENDING_LIMIT_EXCEEDED = 301

    # Pipeline errors (400-499)
    VALIDATION_GAP = 400
    UNSUPPORTED_OPERATION = 401
    CONSTRUCTION_FAILED = 402
    SIGNING_FAILED = 403
    SUBMISSION_FAILED = 404
    ENCRYPTION_FAILED = 405


class DesoError(Exception):
    """
    Base class for all SDK errors.

    Carries a code, optional structured details and the underlying cause.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[BaseException] = None):
        """
        Initialize an SDK error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class EncodingError(DesoError):
    """Malformed hex, base58 or binary input."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.ENCODING_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[BaseException] = None):
        super().__init__(message, code, details, cause)


class NetworkError(DesoError):
    """Network-related errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message, ErrorCode.NETWORK_ERROR, details, cause)


class APIError(DesoError):
    """The backend answered with an error body or a non-2xx status."""

    def __init__(self, message: str, status: Optional[int] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[BaseException] = None):
        super().__init__(message, ErrorCode.API_ERROR, details, cause)
        self.status = status


class ValidationError(DesoError):
    """A required field is missing or unusable; raised before any network call."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message, ErrorCode.VALIDATION_GAP, details, cause)


class UnsupportedOperationError(DesoError):
    """The requested construction path does not exist for this transaction kind."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.UNSUPPORTED_OPERATION, details)


class PermissionDeniedError(DesoError):
    """The permission guard refused the transaction."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.PERMISSION_DENIED,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[BaseException] = None):
        super().__init__(message, code, details, cause)


class EncryptionError(DesoError):
    """Message encryption produced no ciphertext."""

    def __init__(self, message: str = "Failed to encrypt message",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[BaseException] = None):
        super().__init__(message, ErrorCode.ENCRYPTION_FAILED, details, cause)


class ConstructionError(DesoError):
    """Building the unsigned transaction failed (locally or on the backend)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message, ErrorCode.CONSTRUCTION_FAILED, details, cause)


class SigningError(DesoError):
    """Signing the constructed transaction failed."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message, ErrorCode.SIGNING_FAILED, details, cause)


class SubmissionError(DesoError):
    """Broadcasting the signed transaction failed."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message, ErrorCode.SUBMISSION_FAILED, details, cause)


__all__ = [
    "ErrorCode",
    "DesoError",
    "EncodingError",
    "NetworkError",
    "APIError",
    "ValidationError",
    "UnsupportedOperationError",
    "PermissionDeniedError",
    "EncryptionError",
    "ConstructionError",
    "SigningError",
    "SubmissionError",
]
