"""Runtime helpers for the DeSo social SDK"""

from .clock import Clock, SystemClock, FixedClock
from .errors import *

__all__ = [
    "Clock",
    "SystemClock",
    "FixedClock",
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
