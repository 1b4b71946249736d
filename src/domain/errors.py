"""
Error codes

Every failure a use case can report is one of these codes, chosen where the
failure happens. The API layer maps codes to HTTP status; nothing downstream
inspects messages to classify an error.
"""

from enum import Enum


class ErrorCode(str, Enum):
    # Client-correctable input problems (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    WEAK_PASSWORD = "WEAK_PASSWORD"
    DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

    # Reset tokens: wrong, expired, consumed and unknown account look the same (400)
    INVALID_OR_EXPIRED_TOKEN = "INVALID_OR_EXPIRED_TOKEN"

    # Missing or rejected session token (401)
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"

    # Session token diagnostics, logged server-side only
    TOKEN_MALFORMED = "TOKEN_MALFORMED"
    TOKEN_SIGNATURE_INVALID = "TOKEN_SIGNATURE_INVALID"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"

    NOT_FOUND = "NOT_FOUND"

    # Infrastructure
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"
    DISPATCH_ERROR = "DISPATCH_ERROR"
