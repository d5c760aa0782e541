"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_REASON naming. They are the values callers
translate into user-facing messages.

Categories:
- Validation errors (INVALID_*)
- Allocation errors (PILLAR_*)
- Store contention (CONFLICT)
- Verification code errors (CODE_*, INVALID_CODE)
- Secret token errors (TOKEN_*)
- Delivery errors (NOTIFICATION_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Validation errors
    INVALID_SUB_PILLAR = "invalid_sub_pillar"

    # Allocation errors
    PILLAR_EXHAUSTED = "pillar_exhausted"

    # Store contention (transient, retried internally before surfacing)
    CONFLICT = "conflict"

    # Verification code errors
    INVALID_CODE = "invalid_code"
    CODE_EXPIRED = "code_expired"
    CODE_ALREADY_CONSUMED = "code_already_consumed"
    CODE_ATTEMPTS_EXCEEDED = "code_attempts_exceeded"

    # Secret token errors
    TOKEN_NOT_FOUND = "token_not_found"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_ALREADY_USED = "token_already_used"
    TOKEN_INVALID = "token_invalid"

    # Delivery errors
    NOTIFICATION_FAILED = "notification_failed"
