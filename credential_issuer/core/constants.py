"""Centralized constants for internal implementation details.

These are fixed properties of the credential formats, NOT environment
configuration. Anything an operator may want to tune belongs in
``credential_issuer.core.config``.

Example:
    >>> from credential_issuer.core.constants import SUB_PILLAR_WIDTH
    >>> 560000 + SUB_PILLAR_WIDTH - 1
    569999
"""

# =============================================================================
# Student Code Sub-Pillars
# =============================================================================

MAIN_PILLAR_SIZE: int = 100_000
"""Distance between main pillars (main digit 1-9)."""

SUB_PILLAR_WIDTH: int = 10_000
"""Number of slots in one sub-pillar."""

MAIN_PILLAR_DIGITS: range = range(1, 10)
"""Valid leading digits of a student code."""

SUB_PILLAR_DIGITS: range = range(1, 10)
"""Valid second digits of a student code."""

STUDENT_CODE_WIDTH: int = 6
"""Fixed width of a formatted student code."""


# =============================================================================
# Secret Tokens
# =============================================================================

TOKEN_BYTES: int = 32
"""Number of random bytes in a token secret (32 bytes = 256 bits)."""

EXTERNAL_TOKEN_SEPARATOR: str = "."
"""Separator between lookup id and secret in an external token."""

TOKEN_LOG_PREFIX_LENGTH: int = 8
"""Characters of a token kept when it appears in logs."""


# =============================================================================
# Notifications
# =============================================================================

SERVICE_TOKEN_HEADER: str = "X-Service-Token"
"""Header carrying the shared secret on calls to the notification service."""

NOTIFICATION_CHANNEL_EMAIL: str = "EMAIL"
"""Delivery channel requested from the notification service."""


# =============================================================================
# Store Conflicts
# =============================================================================

STORE_CONFLICT_BACKOFF_SECONDS: float = 0.01
"""Base delay before retrying a conflicting transaction (grows linearly)."""
