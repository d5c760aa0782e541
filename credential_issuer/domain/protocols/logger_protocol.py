"""LoggerProtocol definition for structured logging.

Backend-agnostic structured logging. Implementations MUST keep logs
structured (message + key-value context) and safe: never log raw token
secrets, full verification codes or password hashes.

Usage:
    from credential_issuer.core.container import get_logger

    logger = get_logger()
    logger.info("Verification code issued", user_id=str(user_id))

    scoped = logger.bind(component="secret_token_manager")
    scoped.warning("Token rejected", reason="token_expired")
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Human-readable message (avoid f-strings; use context).
            error: Optional exception; implementations add error_type and
                error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message.

        Reserved for conditions needing operator action, such as every
        allowed sub-pillar being exhausted.
        """
        ...

    def bind(self, **context: Any) -> "LoggerProtocol":
        """Return new logger with permanently bound context.

        The original logger is unchanged.
        """
        ...

    def with_context(self, **context: Any) -> "LoggerProtocol":
        """Alias for bind()."""
        ...
