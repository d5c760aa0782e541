"""Logging adapters.

Usage:
    from credential_issuer.infrastructure.logging import ConsoleAdapter
"""

from credential_issuer.infrastructure.logging.console_adapter import ConsoleAdapter

__all__ = ["ConsoleAdapter"]
