"""Core enums package.

Usage:
    from credential_issuer.core.enums import ErrorCode, Environment
"""

from credential_issuer.core.enums.environment import Environment
from credential_issuer.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
