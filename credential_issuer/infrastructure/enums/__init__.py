"""Infrastructure enums package.

Usage:
    from credential_issuer.infrastructure.enums import InfrastructureErrorCode
"""

from credential_issuer.infrastructure.enums.infrastructure_error_code import (
    InfrastructureErrorCode,
)

__all__ = ["InfrastructureErrorCode"]
