"""Domain enums.

Usage:
    from credential_issuer.domain.enums import VerificationPurpose, SecretTokenPurpose
"""

from credential_issuer.domain.enums.notification_type import NotificationType
from credential_issuer.domain.enums.secret_token_purpose import SecretTokenPurpose
from credential_issuer.domain.enums.verification_purpose import VerificationPurpose

__all__ = ["NotificationType", "SecretTokenPurpose", "VerificationPurpose"]
