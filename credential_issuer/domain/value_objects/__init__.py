"""Domain value objects.

Usage:
    from credential_issuer.domain.value_objects import SubPillar, ExternalToken
"""

from credential_issuer.domain.value_objects.email_reset_payload import (
    EmailResetPayload,
)
from credential_issuer.domain.value_objects.external_token import ExternalToken
from credential_issuer.domain.value_objects.student_code import StudentCode
from credential_issuer.domain.value_objects.sub_pillar import SubPillar

__all__ = ["EmailResetPayload", "ExternalToken", "StudentCode", "SubPillar"]
