"""Purposes a short numeric verification code can be issued for."""

from enum import Enum


class VerificationPurpose(str, Enum):
    """Why a verification code was issued.

    Stored verbatim in ``verification_codes.purpose``.
    """

    REGISTRATION = "REGISTRATION"
    EMAIL_CHANGE = "EMAIL_CHANGE"
