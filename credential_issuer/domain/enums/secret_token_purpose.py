"""Purposes a one-time secret token can be issued for."""

from enum import Enum


class SecretTokenPurpose(str, Enum):
    """Why a secret token was issued.

    Stored verbatim in ``secret_tokens.purpose``. A holder has at most one
    unused token per purpose; issuing supersedes the previous one.
    """

    PASSWORD_RESET = "PASSWORD_RESET"
    EMAIL_RESET = "EMAIL_RESET"

