"""Application environment types.

Used by Settings and the container to pick environment-specific adapters
(log renderer, notification backend).
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
