"""Container module - Centralized dependency injection.

The container is organized into modules:
- infrastructure: Logging, database, credential store, hashing, notifications
- services: Credential services (allocator, verification codes, secret tokens)

Usage:
    from credential_issuer.core.container import get_secret_token_manager

    manager = get_secret_token_manager()
    result = await manager.issue_password_reset(user_id)
"""

from credential_issuer.core.container.infrastructure import (
    get_credential_generator,
    get_credential_store,
    get_database,
    get_logger,
    get_notification_dispatcher,
    get_secret_hasher,
)
from credential_issuer.core.container.services import (
    get_code_allocator,
    get_secret_token_manager,
    get_student_code_generator,
    get_verification_code_manager,
)

__all__ = [
    # Infrastructure
    "get_logger",
    "get_database",
    "get_credential_store",
    "get_secret_hasher",
    "get_credential_generator",
    "get_notification_dispatcher",
    # Services
    "get_code_allocator",
    "get_student_code_generator",
    "get_verification_code_manager",
    "get_secret_token_manager",
]
