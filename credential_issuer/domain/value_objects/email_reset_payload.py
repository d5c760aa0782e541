"""Email reset payload carried by EMAIL_RESET secret tokens."""

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class EmailResetPayload:
    """Old and new address recorded when an email reset was requested.

    The user's address may change between issuance and redemption, so the
    caller must check ``still_applies_to`` before applying ``new_email``.

    Attributes:
        old_email: Address the user had when the reset was requested.
        new_email: Address the user asked to switch to.
    """

    old_email: str
    new_email: str

    def to_dict(self) -> dict[str, str]:
        """Serialize for the token's JSON payload column."""
        return {"old_email": self.old_email, "new_email": self.new_email}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EmailResetPayload":
        """Rebuild the payload from the stored JSON.

        Raises:
            KeyError: If either address is missing.
        """
        return cls(old_email=str(data["old_email"]), new_email=str(data["new_email"]))

    def still_applies_to(self, current_email: str | None) -> bool:
        """Check the user's current address is still the one being replaced.

        Comparison is case-insensitive.
        """
        if not current_email:
            return False
        return current_email.strip().lower() == self.old_email.strip().lower()

    @property
    def normalized_new_email(self) -> str:
        """New address lowercased for storage."""
        return self.new_email.strip().lower()
