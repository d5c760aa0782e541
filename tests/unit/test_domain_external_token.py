"""Unit tests for ExternalToken and EmailResetPayload value objects.

Tests cover:
- "{lookup_id}.{secret}" encoding and parsing
- Malformed token rejection
- Log redaction
- Email reset payload serialization and re-confirmation
"""

from uuid import UUID

import pytest
from uuid_extensions import uuid7

from credential_issuer.domain.value_objects import EmailResetPayload, ExternalToken


@pytest.mark.unit
class TestExternalToken:
    """Test ExternalToken encoding."""

    def test_encode_joins_lookup_id_and_secret(self):
        lookup_id = UUID("0b6e2f1c-9a8d-4c3b-8e7f-1a2b3c4d5e6f")
        token = ExternalToken(lookup_id=lookup_id, secret="s3cr3t-value")

        assert token.encode() == "0b6e2f1c-9a8d-4c3b-8e7f-1a2b3c4d5e6f.s3cr3t-value"

    def test_decode_parses_encoded_token(self):
        lookup_id = uuid7()

        decoded = ExternalToken.decode(f"{lookup_id}.abc.def")

        assert decoded.lookup_id == lookup_id
        # Only the first separator splits; the secret may contain dots
        assert decoded.secret == "abc.def"

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "no-separator",
            "not-a-uuid.secret",
            "0b6e2f1c-9a8d-4c3b-8e7f-1a2b3c4d5e6f.",
        ],
    )
    def test_decode_rejects_malformed(self, value):
        with pytest.raises(ValueError, match="Malformed token"):
            ExternalToken.decode(value)

    def test_repr_hides_secret(self):
        token = ExternalToken(lookup_id=uuid7(), secret="very-secret")

        assert "very-secret" not in repr(token)

    def test_redact_keeps_prefix_only(self):
        assert ExternalToken.redact("abcdefghijklmnop") == "abcdefgh..."
        assert ExternalToken.redact("short") == "short"


@pytest.mark.unit
class TestEmailResetPayload:
    """Test EmailResetPayload."""

    def test_to_dict_and_from_dict(self):
        payload = EmailResetPayload(old_email="old@example.com", new_email="New@Example.com")

        assert EmailResetPayload.from_dict(payload.to_dict()) == payload

    def test_from_dict_requires_both_addresses(self):
        with pytest.raises(KeyError):
            EmailResetPayload.from_dict({"old_email": "old@example.com"})

    def test_still_applies_to_is_case_insensitive(self):
        payload = EmailResetPayload(old_email="Old@Example.com", new_email="new@example.com")

        assert payload.still_applies_to("old@example.com")
        assert payload.still_applies_to("  OLD@EXAMPLE.COM ")

    def test_still_applies_to_rejects_changed_address(self):
        payload = EmailResetPayload(old_email="old@example.com", new_email="new@example.com")

        assert not payload.still_applies_to("other@example.com")
        assert not payload.still_applies_to(None)
        assert not payload.still_applies_to("")

    def test_normalized_new_email(self):
        payload = EmailResetPayload(old_email="a@example.com", new_email=" New@Example.COM ")

        assert payload.normalized_new_email == "new@example.com"
