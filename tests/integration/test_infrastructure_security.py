"""Integration tests for security adapters.

Following testing architecture: NO unit tests for infrastructure adapters,
only integration tests against the real libraries (bcrypt, secrets).
"""

import pytest

from credential_issuer.infrastructure.security import (
    BcryptSecretHasher,
    SecureCredentialGenerator,
)


@pytest.mark.integration
class TestBcryptSecretHasherIntegration:
    """bcrypt hashing of token secrets."""

    def test_hash_and_verify(self, hasher):
        secret_hash = hasher.hash_secret("raw-secret")

        assert secret_hash != "raw-secret"
        assert secret_hash.startswith("$2b$04$")
        assert hasher.verify_secret("raw-secret", secret_hash)

    def test_wrong_secret_fails(self, hasher):
        secret_hash = hasher.hash_secret("raw-secret")

        assert not hasher.verify_secret("other-secret", secret_hash)

    def test_hashes_are_salted(self, hasher):
        assert hasher.hash_secret("same") != hasher.hash_secret("same")

    def test_malformed_hash_is_rejected(self, hasher):
        assert not hasher.verify_secret("raw-secret", "not-a-bcrypt-hash")

    def test_cost_factor_is_encoded_in_hash(self):
        secret_hash = BcryptSecretHasher(rounds=5).hash_secret("raw-secret")

        assert secret_hash.startswith("$2b$05$")


@pytest.mark.integration
class TestSecureCredentialGeneratorIntegration:
    """Random material from the secrets module."""

    def test_numeric_code_length_and_digits(self):
        generator = SecureCredentialGenerator()

        codes = [generator.numeric_code(6) for _ in range(200)]

        assert all(len(c) == 6 and c.isdigit() for c in codes)
    def test_secret_is_urlsafe_256_bits(self):
        generator = SecureCredentialGenerator()

        values = {generator.secret() for _ in range(50)}

        assert len(values) == 50
        assert all(len(s) == 43 for s in values)
        assert all("." not in s for s in values)

    def test_lookup_ids_are_unique(self):
        generator = SecureCredentialGenerator()

        assert len({generator.lookup_id() for _ in range(100)}) == 100

    def test_choice_picks_from_options(self):
        generator = SecureCredentialGenerator()
        options = [1, 2, 3]

        assert {generator.choice(options) for _ in range(200)} <= set(options)
