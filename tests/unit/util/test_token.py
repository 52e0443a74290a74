"""Tests for invite secret generation and hashing."""

from fieldops.domain.value import InviteSecret
from fieldops.util.token import hash_secret, issue_secret


class TestIssueSecret:
    """Tests for issue_secret."""

    def test_secret_is_url_safe_and_long(self):
        secret, _ = issue_secret()

        assert len(secret.root) == 64
        assert all(c in "0123456789abcdef" for c in secret.root)

    def test_hash_matches_secret(self):
        secret, token_hash = issue_secret()

        assert hash_secret(secret) == token_hash
        assert token_hash.root != secret.root

    def test_secrets_are_unique(self):
        secrets = {issue_secret()[0].root for _ in range(100)}

        assert len(secrets) == 100


class TestHashSecret:
    """Tests for hash_secret."""

    def test_hash_is_deterministic(self):
        raw = "a" * 40

        assert hash_secret(raw) == hash_secret(InviteSecret(raw))

    def test_hash_ignores_surrounding_whitespace(self):
        raw = "b" * 40

        assert hash_secret(f"  {raw}\n") == hash_secret(raw)

    def test_known_digest(self):
        # sha256("a" * 32)
        assert hash_secret("a" * 32).root == (
            "3ba3f5f43b92602683c19aee62a20342b084dd5971ddd33808d81a328879a547"
        )

    def test_prefix_is_short(self):
        token_hash = hash_secret("c" * 40)

        assert token_hash.prefix == token_hash.root[:8] + "..."
