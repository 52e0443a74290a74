"""Tests for domain value types."""

import pytest
from pydantic import ValidationError

from fieldops.domain.value import Email, InviteSecret, MemberRole, TokenHash


class TestEmail:
    """Tests for Email."""

    def test_normalizes_case_and_whitespace(self):
        assert Email("  Maria@Example.COM ").root == "maria@example.com"

    @pytest.mark.parametrize("value", ["", "maria", "maria@", "@example.com", "a b@c.d"])
    def test_rejects_malformed_address(self, value):
        with pytest.raises(ValidationError):
            Email(value)

    def test_matches_is_case_insensitive(self):
        email = Email("maria@example.com")

        assert email.matches("MARIA@example.com")
        assert email.matches(Email("Maria@Example.com"))
        assert not email.matches("joao@example.com")
        assert not email.matches(None)


class TestInviteSecret:
    """Tests for InviteSecret."""

    def test_accepts_url_safe_secret(self):
        assert InviteSecret("A-b_" * 10).root == "A-b_" * 10

    @pytest.mark.parametrize("value", ["short", "x" * 256, "!" * 40, "a" * 30 + " /"])
    def test_rejects_invalid_secret(self, value):
        with pytest.raises(ValidationError):
            InviteSecret(value)

    def test_repr_hides_secret(self):
        assert "a" * 40 not in repr(InviteSecret("a" * 40))


class TestTokenHash:
    """Tests for TokenHash."""

    def test_rejects_uppercase_hex(self):
        with pytest.raises(ValidationError):
            TokenHash("A" * 64)


class TestMemberRole:
    """Tests for MemberRole.normalize."""

    @pytest.mark.parametrize(
        "candidates, expected",
        [
            (("owner",), MemberRole.OWNER),
            ((" Admin ",), MemberRole.ADMIN),
            (("technician",), MemberRole.MEMBER),
            ((None, "admin"), MemberRole.ADMIN),
            ((None, None), MemberRole.MEMBER),
            ((MemberRole.OWNER, "admin"), MemberRole.OWNER),
            (("", "admin"), MemberRole.ADMIN),
        ],
    )
    def test_normalize(self, candidates, expected):
        assert MemberRole.normalize(*candidates) == expected

    def test_only_owner_and_admin_manage_invites(self):
        assert MemberRole.OWNER.can_manage_invites
        assert MemberRole.ADMIN.can_manage_invites
        assert not MemberRole.MEMBER.can_manage_invites
