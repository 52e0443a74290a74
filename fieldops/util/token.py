"""Invite secret generation and hashing.

Secrets carry 256 bits from the OS CSPRNG, so a plain SHA-256 digest is a
sufficient lookup key; no salt or slow hash is needed.
"""

import hashlib
import secrets

from fieldops.domain.value import InviteSecret, TokenHash

SECRET_BYTES = 32


def issue_secret() -> tuple[InviteSecret, TokenHash]:
    """Generate a new invite secret and its lookup hash.

    Returns:
        Tuple of (raw secret, lookup hash). The raw secret must be handed to
        the caller once and never stored.
    """
    secret = InviteSecret(secrets.token_hex(SECRET_BYTES))
    return secret, hash_secret(secret)


def hash_secret(secret: InviteSecret | str) -> TokenHash:
    """Derive the lookup hash of a raw secret.

    Args:
        secret: Raw invite secret

    Returns:
        SHA-256 hex digest
    """
    raw = secret.root if isinstance(secret, InviteSecret) else secret.strip()
    return TokenHash(hashlib.sha256(raw.encode("utf-8")).hexdigest())
