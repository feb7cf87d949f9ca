"""API token material helpers.

Tokens carry 256 bits of randomness, so a single unsalted SHA-256 digest is
enough to use as the storage and lookup key. The same function must be used
at issuance and at verification.
"""

from __future__ import annotations

import hashlib
import secrets

TOKEN_BYTES = 32


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def generate_api_token(prefix: str) -> tuple[str, str]:
    """Return ``(plaintext, sha256 hex digest)`` for a fresh API token."""
    token = f"{prefix}{secrets.token_urlsafe(TOKEN_BYTES)}"
    return token, hash_token(token)
