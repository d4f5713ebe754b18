"""
Password hashing.

PBKDF2-SHA256 with a per-password random salt. Digests are stored as
"iterations:salt:hash" so the work factor can be raised later without
invalidating existing accounts.
"""

from __future__ import annotations

import hashlib
import secrets


class PasswordHasher:
    """One-way salted hashing and constant-time verification of secrets."""

    def __init__(self, iterations: int = 100_000):
        self.iterations = iterations

    def _derive(self, password: str, salt: str, iterations: int) -> str:
        hash_bytes = hashlib.pbkdf2_hmac(
            'sha256',
            password.encode('utf-8'),
            salt.encode('utf-8'),
            iterations=iterations,
        )
        return hash_bytes.hex()

    def hash(self, password: str) -> str:
        salt = secrets.token_hex(32)
        return f"{self.iterations}:{salt}:{self._derive(password, salt, self.iterations)}"

    def verify(self, password: str, password_hash: str) -> bool:
        """
        Verify a password against its digest.

        A malformed digest is a failed verification, never an exception.
        """
        try:
            iterations, salt, stored_hash = password_hash.split(':')
            computed = self._derive(password, salt, int(iterations))
            return secrets.compare_digest(computed, stored_hash)
        except (ValueError, AttributeError, TypeError):
            return False
