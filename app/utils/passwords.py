# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Clarity - Mood Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import bcrypt

# bcrypt only looks at the first 72 bytes of a secret
BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """One-way digest primitive used by the user store."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    @staticmethod
    def _encode(secret: str) -> bytes:
        return secret.encode("utf-8")[:BCRYPT_MAX_BYTES]

    def hash(self, secret: str) -> str:
        return bcrypt.hashpw(self._encode(secret), bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify(self, secret: str, digest: str) -> bool:
        try:
            return bcrypt.checkpw(self._encode(secret), digest.encode())
        except ValueError:
            # corrupt or foreign digest
            return False
