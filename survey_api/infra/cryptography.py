"""Password hashing and access token adapters."""

from __future__ import annotations

import time
from typing import Any

import bcrypt
import jwt

# bcrypt ignores everything past 72 bytes; newer releases raise instead
_BCRYPT_MAX_BYTES = 72


class BcryptAdapter:
    """``Hasher``/``HashComparer`` implementation backed by bcrypt."""

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    def hash(self, value: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(value.encode("utf-8")[:_BCRYPT_MAX_BYTES], salt).decode("utf-8")

    def compare(self, value: str, hashed: str) -> bool:
        """Return ``True`` when ``value`` matches the stored bcrypt hash.

        A stored value that is not a bcrypt hash never matches.
        """
        try:
            return bcrypt.checkpw(value.encode("utf-8")[:_BCRYPT_MAX_BYTES], hashed.encode("utf-8"))
        except ValueError:
            return False


class JwtAdapter:
    """``Encrypter``/``Decrypter`` implementation issuing HS256 JWTs.

    Parameters
    ----------
    secret:
        Shared signing secret.
    issuer:
        Value written to, and required in, the ``iss`` claim.
    ttl_seconds:
        Lifetime of issued tokens; ``0`` omits the ``exp`` claim entirely.
    """

    algorithm = "HS256"

    def __init__(self, secret: str, *, issuer: str, ttl_seconds: int = 0) -> None:
        self._secret = secret
        self._issuer = issuer
        self._ttl_seconds = ttl_seconds

    def encrypt(self, value: str) -> str:
        """Return a signed token whose ``sub`` claim is ``value``."""
        now = int(time.time())
        payload: dict[str, Any] = {"iss": self._issuer, "sub": value, "iat": now}
        if self._ttl_seconds > 0:
            payload["exp"] = now + self._ttl_seconds
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def decrypt(self, token: str) -> str | None:
        """Return the ``sub`` claim of a valid token, or ``None``.

        Bad signatures, foreign issuers, expired and malformed tokens all
        yield ``None``.
        """
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                issuer=self._issuer,
            )
        except jwt.PyJWTError:
            return None
        return claims.get("sub")
