# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Clarity - Mood Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt

from app.config import Settings
from app.errors import ExpiredError, MalformedOrForgedError, MissingTokenError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
ACCESS_TOKEN_TTL = timedelta(days=7)


class TokenService:
    """
    Stateless bearer tokens.

    A token is a signed JWT carrying the user id in ``sub`` and an absolute
    ``exp``. Nothing is stored server side, so a token stays valid until it
    expires.
    """

    def __init__(self, secret: str, algorithm: str = ALGORITHM, ttl: timedelta = ACCESS_TOKEN_TTL):
        if not secret:
            raise ValueError("TokenService requires a non-empty signing secret")
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            ttl=timedelta(days=settings.token_ttl_days),
        )

    # ✅ Create a signed JWT token
    def issue(self, user_id: int, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    # ✅ Verify a JWT token and return the user id it carries
    def validate(self, token: Optional[str]) -> int:
        if token is None or not token.strip():
            raise MissingTokenError()

        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            logger.warning("⏱️ Rejected expired token")
            raise ExpiredError() from e
        except JWTError as e:
            logger.warning(f"🚫 Rejected invalid token: {e}")
            raise MalformedOrForgedError() from e

        sub = payload.get("sub")
        try:
            return int(sub)
        except (TypeError, ValueError) as e:
            logger.warning("🚫 Rejected token without a usable subject")
            raise MalformedOrForgedError() from e
