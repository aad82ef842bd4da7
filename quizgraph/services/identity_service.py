import asyncio
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext

from ..core.errors import InvalidTokenError
from ..core.logging import get_logger

logger = get_logger(__name__)


class IdentityService:
    """Password hashing and session tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str = "quizgraph",
        token_ttl_minutes: int = 60 * 24,
        pwd_context: Optional[CryptContext] = None,
    ) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.token_ttl_minutes = token_ttl_minutes
        self.pwd_context = pwd_context or CryptContext(schemes=["argon2"], deprecated="auto")

    async def hash(self, plaintext: str) -> str:
        return await asyncio.to_thread(self.pwd_context.hash, plaintext)

    async def verify(self, plaintext: str, hashed: Optional[str]) -> bool:
        """
        Check ``plaintext`` against ``hashed``. With no hash (unknown user)
        a comparison against a dummy hash still runs, then ``False``.
        Hashing runs in a worker thread so the event loop stays free.
        """
        return await asyncio.to_thread(self._verify, plaintext, hashed)

    def _verify(self, plaintext: str, hashed: Optional[str]) -> bool:
        if not hashed:
            self.pwd_context.dummy_verify()
            return False
        try:
            return self.pwd_context.verify(plaintext, hashed)
        except ValueError:
            # Stored value is not a hash this context understands.
            logger.warning("Unrecognized password hash format")
            return False

    def issue_token(self, user: dict) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user["id"]),
            "username": user.get("username"),
            "email": user.get("email"),
            "iss": self.issuer,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(minutes=self.token_ttl_minutes)).timestamp()),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def read_token(self, token: str) -> str:
        """Return the user id a token was issued for."""
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                options={"require": ["sub", "exp"]},
            )
        except jwt.InvalidTokenError as e:
            logger.warning("Token validation failed", error=str(e))
            raise InvalidTokenError() from e
        return payload["sub"]
