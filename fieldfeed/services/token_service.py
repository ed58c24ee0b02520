"""
Admin bearer tokens (HS256 JWT).
"""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt

from fieldfeed.config.settings import Settings, get_settings
from fieldfeed.core.domain import AuthenticationException

logger = logging.getLogger(__name__)


class TokenService:
    """
    Issues and verifies admin access tokens.

    The admin id travels in the ``id`` claim. Verification failures are
    raised as ``AuthenticationException`` so the API answers 401.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.SECRET_KEY = self.settings.JWT_SECRET_KEY
        self.ALGORITHM = self.settings.JWT_ALGORITHM
        self.ACCESS_TOKEN_EXPIRE_MINUTES = self.settings.ACCESS_TOKEN_EXPIRE_MINUTES

    def create_access_token(
        self,
        admin_id: UUID | str,
        expires_delta: timedelta | None = None,
        extra_claims: dict[str, Any] | None = None,
    ) -> str:
        """
        Create a signed access token for an admin.

        Args:
            admin_id: Admin the token is issued to
            expires_delta: Lifetime (defaults to ACCESS_TOKEN_EXPIRE_MINUTES)
            extra_claims: Additional claims to embed

        Returns:
            Encoded JWT
        """
        now = datetime.now(UTC)
        expire = now + (expires_delta or timedelta(minutes=self.ACCESS_TOKEN_EXPIRE_MINUTES))
        to_encode = {**(extra_claims or {}), "id": str(admin_id), "iat": now, "exp": expire}
        return jwt.encode(to_encode, self.SECRET_KEY, algorithm=self.ALGORITHM)

    def decode_token(self, token: str) -> dict[str, Any]:
        try:
            return jwt.decode(token, self.SECRET_KEY, algorithms=[self.ALGORITHM])
        except ExpiredSignatureError as e:
            raise AuthenticationException("Token has expired.") from e
        except JWTError as e:
            logger.debug(f"Rejected token: {e}")
            raise AuthenticationException("Invalid token.") from e

    def admin_id_from_token(self, token: str) -> UUID:
        """Decode ``token`` and return the admin id it was issued to."""
        payload = self.decode_token(token)
        try:
            return UUID(str(payload["id"]))
        except (KeyError, ValueError) as e:
            raise AuthenticationException("Invalid token.") from e
