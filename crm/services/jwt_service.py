"""JWT service for token generation and validation."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from crm.config.settings import settings
from crm.utils.exceptions import InvalidTokenError as CustomInvalidTokenError
from crm.utils.exceptions import TokenExpiredError

ISSUER = "crm-api"


class JWTService:
    """Service for JWT token operations.

    Access and refresh tokens are signed with different secrets, so a
    refresh token can never be replayed as an access token.
    """

    def __init__(self):
        self.algorithm = settings.JWT_ALGORITHM
        self.access_token_expire_minutes = settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES
        self.refresh_token_expire_days = settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS

    def create_access_token(
        self,
        user_id: str,
        email: Optional[str] = None,
        extra_claims: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Create a JWT access token."""
        now = datetime.now(timezone.utc)
        expire = now + timedelta(minutes=self.access_token_expire_minutes)

        payload = {
            "sub": str(user_id),  # Subject (user ID)
            "type": "access",
            "iat": now,
            "exp": expire,
            "iss": ISSUER,
        }

        if email:
            payload["email"] = email

        if extra_claims:
            payload.update(extra_claims)

        return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=self.algorithm)

    def create_refresh_token(self, user_id: str) -> str:
        """Create a JWT refresh token."""
        now = datetime.now(timezone.utc)
        expire = now + timedelta(days=self.refresh_token_expire_days)

        payload = {
            "sub": str(user_id),
            "type": "refresh",
            "iat": now,
            "exp": expire,
            "iss": ISSUER,
        }

        return jwt.encode(payload, settings.JWT_REFRESH_SECRET_KEY, algorithm=self.algorithm)

    def _decode(self, token: str, secret: str, expected_type: str) -> Dict[str, Any]:
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self.algorithm],
                issuer=ISSUER,
            )
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except InvalidTokenError:
            raise CustomInvalidTokenError()

        if payload.get("type") != expected_type or not payload.get("sub"):
            raise CustomInvalidTokenError()

        return payload

    def decode_access_token(self, token: str) -> Dict[str, Any]:
        """Decode and validate an access token."""
        return self._decode(token, settings.JWT_SECRET_KEY, "access")

    def decode_refresh_token(self, token: str) -> Dict[str, Any]:
        """Decode and validate a refresh token."""
        return self._decode(token, settings.JWT_REFRESH_SECRET_KEY, "refresh")
