"""JWT Token Service."""

import uuid
from datetime import datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from ourportfolio.config import get_settings

ACCESS = "access"
REFRESH = "refresh"
DEFAULT_ROLE = "USER"


class JWTService:
    """Handles signing and verification of access and refresh tokens."""

    def __init__(self) -> None:
        settings = get_settings()
        self.secret_key = settings.JWT_SECRET_KEY
        self.algorithm = settings.JWT_ALGORITHM
        self.access_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        self.refresh_expires = timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)

    def create_access_token(self, user_id: int, email: str, expires_delta: timedelta | None = None) -> str:
        """Create a short-lived access token carrying the user's id and email."""
        expire = datetime.utcnow() + (expires_delta if expires_delta is not None else self.access_expires)
        payload = {
            "sub": email,
            "userId": user_id,
            "role": DEFAULT_ROLE,
            "type": ACCESS,
            "exp": expire,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def create_refresh_token(
        self, user_id: int, email: str, expires_delta: timedelta | None = None
    ) -> tuple[str, datetime]:
        """Create a refresh token. Returns (token, expires_at)."""
        expire = datetime.utcnow() + (expires_delta if expires_delta is not None else self.refresh_expires)
        payload = {
            "sub": email,
            "userId": user_id,
            "type": REFRESH,
            "jti": uuid.uuid4().hex,
            "exp": expire,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm), expire

    def decode_token(self, token: str | None, token_type: str = ACCESS) -> dict[str, Any] | None:
        """Decode and validate a token of the given type. Returns None if invalid or expired."""
        if not token:
            return None
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None
        if payload.get("type") != token_type or "sub" not in payload or "userId" not in payload:
            return None
        return payload


_jwt_service: JWTService | None = None


def get_jwt_service() -> JWTService:
    """Get singleton JWT service instance."""
    global _jwt_service
    if _jwt_service is None:
        _jwt_service = JWTService()
    return _jwt_service
