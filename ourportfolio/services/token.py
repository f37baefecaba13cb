"""Token issuer: access/refresh pairs backed by server-side refresh records."""

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from ourportfolio.exceptions import AppError, ErrorKind
from ourportfolio.models.refresh_token import RefreshToken
from ourportfolio.models.user import User
from ourportfolio.services.jwt import REFRESH, JWTService, get_jwt_service

ACCESS_TOKEN_HEADER = "ACCESSTOKEN"
REFRESH_TOKEN_HEADER = "REFRESHTOKEN"


@dataclass
class TokenPair:
    """Freshly issued access and refresh tokens."""

    access_token: str
    refresh_token: str


class TokenService:
    """Issues, reissues and revokes session tokens.

    Methods stage their changes on the session; the calling service commits,
    so a token write lands in the same transaction as the account change.
    """

    def __init__(self, jwt_service: JWTService | None = None) -> None:
        self.jwt = jwt_service or get_jwt_service()

    def issue(self, db: Session, email: str, user_id: int) -> TokenPair:
        """Create an access/refresh pair and replace the user's stored refresh token."""
        access_token = self.jwt.create_access_token(user_id=user_id, email=email)
        refresh_token, expires_at = self.jwt.create_refresh_token(user_id=user_id, email=email)

        record = db.query(RefreshToken).filter(RefreshToken.user_id == user_id).first()
        if record:
            record.token = refresh_token
            record.expires_at = expires_at
        else:
            db.add(RefreshToken(user_id=user_id, token=refresh_token, expires_at=expires_at))

        return TokenPair(access_token=access_token, refresh_token=refresh_token)

    def reissue_access_token(self, db: Session, refresh_token: str | None) -> str:
        """Mint a new access token from a valid refresh token. The refresh token is not rotated."""
        payload = self.jwt.decode_token(refresh_token, token_type=REFRESH)
        if not payload:
            raise AppError(ErrorKind.INVALID_TOKEN)

        user = db.query(User).filter(User.email == payload["sub"]).first()
        if not user:
            raise AppError(ErrorKind.NOT_FOUND_USER)

        record = (
            db.query(RefreshToken)
            .filter(RefreshToken.user_id == user.id, RefreshToken.token == refresh_token)
            .first()
        )
        if not record or record.expires_at < datetime.utcnow():
            raise AppError(ErrorKind.INVALID_TOKEN)

        return self.jwt.create_access_token(user_id=user.id, email=user.email)

    def revoke(self, db: Session, user_id: int) -> bool:
        """Drop the user's stored refresh token. Returns True if one existed."""
        deleted = db.query(RefreshToken).filter(RefreshToken.user_id == user_id).delete(synchronize_session=False)
        return deleted > 0


_token_service: TokenService | None = None


def get_token_service() -> TokenService:
    """Get singleton token service instance."""
    global _token_service
    if _token_service is None:
        _token_service = TokenService()
    return _token_service
