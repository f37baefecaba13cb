"""Tests for token issuing, verification and reissue."""

from datetime import datetime, timedelta

import pytest
from sqlalchemy.orm import Session

from ourportfolio.exceptions import AppError, ErrorKind
from ourportfolio.models.refresh_token import RefreshToken
from ourportfolio.services.jwt import ACCESS, REFRESH, JWTService
from ourportfolio.services.token import TokenService


@pytest.fixture(name="token_service")
def token_service_fixture() -> TokenService:
    return TokenService()


class TestJWTService:
    """Tests for token signing and decoding."""

    def test_access_token_claims(self):
        jwt_service = JWTService()
        token = jwt_service.create_access_token(user_id=7, email="a@b.com")

        payload = jwt_service.decode_token(token, token_type=ACCESS)
        assert payload["sub"] == "a@b.com"
        assert payload["userId"] == 7
        assert payload["role"] == "USER"

    def test_token_type_is_enforced(self):
        """A refresh token cannot be used where an access token is expected, and vice versa."""
        jwt_service = JWTService()
        access = jwt_service.create_access_token(user_id=7, email="a@b.com")
        refresh, _ = jwt_service.create_refresh_token(user_id=7, email="a@b.com")

        assert jwt_service.decode_token(refresh, token_type=ACCESS) is None
        assert jwt_service.decode_token(access, token_type=REFRESH) is None

    def test_expired_token_rejected(self):
        jwt_service = JWTService()
        token = jwt_service.create_access_token(user_id=7, email="a@b.com", expires_delta=timedelta(seconds=-10))
        assert jwt_service.decode_token(token) is None

    def test_tampered_token_rejected(self):
        jwt_service = JWTService()
        token = jwt_service.create_access_token(user_id=7, email="a@b.com")
        other = jwt_service.create_access_token(user_id=8, email="c@d.com")
        header, _, signature = token.split(".")
        forged = ".".join([header, other.split(".")[1], signature])
        assert jwt_service.decode_token(forged) is None
        assert jwt_service.decode_token("invalid.token.here") is None
        assert jwt_service.decode_token(None) is None


class TestReissue:
    """Tests for TokenService.reissue_access_token."""

    def test_reissue_keeps_refresh_token_valid(self, db_session: Session, token_service: TokenService, test_user: dict):
        """Reissue mints a new access token and the refresh token can be used again."""
        first = token_service.reissue_access_token(db_session, test_user["refresh_token"])
        second = token_service.reissue_access_token(db_session, test_user["refresh_token"])

        payload = token_service.jwt.decode_token(first, token_type=ACCESS)
        assert payload["userId"] == test_user["user_id"]
        assert payload["sub"] == test_user["email"]
        assert second

    def test_expired_refresh_token(self, db_session: Session, token_service: TokenService, test_user: dict):
        expired, _ = token_service.jwt.create_refresh_token(
            user_id=test_user["user_id"], email=test_user["email"], expires_delta=timedelta(seconds=-1)
        )
        with pytest.raises(AppError) as exc_info:
            token_service.reissue_access_token(db_session, expired)
        assert exc_info.value.kind is ErrorKind.INVALID_TOKEN

    def test_garbage_or_missing_token(self, db_session: Session, token_service: TokenService):
        for token in ("not-a-jwt", "", None):
            with pytest.raises(AppError) as exc_info:
                token_service.reissue_access_token(db_session, token)
            assert exc_info.value.kind is ErrorKind.INVALID_TOKEN

    def test_access_token_cannot_reissue(self, db_session: Session, token_service: TokenService, test_user: dict):
        with pytest.raises(AppError) as exc_info:
            token_service.reissue_access_token(db_session, test_user["access_token"])
        assert exc_info.value.kind is ErrorKind.INVALID_TOKEN

    def test_unstored_refresh_token(self, db_session: Session, token_service: TokenService, test_user: dict):
        """A correctly signed token that is not the stored one is refused."""
        stray, _ = token_service.jwt.create_refresh_token(user_id=test_user["user_id"], email=test_user["email"])
        with pytest.raises(AppError) as exc_info:
            token_service.reissue_access_token(db_session, stray)
        assert exc_info.value.kind is ErrorKind.INVALID_TOKEN

    def test_stored_row_expired(self, db_session: Session, token_service: TokenService, test_user: dict):
        record = db_session.query(RefreshToken).filter(RefreshToken.user_id == test_user["user_id"]).one()
        record.expires_at = datetime.utcnow() - timedelta(minutes=1)
        db_session.commit()

        with pytest.raises(AppError) as exc_info:
            token_service.reissue_access_token(db_session, test_user["refresh_token"])
        assert exc_info.value.kind is ErrorKind.INVALID_TOKEN

    def test_user_gone(self, db_session: Session, token_service: TokenService):
        orphan, _ = token_service.jwt.create_refresh_token(user_id=4242, email="ghost@example.com")
        with pytest.raises(AppError) as exc_info:
            token_service.reissue_access_token(db_session, orphan)
        assert exc_info.value.kind is ErrorKind.NOT_FOUND_USER

    def test_revoked_refresh_token(self, db_session: Session, token_service: TokenService, test_user: dict):
        assert token_service.revoke(db_session, test_user["user_id"]) is True
        db_session.commit()

        with pytest.raises(AppError) as exc_info:
            token_service.reissue_access_token(db_session, test_user["refresh_token"])
        assert exc_info.value.kind is ErrorKind.INVALID_TOKEN
        assert token_service.revoke(db_session, test_user["user_id"]) is False
