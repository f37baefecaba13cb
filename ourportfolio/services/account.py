"""Account service: signup, login, profile and password changes, deletion."""

import logging

import bcrypt
from sqlalchemy.orm import Session

from ourportfolio.exceptions import AppError, ErrorKind
from ourportfolio.models.user import User
from ourportfolio.services.storage import ImageUpload, StorageService, get_storage_service
from ourportfolio.services.token import TokenPair, TokenService, get_token_service
from ourportfolio.services.validators import validate_email, validate_nickname, validate_password

logger = logging.getLogger("ourportfolio")

# bcrypt only accepts inputs up to this many bytes.
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    """Return True when password matches the hash. Over-length input never matches."""
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))


class AccountService:
    """Orchestrates the user account lifecycle.

    Every mutating method commits once at the end, so a failure part way
    through leaves neither the user row nor the refresh-token row changed.
    Operations on an existing account take the authenticated caller's id
    explicitly and only allow callers to act on their own account.
    """

    def __init__(self, token_service: TokenService | None = None, storage: StorageService | None = None) -> None:
        self.tokens = token_service or get_token_service()
        self.storage = storage or get_storage_service()

    def signup(self, db: Session, email: str, password: str, nickname: str) -> User:
        """Register a new user. No tokens are issued; the client logs in separately."""
        validate_email(email)
        validate_password(password)
        validate_nickname(nickname)

        if self._nickname_taken(db, nickname):
            raise AppError(ErrorKind.DUPLICATED_NICKNAME)
        if self._email_taken(db, email):
            raise AppError(ErrorKind.DUPLICATED_EMAIL)

        user = User(
            email=email,
            password_hash=hash_password(password),
            nickname=nickname,
            is_deleted=False,
        )
        db.add(user)
        db.commit()
        db.refresh(user)

        logger.info("Signed up user id=%s", user.id)
        return user

    def login(self, db: Session, email: str, password: str) -> TokenPair:
        """Check credentials and issue a fresh access/refresh pair."""
        validate_email(email)

        user = db.query(User).filter(User.email == email).first()
        if not user:
            raise AppError(ErrorKind.NOT_FOUND_USER)
        if user.is_deleted:
            raise AppError(ErrorKind.USER_IS_DELETED)
        if not check_password(password or "", user.password_hash):
            raise AppError(ErrorKind.BAD_PASSWORD)

        pair = self.tokens.issue(db, user.email, user.id)
        db.commit()

        logger.info("User id=%s logged in", user.id)
        return pair

    def get_user(self, db: Session, user_id: int) -> User:
        user = db.get(User, user_id)
        if not user:
            raise AppError(ErrorKind.NOT_FOUND_USER)
        return user

    def check_email(self, db: Session, email: str) -> bool:
        """Return True when the email is well-formed and unused."""
        validate_email(email)
        if self._email_taken(db, email):
            raise AppError(ErrorKind.DUPLICATED_EMAIL)
        return True

    def update_user(
        self,
        db: Session,
        user_id: int,
        nickname: str,
        image: ImageUpload | None,
        caller_id: int,
    ) -> User:
        """Change nickname and, when an image is given, the profile picture."""
        self._require_owner(user_id, caller_id)
        user = self._get_active_user(db, user_id)

        if nickname != user.nickname and self._nickname_taken(db, nickname, exclude_id=user.id):
            raise AppError(ErrorKind.DUPLICATED_NICKNAME)
        validate_nickname(nickname)

        previous_image = user.profile_image
        new_image = None
        if image is not None:
            new_image = self.storage.upload_file(image.data, image.content_type)
            user.profile_image = new_image
        user.nickname = nickname
        try:
            db.commit()
        except Exception:
            db.rollback()
            self.storage.delete_file(new_image)
            raise
        db.refresh(user)

        if image is not None and previous_image and previous_image != user.profile_image:
            self.storage.delete_file(previous_image)
        return user

    def update_password(
        self,
        db: Session,
        user_id: int,
        old_password: str,
        new_password: str,
        check_new_password: str,
        caller_id: int,
    ) -> None:
        """Change the password and revoke the outstanding refresh token."""
        self._require_owner(user_id, caller_id)
        user = self._get_active_user(db, user_id)

        if not check_password(old_password or "", user.password_hash):
            raise AppError(ErrorKind.PRESENT_PASSWORD)
        if new_password != check_new_password:
            raise AppError(ErrorKind.COINCIDE_PASSWORD)
        validate_password(new_password)

        user.password_hash = hash_password(new_password)
        self.tokens.revoke(db, user.id)
        db.commit()

        logger.info("User id=%s changed password", user.id)

    def delete_user(self, db: Session, user_id: int, caller_id: int) -> None:
        """Soft delete: flag the account and revoke its refresh token."""
        user = db.get(User, user_id)
        if not user:
            raise AppError(ErrorKind.NOT_FOUND_USER)
        self._require_owner(user_id, caller_id)

        user.is_deleted = True
        self.tokens.revoke(db, user.id)
        db.commit()

        logger.info("Soft deleted user id=%s", user.id)

    def delete_user_hard(self, db: Session, user_id: int, caller_id: int) -> None:
        """Hard delete: remove the user row permanently."""
        self._require_owner(user_id, caller_id)
        user = db.get(User, user_id)
        if not user:
            raise AppError(ErrorKind.NOT_FOUND_USER)

        self.tokens.revoke(db, user.id)
        db.delete(user)
        db.commit()

        logger.info("Hard deleted user id=%s", user_id)

    def reissue_token(self, db: Session, refresh_token: str | None) -> str:
        return self.tokens.reissue_access_token(db, refresh_token)

    def logout(self, db: Session, caller_id: int) -> None:
        self.tokens.revoke(db, caller_id)
        db.commit()

    def _require_owner(self, user_id: int, caller_id: int) -> None:
        if user_id != caller_id:
            raise AppError(ErrorKind.UNAUTHORIZED)

    def _get_active_user(self, db: Session, user_id: int) -> User:
        user = self.get_user(db, user_id)
        if user.is_deleted:
            raise AppError(ErrorKind.USER_IS_DELETED)
        return user

    def _nickname_taken(self, db: Session, nickname: str, exclude_id: int | None = None) -> bool:
        # Soft-deleted rows count: their nickname stays reserved.
        query = db.query(User.id).filter(User.nickname == nickname)
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        return query.first() is not None

    def _email_taken(self, db: Session, email: str) -> bool:
        return db.query(User.id).filter(User.email == email).first() is not None


_account_service: AccountService | None = None


def get_account_service() -> AccountService:
    """Get singleton account service instance."""
    global _account_service
    if _account_service is None:
        _account_service = AccountService()
    return _account_service
