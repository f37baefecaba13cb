"""User account API endpoints."""

from fastapi import APIRouter, Depends, File, Form, Header, Request, Response, UploadFile
from sqlalchemy.orm import Session

from ourportfolio.database import get_db
from ourportfolio.dependencies import CurrentUser, get_current_user
from ourportfolio.rate_limit import limiter
from ourportfolio.schemas.common import ResponseEnvelope
from ourportfolio.schemas.user import (
    EmailCheckRequest,
    LoginRequest,
    SignupRequest,
    UpdatePasswordRequest,
    UserResponse,
)
from ourportfolio.services.account import get_account_service
from ourportfolio.services.storage import ImageUpload
from ourportfolio.services.token import ACCESS_TOKEN_HEADER, REFRESH_TOKEN_HEADER

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.post("/signup", response_model=ResponseEnvelope[None])
@limiter.limit("5/minute")
def signup(request: Request, body: SignupRequest, db: Session = Depends(get_db)) -> ResponseEnvelope[None]:
    """Register a new user account."""
    get_account_service().signup(db, body.email, body.password, body.nickname)
    return ResponseEnvelope[None].success("회원가입 성공!")


@router.post("/login", response_model=ResponseEnvelope[None])
@limiter.limit("10/minute")
def login(
    request: Request, response: Response, body: LoginRequest, db: Session = Depends(get_db)
) -> ResponseEnvelope[None]:
    """Authenticate; the token pair is returned in response headers."""
    pair = get_account_service().login(db, body.email, body.password)
    response.headers[ACCESS_TOKEN_HEADER] = pair.access_token
    response.headers[REFRESH_TOKEN_HEADER] = pair.refresh_token
    return ResponseEnvelope[None].success("로그인 성공!")


@router.post("/email-check", response_model=ResponseEnvelope[bool])
@limiter.limit("20/minute")
def check_email(request: Request, body: EmailCheckRequest, db: Session = Depends(get_db)) -> ResponseEnvelope[bool]:
    """Check that an email is well-formed and not yet registered."""
    available = get_account_service().check_email(db, body.email)
    return ResponseEnvelope[bool].success("이메일이 중복되지 않습니다.", available)


@router.post("/token-reissue", response_model=ResponseEnvelope[None])
@limiter.limit("20/minute")
def reissue_token(
    request: Request,
    response: Response,
    refresh_token: str | None = Header(default=None, alias=REFRESH_TOKEN_HEADER),
    db: Session = Depends(get_db),
) -> ResponseEnvelope[None]:
    """Mint a new access token from the refresh token header."""
    access_token = get_account_service().reissue_token(db, refresh_token)
    response.headers[ACCESS_TOKEN_HEADER] = access_token
    return ResponseEnvelope[None].success("토큰 재발급 성공!")


@router.post("/logout", response_model=ResponseEnvelope[None])
def logout(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ResponseEnvelope[None]:
    """Revoke the caller's refresh token."""
    get_account_service().logout(db, user.user_id)
    return ResponseEnvelope[None].success("로그아웃 성공!")


@router.get("/{user_id}", response_model=ResponseEnvelope[UserResponse])
def get_user(user_id: int, db: Session = Depends(get_db)) -> ResponseEnvelope[UserResponse]:
    """Get a user's public profile."""
    user = get_account_service().get_user(db, user_id)
    return ResponseEnvelope[UserResponse].success("회원 조회 성공!", UserResponse.model_validate(user))


@router.patch("/{user_id}", response_model=ResponseEnvelope[UserResponse])
async def update_user(
    user_id: int,
    nickname: str = Form(...),
    image: UploadFile | None = File(default=None),
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ResponseEnvelope[UserResponse]:
    """Update nickname and optionally replace the profile image."""
    upload = None
    if image is not None:
        upload = ImageUpload(data=await image.read(), content_type=image.content_type)

    updated = get_account_service().update_user(db, user_id, nickname, upload, caller_id=user.user_id)
    return ResponseEnvelope[UserResponse].success("회원 정보 수정 성공!", UserResponse.model_validate(updated))


@router.patch("/{user_id}/password", response_model=ResponseEnvelope[None])
def update_password(
    user_id: int,
    body: UpdatePasswordRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ResponseEnvelope[None]:
    """Change password. The existing refresh token stops working."""
    get_account_service().update_password(
        db,
        user_id,
        body.old_password,
        body.new_password,
        body.check_new_password,
        caller_id=user.user_id,
    )
    return ResponseEnvelope[None].success("비밀번호 변경 성공!")


@router.delete("/{user_id}", response_model=ResponseEnvelope[None])
def delete_user(
    user_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ResponseEnvelope[None]:
    """Soft delete the caller's account."""
    get_account_service().delete_user(db, user_id, caller_id=user.user_id)
    return ResponseEnvelope[None].success("회원 탈퇴 성공!")


@router.delete("/{user_id}/hard", response_model=ResponseEnvelope[None])
def delete_user_hard(
    user_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ResponseEnvelope[None]:
    """Permanently delete the caller's account."""
    get_account_service().delete_user_hard(db, user_id, caller_id=user.user_id)
    return ResponseEnvelope[None].success("영구 삭제")
