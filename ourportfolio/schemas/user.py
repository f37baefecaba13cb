"""Pydantic schemas for user account endpoints."""

from pydantic import BaseModel


class SignupRequest(BaseModel):
    email: str
    password: str
    nickname: str


class LoginRequest(BaseModel):
    email: str
    password: str


class EmailCheckRequest(BaseModel):
    email: str


class UpdatePasswordRequest(BaseModel):
    old_password: str
    new_password: str
    check_new_password: str


class UserResponse(BaseModel):
    id: int
    email: str
    nickname: str
    profile_image: str | None = None
    kakao_id: str | None = None
    naver_id: str | None = None

    model_config = {"from_attributes": True}
