"""Authentication dependencies for FastAPI routes."""

from dataclasses import dataclass

from fastapi import HTTPException, Request

from ourportfolio.services.jwt import ACCESS, get_jwt_service
from ourportfolio.services.token import ACCESS_TOKEN_HEADER


@dataclass
class CurrentUser:
    """Authenticated caller identity taken from the access token."""

    user_id: int
    email: str


def extract_access_token(request: Request) -> str | None:
    """Read the access token from the ACCESSTOKEN header, falling back to a Bearer header."""
    token = request.headers.get(ACCESS_TOKEN_HEADER)
    if token and token.startswith("Bearer "):
        token = token[7:]
    if token:
        return token

    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header[7:]
    return None


def get_current_user(request: Request) -> CurrentUser:
    """Validate the access token by signature and expiry. Raises 401 if missing or invalid."""
    token = extract_access_token(request)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    payload = get_jwt_service().decode_token(token, token_type=ACCESS)
    if not payload:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    return CurrentUser(user_id=int(payload["userId"]), email=payload["sub"])
