"""Input format rules for account fields.

Each validator raises ``AppError`` with a format-specific kind when the whole
value does not match its pattern, and returns ``None`` otherwise.
"""

import re

from ourportfolio.exceptions import AppError, ErrorKind

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PASSWORD_PATTERN = re.compile(r"(?=.*[a-zA-Z])(?=.*[0-9])[a-zA-Z0-9]{6,72}")
NICKNAME_PATTERN = re.compile(r"[a-zA-Z가-힣0-9]{1,10}")


def _matches(pattern: re.Pattern[str], value: str | None) -> bool:
    return value is not None and pattern.fullmatch(value) is not None


def validate_email(email: str | None) -> None:
    if not _matches(EMAIL_PATTERN, email):
        raise AppError(ErrorKind.EMAIL_FORMAT)


def validate_password(password: str | None) -> None:
    """Letters and digits only, at least one of each, 6 to 72 characters."""
    if not _matches(PASSWORD_PATTERN, password):
        raise AppError(ErrorKind.PASSWORD_FORMAT)


def validate_nickname(nickname: str | None) -> None:
    """1-10 characters of ASCII letters, Hangul syllables, or digits."""
    if not _matches(NICKNAME_PATTERN, nickname):
        raise AppError(ErrorKind.NICKNAME_FORMAT)
