"""Application error taxonomy.

Every expected failure is raised as ``AppError`` carrying an ``ErrorKind``.
The kind fixes both the HTTP status and the user-facing message, so the
exception handlers in ``main`` can render a uniform response envelope.
"""

from enum import Enum


class ErrorKind(Enum):
    """Symbolic error kinds with their default status code and message."""

    # Input format
    EMAIL_FORMAT = (400, "이메일 형식이 올바르지 않습니다.")
    PASSWORD_FORMAT = (400, "비밀번호는 영문과 숫자를 포함한 6~72자여야 합니다.")
    NICKNAME_FORMAT = (400, "닉네임은 한글, 영문, 숫자로 1~10자여야 합니다.")

    # Accounts
    DUPLICATED_EMAIL = (409, "이미 사용 중인 이메일입니다.")
    DUPLICATED_NICKNAME = (409, "이미 사용 중인 닉네임입니다.")
    NOT_FOUND_USER = (404, "사용자를 찾을 수 없습니다.")
    USER_IS_DELETED = (403, "탈퇴한 회원입니다.")
    BAD_PASSWORD = (401, "비밀번호가 일치하지 않습니다.")
    UNAUTHORIZED = (403, "권한이 없습니다.")
    PRESENT_PASSWORD = (400, "현재 비밀번호가 일치하지 않습니다.")
    COINCIDE_PASSWORD = (400, "새 비밀번호와 비밀번호 확인이 일치하지 않습니다.")

    # Tokens
    INVALID_TOKEN = (401, "만료되었거나 유효하지 않은 토큰입니다.")

    # Storage
    STORAGE_FAILURE = (400, "파일 업로드에 실패했습니다.")
    UNSUPPORTED_IMAGE = (400, "지원하지 않는 이미지 형식이거나 용량을 초과했습니다.")

    # Content
    NOT_FOUND_PORTFOLIO = (404, "포트폴리오를 찾을 수 없습니다.")
    NOT_FOUND_PROJECT = (404, "프로젝트를 찾을 수 없습니다.")

    @property
    def status_code(self) -> int:
        return self.value[0]

    @property
    def message(self) -> str:
        return self.value[1]


class AppError(Exception):
    """Expected, caller-recoverable application error."""

    def __init__(self, kind: ErrorKind, detail: str | None = None) -> None:
        self.kind = kind
        self.detail = detail or kind.message
        super().__init__(self.detail)

    @property
    def status_code(self) -> int:
        return self.kind.status_code
