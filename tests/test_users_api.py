"""Tests for user account endpoints and the response envelope."""

import io
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from ourportfolio.models.user import User


def _signup(client: TestClient, email: str = "a@b.com", password: str = "abc123", nickname: str = "nick1"):
    return client.post("/api/users/signup", json={"email": email, "password": password, "nickname": nickname})


class TestSignupApi:
    """Tests for POST /api/users/signup."""

    def test_signup_success(self, client: TestClient, db_session: Session):
        response = _signup(client)
        assert response.status_code == 200
        body = response.json()
        assert body == {"status_code": 200, "message": "회원가입 성공!", "data": None}
        assert "ACCESSTOKEN" not in response.headers

        user = db_session.query(User).filter(User.email == "a@b.com").one()
        assert user.password_hash != "abc123"

    def test_signup_duplicate_nickname(self, client: TestClient):
        _signup(client)
        response = _signup(client)
        assert response.status_code == 409
        body = response.json()
        assert body["status_code"] == 409
        assert body["message"] == "이미 사용 중인 닉네임입니다."
        assert body["data"] is None

    def test_signup_bad_password(self, client: TestClient):
        response = _signup(client, password="abcdef")
        assert response.status_code == 400
        assert response.json()["message"] == "비밀번호는 영문과 숫자를 포함한 6~72자여야 합니다."

    def test_signup_over_length_password(self, client: TestClient):
        response = _signup(client, password="a1" * 40)
        assert response.status_code == 400
        assert response.json()["status_code"] == 400

    def test_signup_missing_field(self, client: TestClient):
        response = client.post("/api/users/signup", json={"email": "a@b.com"})
        assert response.status_code == 422
        body = response.json()
        assert body["status_code"] == 422
        assert isinstance(body["data"], list)


class TestLoginApi:
    """Tests for POST /api/users/login."""

    def test_login_sets_token_headers(self, client: TestClient):
        _signup(client)
        response = client.post("/api/users/login", json={"email": "a@b.com", "password": "abc123"})
        assert response.status_code == 200
        assert response.json()["message"] == "로그인 성공!"
        assert response.headers["ACCESSTOKEN"]
        assert response.headers["REFRESHTOKEN"]
        assert "set-cookie" not in response.headers

    def test_login_wrong_password(self, client: TestClient):
        _signup(client)
        response = client.post("/api/users/login", json={"email": "a@b.com", "password": "wrongpw"})
        assert response.status_code == 401
        assert response.json()["message"] == "비밀번호가 일치하지 않습니다."
        assert "ACCESSTOKEN" not in response.headers

    def test_login_over_length_password(self, client: TestClient):
        _signup(client)
        response = client.post("/api/users/login", json={"email": "a@b.com", "password": "a1" * 40})
        assert response.status_code == 401
        assert response.json()["message"] == "비밀번호가 일치하지 않습니다."

    def test_login_unknown_user(self, client: TestClient):
        response = client.post("/api/users/login", json={"email": "nobody@b.com", "password": "abc123"})
        assert response.status_code == 404

    def test_login_soft_deleted(self, client: TestClient, test_user: dict):
        client.delete(f"/api/users/{test_user['user_id']}", headers=test_user["headers"])
        response = client.post("/api/users/login", json={"email": test_user["email"], "password": "password123"})
        assert response.status_code == 403
        assert response.json()["message"] == "탈퇴한 회원입니다."


class TestTokenApi:
    """Tests for reissue, logout and access-token checks."""

    def test_reissue_returns_access_header_only(self, client: TestClient, test_user: dict):
        response = client.post("/api/users/token-reissue", headers={"REFRESHTOKEN": test_user["refresh_token"]})
        assert response.status_code == 200
        assert response.headers["ACCESSTOKEN"]
        assert "REFRESHTOKEN" not in response.headers

        again = client.post("/api/users/token-reissue", headers={"REFRESHTOKEN": test_user["refresh_token"]})
        assert again.status_code == 200

    def test_reissue_without_header(self, client: TestClient):
        response = client.post("/api/users/token-reissue")
        assert response.status_code == 401
        assert response.json()["message"] == "만료되었거나 유효하지 않은 토큰입니다."

    def test_logout_revokes_refresh_token(self, client: TestClient, test_user: dict):
        response = client.post("/api/users/logout", headers=test_user["headers"])
        assert response.status_code == 200

        response = client.post("/api/users/token-reissue", headers={"REFRESHTOKEN": test_user["refresh_token"]})
        assert response.status_code == 401

    def test_missing_access_token(self, client: TestClient, test_user: dict):
        response = client.delete(f"/api/users/{test_user['user_id']}")
        assert response.status_code == 401
        assert response.json()["status_code"] == 401

    def test_bearer_header_accepted(self, client: TestClient, test_user: dict):
        response = client.post(
            "/api/users/logout", headers={"Authorization": f"Bearer {test_user['access_token']}"}
        )
        assert response.status_code == 200

    def test_refresh_token_is_not_an_access_token(self, client: TestClient, test_user: dict):
        response = client.post("/api/users/logout", headers={"ACCESSTOKEN": test_user["refresh_token"]})
        assert response.status_code == 401


class TestUserProfileApi:
    """Tests for reading and updating a profile."""

    def test_get_user(self, client: TestClient, test_user: dict):
        response = client.get(f"/api/users/{test_user['user_id']}")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["email"] == test_user["email"]
        assert data["nickname"] == test_user["nickname"]
        assert data["profile_image"] is None
        assert "password_hash" not in data

    def test_get_unknown_user(self, client: TestClient):
        response = client.get("/api/users/999")
        assert response.status_code == 404
        assert response.json()["message"] == "사용자를 찾을 수 없습니다."

    def test_update_nickname_and_image(self, client: TestClient, test_user: dict, upload_dir):
        response = client.patch(
            f"/api/users/{test_user['user_id']}",
            data={"nickname": "바뀐닉"},
            files={"image": ("me.png", io.BytesIO(b"\x89PNG data"), "image/png")},
            headers=test_user["headers"],
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["nickname"] == "바뀐닉"
        assert data["profile_image"].startswith("/uploads/images/")
        assert data["profile_image"].endswith(".png")
        assert len(list((upload_dir / "images").iterdir())) == 1

    def test_update_rejects_non_image(self, client: TestClient, test_user: dict):
        response = client.patch(
            f"/api/users/{test_user['user_id']}",
            data={"nickname": "바뀐닉"},
            files={"image": ("run.exe", io.BytesIO(b"MZ"), "application/octet-stream")},
            headers=test_user["headers"],
        )
        assert response.status_code == 400
        assert "Unsupported image type" in response.json()["message"]

    def test_update_storage_failure(self, client: TestClient, test_user: dict):
        """A failed image write is reported in the envelope and the profile is unchanged."""
        with patch("pathlib.Path.write_bytes", side_effect=OSError("disk full")):
            response = client.patch(
                f"/api/users/{test_user['user_id']}",
                data={"nickname": "바뀐닉"},
                files={"image": ("me.png", io.BytesIO(b"\x89PNG data"), "image/png")},
                headers=test_user["headers"],
            )
        assert response.status_code == 400
        body = response.json()
        assert body["status_code"] == 400
        assert body["message"] == "파일 업로드에 실패했습니다."

        profile = client.get(f"/api/users/{test_user['user_id']}").json()["data"]
        assert profile["nickname"] == test_user["nickname"]
        assert profile["profile_image"] is None

    def test_update_other_user(self, client: TestClient, test_user: dict, other_user: dict):
        response = client.patch(
            f"/api/users/{test_user['user_id']}",
            data={"nickname": "hijack"},
            headers=other_user["headers"],
        )
        assert response.status_code == 403
        assert response.json()["message"] == "권한이 없습니다."

    def test_change_password(self, client: TestClient, test_user: dict):
        response = client.patch(
            f"/api/users/{test_user['user_id']}/password",
            json={"old_password": "password123", "new_password": "newpass456", "check_new_password": "newpass456"},
            headers=test_user["headers"],
        )
        assert response.status_code == 200

        login = client.post("/api/users/login", json={"email": test_user["email"], "password": "newpass456"})
        assert login.status_code == 200

    def test_change_password_mismatch(self, client: TestClient, test_user: dict):
        response = client.patch(
            f"/api/users/{test_user['user_id']}/password",
            json={"old_password": "password123", "new_password": "newpass456", "check_new_password": "other456"},
            headers=test_user["headers"],
        )
        assert response.status_code == 400
        assert response.json()["message"] == "새 비밀번호와 비밀번호 확인이 일치하지 않습니다."


class TestEmailCheckApi:
    """Tests for POST /api/users/email-check."""

    def test_email_available(self, client: TestClient):
        response = client.post("/api/users/email-check", json={"email": "free@example.com"})
        assert response.status_code == 200
        assert response.json()["data"] is True

    def test_email_taken(self, client: TestClient, test_user: dict):
        response = client.post("/api/users/email-check", json={"email": test_user["email"]})
        assert response.status_code == 409


class TestDeleteApi:
    """Tests for soft and hard delete endpoints."""

    def test_soft_delete(self, client: TestClient, test_user: dict):
        response = client.delete(f"/api/users/{test_user['user_id']}", headers=test_user["headers"])
        assert response.status_code == 200
        assert response.json()["message"] == "회원 탈퇴 성공!"

        # Still readable by id
        assert client.get(f"/api/users/{test_user['user_id']}").status_code == 200

    def test_hard_delete(self, client: TestClient, test_user: dict):
        response = client.delete(f"/api/users/{test_user['user_id']}/hard", headers=test_user["headers"])
        assert response.status_code == 200
        assert client.get(f"/api/users/{test_user['user_id']}").status_code == 404

    def test_hard_delete_other_user(self, client: TestClient, test_user: dict, other_user: dict):
        response = client.delete(f"/api/users/{test_user['user_id']}/hard", headers=other_user["headers"])
        assert response.status_code == 403


class TestHealthCheck:
    """Tests for health check endpoint."""

    def test_health_check(self, client: TestClient):
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["app"] == "ourportfolio"
        assert response.headers["X-Content-Type-Options"] == "nosniff"
