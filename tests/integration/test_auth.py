import re
from datetime import datetime, timedelta, timezone

import jwt

from vhr.db import models
from vhr.utils.settings import get_settings


def _otp_from(message) -> str:
    return re.search(r"\b\d{6}\b", message["text"]).group(0)


def test_signup_login_and_me(client):
    resp = client.post(
        "/api/auth/signup",
        json={"name": "Ada", "email": "Ada@Example.com", "password": "secret123"},
    )
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["user"]["email"] == "ada@example.com"
    assert body["user"]["role"] == "user"
    assert "password" not in body["user"]

    claims = jwt.decode(body["token"], get_settings().jwt_secret, algorithms=["HS256"])
    assert claims["id"] == body["user"]["id"]
    assert claims["role"] == "user"

    login = client.post("/api/auth/login", json={"email": "ada@example.com", "password": "secret123"})
    assert login.status_code == 200
    token = login.json()["token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["data"]["name"] == "Ada"


def test_signup_duplicate_email(client, user_factory):
    user_factory("taken@example.com")
    resp = client.post(
        "/api/auth/signup",
        json={"name": "Other", "email": "taken@example.com", "password": "secret123"},
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Email already exists"


def test_signup_validation_error_is_400(client):
    resp = client.post("/api/auth/signup", json={"name": "x", "email": "not-an-email", "password": "secret123"})
    assert resp.status_code == 400
    assert "email" in resp.json()["detail"]


def test_login_wrong_password(client, user_factory):
    user_factory("ada@example.com")
    resp = client.post("/api/auth/login", json={"email": "ada@example.com", "password": "nope-nope"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid credentials"


def test_login_deleted_user_rejected(client, user_factory):
    user_factory("gone@example.com", is_delete=True)
    resp = client.post("/api/auth/login", json={"email": "gone@example.com", "password": "secret123"})
    assert resp.status_code == 401


def test_auth_failures(client, user_factory, auth_headers):
    assert client.get("/api/auth/me").json()["detail"] == "Unauthorized"
    assert client.get("/api/auth/me", headers={"Authorization": "Token abc"}).status_code == 401

    bad = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert bad.status_code == 401
    assert bad.json()["detail"] == "Invalid token"

    deleted = user_factory("gone@example.com", is_delete=True)
    resp = client.get("/api/auth/me", headers=auth_headers(deleted))
    assert resp.status_code == 403
    assert resp.json()["detail"] == "Account has been deactivated"


def test_token_for_missing_user(client):
    token = jwt.encode({"id": 9999, "role": "user"}, get_settings().jwt_secret, algorithm="HS256")
    resp = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "User not found"


def test_role_guard(client, user_headers):
    resp = client.get("/api/users", headers=user_headers)
    assert resp.status_code == 403
    assert resp.json()["detail"] == "Forbidden: insufficient role"


def test_forgot_and_reset_password(client, outbox, user_factory):
    user_factory("ada@example.com")
    resp = client.post("/api/auth/forgot-password", json={"email": "ada@example.com"})
    assert resp.status_code == 200
    assert resp.json()["message"] == "OTP sent to your email"
    assert len(outbox) == 1
    assert outbox[0]["to"] == "ada@example.com"
    otp = _otp_from(outbox[0])

    wrong = "000000" if otp != "000000" else "111111"
    resp = client.post(
        "/api/auth/reset-password",
        json={"email": "ada@example.com", "otp": wrong, "newPassword": "brand-new-pw"},
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid or expired OTP"

    resp = client.post(
        "/api/auth/reset-password",
        json={"email": "ada@example.com", "otp": otp, "newPassword": "brand-new-pw"},
    )
    assert resp.status_code == 200
    assert resp.json()["message"] == "Password reset successfully"

    assert client.post("/api/auth/login", json={"email": "ada@example.com", "password": "secret123"}).status_code == 401
    assert client.post("/api/auth/login", json={"email": "ada@example.com", "password": "brand-new-pw"}).status_code == 200

    # the code is single-use
    again = client.post(
        "/api/auth/reset-password",
        json={"email": "ada@example.com", "otp": otp, "newPassword": "another-pw"},
    )
    assert again.status_code == 400


def test_reset_with_expired_otp(client, outbox, user_factory, db_session):
    user = user_factory("ada@example.com")
    client.post("/api/auth/forgot-password", json={"email": "ada@example.com"})
    otp = _otp_from(outbox[0])

    db_session.expire_all()
    row = db_session.get(models.User, user.id)
    row.otp_expiry = datetime.now(timezone.utc) - timedelta(minutes=1)
    db_session.commit()

    resp = client.post(
        "/api/auth/reset-password",
        json={"email": "ada@example.com", "otp": otp, "newPassword": "brand-new-pw"},
    )
    assert resp.status_code == 400


def test_forgot_password_unknown_email(client, outbox):
    resp = client.post("/api/auth/forgot-password", json={"email": "nobody@example.com"})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "User not found"
    assert outbox == []
