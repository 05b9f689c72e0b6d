"""
Tests for authentication endpoints
"""
import pytest
from fastapi import status

from app.core.security import create_access_token, validate_password


def test_login_success_returns_roles_and_permissions(client, seeded, make_user):
    make_user("hr@example.com", roles=["hr"], password="hrpass123")

    response = client.post("/api/auth/login", json={"email": "hr@example.com", "password": "hrpass123"})

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert data["token_type"] == "bearer"
    assert data["access_token"]
    assert data["user"]["roles_list"] == ["hr"]
    assert "approve_time_off" in data["user"]["permissions_list"]


def test_login_wrong_password(client, seeded, make_user):
    make_user("hr@example.com", roles=["hr"], password="hrpass123")

    response = client.post("/api/auth/login", json={"email": "hr@example.com", "password": "nope"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["success"] is False


def test_login_unknown_email(client, seeded):
    response = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "whatever"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_login_inactive_user(client, seeded, make_user):
    make_user("gone@example.com", roles=["user"], password="password123", is_active=False)

    response = client.post("/api/auth/login", json={"email": "gone@example.com", "password": "password123"})

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_login_missing_fields(client, seeded):
    response = client.post("/api/auth/login", json={"email": "hr@example.com"})

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert "password" in response.json()["errors"]


def test_me_with_token_from_login(client, seeded, make_user):
    make_user("staff@example.com", roles=["staff"], password="password123")
    token = client.post(
        "/api/auth/login",
        json={"email": "staff@example.com", "password": "password123"},
    ).json()["data"]["access_token"]

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()["data"]
    assert data["email"] == "staff@example.com"
    assert data["primary_role"] == "staff"
    assert "view_payslips" in data["permissions_list"]


def test_me_with_invalid_token(client, seeded):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_token_for_deactivated_user_rejected(client, seeded, make_user, auth_headers, db):
    user = make_user("later@example.com", roles=["user"])
    headers = auth_headers(user)
    user.is_active = False
    db.commit()

    response = client.get("/api/auth/me", headers=headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_expired_token_rejected(client, seeded, make_user):
    user = make_user("old@example.com", roles=["user"])
    token = create_access_token({"sub": str(user.id)}, expires_minutes=-1)

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_token_with_non_numeric_subject_rejected(client, seeded):
    token = create_access_token({"sub": "admin@example.com"})

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.parametrize("password", [None, "", "   short  ", "x" * 73])
def test_validate_password_rejects(password):
    with pytest.raises(ValueError):
        validate_password(password)


def test_validate_password_strips_whitespace():
    assert validate_password("  longenough  ") == "longenough"
