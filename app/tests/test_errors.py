"""
Tests for the error envelope and typed application errors
"""
from fastapi import status

from app.core.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from app.core.responses import pagination_meta


def test_typed_error_status_codes():
    assert ValidationError().status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert NotFoundError().status_code == status.HTTP_404_NOT_FOUND
    assert ForbiddenError().status_code == status.HTTP_403_FORBIDDEN
    assert ConflictError().status_code == status.HTTP_409_CONFLICT


def test_error_carries_field_map():
    err = ValidationError("Validation failed", errors={"name": ["required"]})
    assert err.message == "Validation failed"
    assert err.errors == {"name": ["required"]}


def test_pagination_meta():
    assert pagination_meta(total=31, page=2, per_page=15) == {
        "current_page": 2,
        "last_page": 3,
        "per_page": 15,
        "total": 31,
    }
    assert pagination_meta(total=0, page=1, per_page=15)["last_page"] == 1


def test_not_found_envelope(client, seeded, admin_headers):
    response = client.get("/api/roles/123456", headers=admin_headers)

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {
        "success": False,
        "data": None,
        "message": "Role with id 123456 not found",
        "path": "/api/roles/123456",
    }


def test_validation_envelope_for_bad_path_param(client, seeded, admin_headers):
    response = client.get("/api/roles/not-a-number", headers=admin_headers)

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    body = response.json()
    assert body["success"] is False
    assert "role_id" in body["errors"]
