"""
Tests for the audit trail
"""
from datetime import date

from app.models.document_location import LocationType
from app.models.role import Role
from app.services import audit_service


def test_audit_snapshot_is_json_safe(seeded, admin_user):
    entry = audit_service.log_audit(
        seeded,
        actor_id=admin_user.id,
        action="role_updated",
        entity_type="role",
        entity_id=1,
        old_values={"effective": date(2026, 1, 31), "permissions": {"view_roles"}},
        new_values={"location_type": LocationType.WASABI},
    )
    seeded.commit()

    assert entry.old_values == {"effective": "2026-01-31", "permissions": ["view_roles"]}
    assert entry.new_values == {"location_type": "wasabi"}


def test_role_changes_listed_in_order(client, seeded, admin_headers):
    created = client.post("/api/roles", json={"name": "auditor"}, headers=admin_headers).json()["data"]
    client.post(
        f"/api/roles/{created['id']}/permissions/sync",
        json={"permissions": ["view_staff"]},
        headers=admin_headers,
    )

    role = seeded.query(Role).filter(Role.name == "auditor").one()
    entries = audit_service.list_entries(seeded, "role", role.id)

    assert [e.action for e in entries] == ["role_created", "permissions_synced"]
    assert entries[1].new_values["permissions"] == ["view_staff"]
