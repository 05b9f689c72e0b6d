"""
Tests for the access-control seed (catalog upsert, system roles, legacy aliases)
"""
from app.db import access_catalog
from app.db.init_db import bootstrap_initial_admin, seed_access_control
from app.models.permission import Permission, Resource
from app.models.role import Role
from app.models.user import User


def _role(db, name):
    return db.query(Role).filter(Role.name == name).one()


def test_seed_creates_catalog(db):
    summary = seed_access_control(db)

    assert summary["resources_created"] == len(access_catalog.RESOURCES)
    assert summary["permissions_created"] == len(access_catalog.PERMISSIONS)
    assert summary["roles_created"] == (
        len(access_catalog.SYSTEM_ROLES) + len(access_catalog.LEGACY_ROLE_ALIASES)
    )

    view_staff = db.query(Permission).filter(Permission.name == "view_staff").one()
    assert view_staff.resource == "staff"
    assert view_staff.action == "view"

    generate = db.query(Permission).filter(Permission.name == "generate_payslips").one()
    assert (generate.resource, generate.action) == ("payroll", "generate")


def test_seed_is_idempotent(db):
    seed_access_control(db)
    permission_ids = {p.name: p.id for p in db.query(Permission).all()}
    role_ids = {r.name: r.id for r in db.query(Role).all()}
    resource_count = db.query(Resource).count()

    summary = seed_access_control(db)

    assert summary == {"resources_created": 0, "permissions_created": 0, "roles_created": 0}
    assert {p.name: p.id for p in db.query(Permission).all()} == permission_ids
    assert {r.name: r.id for r in db.query(Role).all()} == role_ids
    assert db.query(Resource).count() == resource_count


def test_system_role_levels(seeded):
    levels = {name: _role(seeded, name).hierarchy_level for name in ("admin", "org", "company", "hr", "user")}
    assert levels == {"admin": 1, "org": 2, "company": 3, "hr": 4, "user": 5}
    assert all(_role(seeded, name).is_system for name in levels)


def test_admin_role_holds_every_permission(seeded):
    assert len(_role(seeded, "admin").permissions) == seeded.query(Permission).count()


def test_user_role_is_self_service_only(seeded):
    assert set(_role(seeded, "user").permission_names) == {
        "view_time_off",
        "create_time_off",
        "view_attendance",
        "view_payslips",
        "view_announcements",
    }


def test_legacy_aliases_copy_canonical_permissions(seeded):
    for legacy, canonical in access_catalog.LEGACY_ROLE_ALIASES.items():
        legacy_role = _role(seeded, legacy)
        canonical_role = _role(seeded, canonical)
        assert legacy_role.is_system
        assert legacy_role.hierarchy_level == canonical_role.hierarchy_level
        assert legacy_role.permission_names == canonical_role.permission_names


def test_legacy_alias_is_a_snapshot_not_a_link(seeded):
    hr = _role(seeded, "hr")
    hr.permissions = []
    seeded.commit()

    assert "view_staff" in _role(seeded, "hr_officer").permission_names


def test_reseed_resets_system_roles_but_keeps_custom_roles(seeded):
    custom = Role(name="auditor", hierarchy_level=50)
    custom.permissions = [seeded.query(Permission).filter(Permission.name == "view_staff").one()]
    seeded.add(custom)
    hr = _role(seeded, "hr")
    hr.permissions = []
    seeded.commit()

    seed_access_control(seeded)

    assert "view_staff" in _role(seeded, "hr").permission_names
    assert _role(seeded, "auditor").permission_names == ["view_staff"]
    assert not _role(seeded, "auditor").is_system


def test_bootstrap_initial_admin_runs_once(seeded):
    user = bootstrap_initial_admin(seeded, email="root@example.com", password="password123")
    assert user is not None
    assert user.role_names == ["admin"]

    assert bootstrap_initial_admin(seeded, email="other@example.com", password="password123") is None
    assert seeded.query(User).count() == 1
