"""
Tests for tenant isolation of staff members and document locations
"""
import pytest
from fastapi import status

from app.core.errors import ForbiddenError
from app.models.document_location import DocumentLocation
from app.models.staff_member import StaffMember
from app.models.tenant import Company
from app.services import authorization_service


@pytest.fixture
def staff_rows(db, org_a, org_b, company_a1, company_a2):
    rows = {
        "global": StaffMember(staff_code="G-1", full_name="Global Person"),
        "org_a": StaffMember(staff_code="A-1", full_name="Org A Person", org_id=org_a.id),
        "a1": StaffMember(staff_code="A1-1", full_name="A1 Person", org_id=org_a.id, company_id=company_a1.id),
        "a2": StaffMember(staff_code="A2-1", full_name="A2 Person", org_id=org_a.id, company_id=company_a2.id),
        "org_b": StaffMember(staff_code="B-1", full_name="Org B Person", org_id=org_b.id),
    }
    db.add_all(rows.values())
    db.commit()
    return rows


def _codes(response):
    return {s["staff_code"] for s in response.json()["data"]}


def test_company_user_never_sees_other_companies(client, seeded, staff_rows, make_user, auth_headers, company_a1):
    clerk = make_user("clerk@example.com", roles=["hr"], company_id=company_a1.id)

    response = client.get("/api/staff-members?per_page=100", headers=auth_headers(clerk))

    assert response.status_code == status.HTTP_200_OK
    codes = _codes(response)
    assert codes == {"G-1", "A-1", "A1-1"}
    for row in response.json()["data"]:
        assert row["company_id"] in (None, company_a1.id)


def test_org_user_sees_every_company_in_org(client, seeded, staff_rows, make_user, auth_headers, org_a):
    manager = make_user("manager@example.com", roles=["org"], org_id=org_a.id)

    response = client.get("/api/staff-members?per_page=100", headers=auth_headers(manager))

    assert _codes(response) == {"G-1", "A-1", "A1-1", "A2-1"}


def test_admin_sees_everything(client, seeded, staff_rows, admin_headers):
    response = client.get("/api/staff-members?per_page=100", headers=admin_headers)
    assert _codes(response) == {"G-1", "A-1", "A1-1", "A2-1", "B-1"}
    assert response.json()["meta"]["total"] == 5


def test_user_without_tenant_sees_only_global_rows(client, seeded, staff_rows, make_user, auth_headers):
    drifter = make_user("drifter@example.com", roles=["hr"])
    response = client.get("/api/staff-members", headers=auth_headers(drifter))
    assert _codes(response) == {"G-1"}


def test_out_of_tenant_detail_is_not_found(client, seeded, staff_rows, make_user, auth_headers, org_a):
    manager = make_user("manager@example.com", roles=["org"], org_id=org_a.id)
    headers = auth_headers(manager)

    assert client.get(f"/api/staff-members/{staff_rows['org_b'].id}", headers=headers).status_code == 404
    assert client.get(f"/api/staff-members/{staff_rows['a2'].id}", headers=headers).status_code == 200


def test_create_stamps_creator_tenant(client, seeded, make_user, auth_headers, company_a1):
    clerk = make_user("clerk@example.com", roles=["hr"], company_id=company_a1.id)

    response = client.post(
        "/api/staff-members",
        json={"staff_code": "NEW-1", "full_name": "New Hire"},
        headers=auth_headers(clerk),
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()["data"]
    assert data["company_id"] == company_a1.id
    assert data["org_id"] == company_a1.org_id


def test_create_into_other_tenant_forbidden(client, seeded, make_user, auth_headers, org_a, org_b):
    manager = make_user("manager@example.com", roles=["org"], org_id=org_a.id)

    response = client.post(
        "/api/staff-members",
        json={"staff_code": "X-1", "full_name": "Smuggled", "org_id": org_b.id},
        headers=auth_headers(manager),
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_duplicate_staff_code_in_org_conflicts(client, seeded, make_user, auth_headers, org_a):
    manager = make_user("manager@example.com", roles=["org"], org_id=org_a.id)
    payload = {"staff_code": "DUP-1", "full_name": "First"}

    assert client.post("/api/staff-members", json=payload, headers=auth_headers(manager)).status_code == 201
    response = client.post("/api/staff-members", json=payload, headers=auth_headers(manager))
    assert response.status_code == status.HTTP_409_CONFLICT


def test_admin_create_fills_org_from_company(client, seeded, admin_headers, company_a2):
    response = client.post(
        "/api/staff-members",
        json={"staff_code": "ADM-1", "full_name": "Placed", "company_id": company_a2.id},
        headers=admin_headers,
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["data"]["org_id"] == company_a2.org_id


def test_delete_respects_tenant(client, seeded, staff_rows, make_user, auth_headers, org_a, org_b):
    manager = make_user("manager@example.com", roles=["org"], org_id=org_a.id)
    headers = auth_headers(manager)

    assert client.delete(f"/api/staff-members/{staff_rows['org_b'].id}", headers=headers).status_code == 404
    assert client.delete(f"/api/staff-members/{staff_rows['a1'].id}", headers=headers).status_code == 200


def test_company_role_cannot_delete_staff(client, seeded, staff_rows, make_user, auth_headers, company_a1):
    lead = make_user("lead@example.com", roles=["company"], company_id=company_a1.id)
    response = client.delete(f"/api/staff-members/{staff_rows['a1'].id}", headers=auth_headers(lead))
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_apply_tenant_requires_tenant_for_non_admin(seeded, make_user):
    drifter = make_user("drifter@example.com", roles=["hr"])
    with pytest.raises(ForbiddenError):
        authorization_service.apply_tenant(seeded, StaffMember(staff_code="Z", full_name="Z"), drifter)


def test_document_locations_scoped_and_credentials_hidden(client, seeded, make_user, auth_headers, org_a, org_b):
    seeded.add_all([
        DocumentLocation(name="Shared disk", location_type="local", root_path="/srv/docs"),
        DocumentLocation(
            name="Acme bucket",
            location_type="wasabi",
            bucket="acme-docs",
            region="eu-central-1",
            access_key="AKIA-ACME",
            secret_key="very-secret",
            org_id=org_a.id,
        ),
        DocumentLocation(name="Globex bucket", location_type="aws", bucket="globex", org_id=org_b.id),
    ])
    seeded.commit()
    manager = make_user("manager@example.com", roles=["org"], org_id=org_a.id)

    response = client.get("/api/document-locations", headers=auth_headers(manager))

    assert response.status_code == status.HTTP_200_OK
    locations = response.json()["data"]
    assert {loc["name"] for loc in locations} == {"Acme bucket", "Shared disk"}
    for loc in locations:
        assert "secret_key" not in loc
        assert "access_key" not in loc


def test_document_location_check_local(client, seeded, admin_headers, tmp_path):
    location = DocumentLocation(name="Temp", location_type="local", root_path=str(tmp_path))
    seeded.add(location)
    seeded.commit()

    response = client.get(f"/api/document-locations/{location.id}/check", headers=admin_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"]["ok"] is True


def test_document_location_check_misconfigured(client, seeded, admin_headers):
    location = DocumentLocation(name="Broken", location_type="aws")
    seeded.add(location)
    seeded.commit()

    response = client.get(f"/api/document-locations/{location.id}/check", headers=admin_headers)

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert "bucket" in response.json()["errors"]


def test_company_only_rows_stay_in_their_organization(client, seeded, make_user, auth_headers, org_a, org_b, company_a1):
    globex_company = Company(name="Globex Retail", org_id=org_b.id)
    seeded.add(globex_company)
    seeded.commit()
    ours = StaffMember(staff_code="A1-X", full_name="Ours", company_id=company_a1.id)
    other = StaffMember(staff_code="B1-X", full_name="Other", company_id=globex_company.id)
    seeded.add_all([ours, other])
    seeded.commit()
    manager = make_user("manager@example.com", roles=["org"], org_id=org_a.id)

    response = client.get("/api/staff-members?per_page=100", headers=auth_headers(manager))
    assert _codes(response) == {"A1-X"}

    detail = client.get(f"/api/staff-members/{other.id}", headers=auth_headers(manager))
    assert detail.status_code == status.HTTP_404_NOT_FOUND

    rows = authorization_service.scope_query(seeded, seeded.query(StaffMember), StaffMember, manager).all()
    assert [row.full_name for row in rows] == ["Ours"]
