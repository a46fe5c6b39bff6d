"""
Organization, department and manager endpoint tests.

Verifies that:
- Any principal may read organizations and departments; only admins write
- Department views populate their organization and staff
- Deleting a parent leaves dangling references instead of cascading
- Manager emails are unique
"""

import pytest

from helpers import (
    admin_token,
    auth,
    create_department,
    create_manager,
    create_org,
    staff_setup,
    unique_email,
)


# ---------------------------------------------------------------------------
# Organizations
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_organization_crud(client):
    token = await admin_token(client)
    org = await create_org(client, token, "Alpha")
    assert org["org_email"] == "info@example.com"
    assert org["departments"] == []

    resp = await client.put(
        f"/api/organizations/{org['id']}", json={"org_contact": "+999"}, headers=auth(token)
    )
    assert resp.status_code == 200
    assert resp.json()["org_contact"] == "+999"
    assert resp.json()["org_name"] == "Alpha"

    resp = await client.delete(f"/api/organizations/{org['id']}", headers=auth(token))
    assert resp.status_code == 200
    assert resp.json() == {"message": "Organization deleted"}

    resp = await client.get(f"/api/organizations/{org['id']}", headers=auth(token))
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_organizations_listed_newest_first_with_departments(client):
    token = await admin_token(client)
    first = await create_org(client, token, "First")
    second = await create_org(client, token, "Second")
    await create_department(client, token, first["id"], "Wiring")

    resp = await client.get("/api/organizations", headers=auth(token))
    assert resp.status_code == 200
    orgs = resp.json()
    assert [o["id"] for o in orgs] == [second["id"], first["id"]]
    assert [d["dept_name"] for d in orgs[1]["departments"]] == ["Wiring"]


@pytest.mark.asyncio
async def test_organizations_require_token(client):
    resp = await client.get("/api/organizations")
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_employee_can_read_but_not_write_organizations(client):
    setup = await staff_setup(client)
    headers = auth(setup["employee_token"])

    resp = await client.get(f"/api/organizations/{setup['org']['id']}", headers=headers)
    assert resp.status_code == 200

    resp = await client.post("/api/organizations", json={"org_name": "Nope"}, headers=headers)
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_scoped_manager_cannot_create_organization(client):
    setup = await staff_setup(client)
    resp = await client.post(
        "/api/organizations", json={"org_name": "Nope"}, headers=auth(setup["manager_token"])
    )
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_admin_manager_can_create_organization(client):
    token = await admin_token(client)
    _, admin_manager_token = await create_manager(client, token, role="admin")
    org = await create_org(client, admin_manager_token, "Managed")
    assert org["org_name"] == "Managed"


@pytest.mark.asyncio
async def test_blank_organization_name_rejected(client):
    token = await admin_token(client)
    resp = await client.post("/api/organizations", json={"org_name": "  "}, headers=auth(token))
    assert resp.status_code == 400


# ---------------------------------------------------------------------------
# Departments
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_department_filter_by_organization(client):
    token = await admin_token(client)
    org_a = await create_org(client, token, "A")
    org_b = await create_org(client, token, "B")
    dept_a = await create_department(client, token, org_a["id"], "Alpha Ops")
    await create_department(client, token, org_b["id"], "Beta Ops")

    resp = await client.get(
        "/api/departments", params={"organization": org_a["id"]}, headers=auth(token)
    )
    assert resp.status_code == 200
    depts = resp.json()
    assert [d["id"] for d in depts] == [dept_a["id"]]
    assert depts[0]["organization"]["org_name"] == "A"


@pytest.mark.asyncio
async def test_department_detail_lists_staff(client):
    setup = await staff_setup(client)
    resp = await client.get(
        f"/api/departments/{setup['dept']['id']}", headers=auth(setup["admin_token"])
    )
    assert resp.status_code == 200
    body = resp.json()
    assert [m["id"] for m in body["managers"]] == [setup["manager"]["id"]]
    assert [e["id"] for e in body["employees"]] == [setup["employee"]["id"]]


@pytest.mark.asyncio
async def test_department_move_to_other_organization(client):
    token = await admin_token(client)
    org_a = await create_org(client, token, "A")
    org_b = await create_org(client, token, "B")
    dept = await create_department(client, token, org_a["id"])

    resp = await client.put(
        f"/api/departments/{dept['id']}", json={"organization": org_b["id"]}, headers=auth(token)
    )
    assert resp.status_code == 200
    assert resp.json()["organization_id"] == org_b["id"]
    assert resp.json()["organization"]["org_name"] == "B"


@pytest.mark.asyncio
async def test_deleting_organization_leaves_dangling_department(client):
    token = await admin_token(client)
    org = await create_org(client, token)
    dept = await create_department(client, token, org["id"])

    await client.delete(f"/api/organizations/{org['id']}", headers=auth(token))

    resp = await client.get(f"/api/departments/{dept['id']}", headers=auth(token))
    assert resp.status_code == 200
    assert resp.json()["organization_id"] == org["id"]
    assert resp.json()["organization"] is None


@pytest.mark.asyncio
async def test_deleting_department_leaves_employees(client):
    setup = await staff_setup(client)
    token = setup["admin_token"]

    resp = await client.delete(f"/api/departments/{setup['dept']['id']}", headers=auth(token))
    assert resp.json() == {"message": "Department deleted"}

    resp = await client.get(f"/api/employees/{setup['employee']['id']}", headers=auth(token))
    assert resp.status_code == 200
    assert resp.json()["department_id"] == setup["dept"]["id"]
    assert resp.json()["department"] is None


@pytest.mark.asyncio
async def test_unknown_department_returns_404(client):
    token = await admin_token(client)
    resp = await client.get(
        "/api/departments/00000000-0000-0000-0000-000000000000", headers=auth(token)
    )
    assert resp.status_code == 404
    assert resp.json()["detail"]["code"] == "NOT_FOUND"


# ---------------------------------------------------------------------------
# Managers
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_manager_email_must_be_unique(client):
    token = await admin_token(client)
    manager, _ = await create_manager(client, token)

    resp = await client.post(
        "/api/managers",
        json={"name": "Dup", "email": manager["email"].upper(), "password": "secret1"},
        headers=auth(token),
    )
    assert resp.status_code == 400
    assert resp.json()["detail"]["message"] == "Email already registered"


@pytest.mark.asyncio
async def test_manager_response_hides_password(client):
    token = await admin_token(client)
    manager, _ = await create_manager(client, token)
    assert "password" not in manager
    assert "password_hash" not in manager


@pytest.mark.asyncio
async def test_managers_listed_by_department(client):
    token = await admin_token(client)
    org = await create_org(client, token)
    dept_a = await create_department(client, token, org["id"], "A")
    dept_b = await create_department(client, token, org["id"], "B")
    in_a, _ = await create_manager(client, token, dept_a["id"])
    await create_manager(client, token, dept_b["id"])

    resp = await client.get("/api/managers", params={"department": dept_a["id"]}, headers=auth(token))
    assert [m["id"] for m in resp.json()] == [in_a["id"]]
    assert resp.json()[0]["department"]["dept_name"] == "A"


@pytest.mark.asyncio
async def test_manager_password_change_rehashes(client):
    token = await admin_token(client)
    manager, _ = await create_manager(client, token)

    resp = await client.put(
        f"/api/managers/{manager['id']}", json={"password": "brand-new"}, headers=auth(token)
    )
    assert resp.status_code == 200

    old = await client.post("/api/auth/login", json={"email": manager["email"], "password": "manager123"})
    new = await client.post("/api/auth/login", json={"email": manager["email"], "password": "brand-new"})
    assert old.status_code == 401
    assert new.status_code == 200


@pytest.mark.asyncio
async def test_scoped_manager_reads_but_cannot_create_managers(client):
    setup = await staff_setup(client)
    headers = auth(setup["manager_token"])

    resp = await client.get("/api/managers", headers=headers)
    assert resp.status_code == 200

    resp = await client.post(
        "/api/managers",
        json={"name": "X", "email": unique_email("x"), "password": "secret1"},
        headers=headers,
    )
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_employee_cannot_list_managers(client):
    setup = await staff_setup(client)
    resp = await client.get("/api/managers", headers=auth(setup["employee_token"]))
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_delete_manager(client):
    token = await admin_token(client)
    manager, _ = await create_manager(client, token)
    resp = await client.delete(f"/api/managers/{manager['id']}", headers=auth(token))
    assert resp.json() == {"message": "Manager deleted"}
