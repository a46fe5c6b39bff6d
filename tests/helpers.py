"""
Shared request helpers for API tests.
"""

import uuid

import httpx

ADMIN_EMAIL = "admin@hassan-elec.com"
ADMIN_PASSWORD = "admin123"


def unique_email(prefix: str) -> str:
    """Generate a unique email so tests never collide on uniqueness checks."""
    return f"{prefix}_{uuid.uuid4().hex[:8]}@example.com"


def auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def login(client: httpx.AsyncClient, email: str, password: str) -> str:
    resp = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, f"Login failed: {resp.text}"
    return resp.json()["token"]


async def employee_login(client: httpx.AsyncClient, email: str, password: str) -> str:
    resp = await client.post("/api/auth/employee/login", json={"email": email, "password": password})
    assert resp.status_code == 200, f"Employee login failed: {resp.text}"
    return resp.json()["token"]


async def admin_token(client: httpx.AsyncClient) -> str:
    return await login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


async def create_org(client: httpx.AsyncClient, token: str, name: str = "Hassan Electric") -> dict:
    resp = await client.post(
        "/api/organizations",
        json={"org_name": name, "org_email": "INFO@Example.com", "org_contact": "+1234"},
        headers=auth(token),
    )
    assert resp.status_code == 201, f"Create org failed: {resp.text}"
    return resp.json()


async def create_department(client: httpx.AsyncClient, token: str, org_id: str, name: str = "Operations") -> dict:
    resp = await client.post(
        "/api/departments",
        json={"dept_name": name, "organization": org_id},
        headers=auth(token),
    )
    assert resp.status_code == 201, f"Create department failed: {resp.text}"
    return resp.json()


async def create_manager(
    client: httpx.AsyncClient,
    token: str,
    dept_id: str | None = None,
    role: str = "manager",
    password: str = "manager123",
) -> tuple[dict, str]:
    """Returns (manager, manager_token)."""
    email = unique_email(role)
    resp = await client.post(
        "/api/managers",
        json={
            "name": f"Test {role}",
            "email": email,
            "password": password,
            "role": role,
            "department": dept_id,
        },
        headers=auth(token),
    )
    assert resp.status_code == 201, f"Create manager failed: {resp.text}"
    return resp.json(), await login(client, email, password)


async def create_employee(
    client: httpx.AsyncClient,
    token: str,
    dept_id: str,
    manager_id: str | None = None,
    password: str | None = "employee123",
) -> dict:
    body = {
        "emp_name": {"en": "John Doe", "fr": "Jean Dupont", "ar": "جون دو"},
        "emp_email": unique_email("emp"),
        "emp_contact": "+1234567894",
        "emp_dob": "1990-01-15",
        "department": dept_id,
    }
    if manager_id is not None:
        body["manager"] = manager_id
    if password is not None:
        body["password"] = password
    resp = await client.post("/api/employees", json=body, headers=auth(token))
    assert resp.status_code == 201, f"Create employee failed: {resp.text}"
    return resp.json()


async def create_task(
    client: httpx.AsyncClient,
    token: str,
    employee_id: str,
    manager_id: str | None = None,
    due: str = "2030-01-01T09:00:00Z",
    title: str = "Install wiring",
) -> dict:
    body = {
        "title": {"en": title},
        "description": {"en": "Complete wiring for the new building"},
        "dueDate": due,
        "employee": employee_id,
    }
    if manager_id is not None:
        body["manager"] = manager_id
    resp = await client.post("/api/tasks", json=body, headers=auth(token))
    assert resp.status_code == 201, f"Create task failed: {resp.text}"
    return resp.json()


async def staff_setup(client: httpx.AsyncClient) -> dict:
    """Owner token, an org, a department, a scoped manager and one of its employees."""
    token = await admin_token(client)
    org = await create_org(client, token)
    dept = await create_department(client, token, org["id"])
    manager, manager_token = await create_manager(client, token, dept["id"])
    employee = await create_employee(client, manager_token, dept["id"])
    emp_token = await employee_login(client, employee["emp_email"], "employee123")
    return {
        "admin_token": token,
        "org": org,
        "dept": dept,
        "manager": manager,
        "manager_token": manager_token,
        "employee": employee,
        "employee_token": emp_token,
    }
