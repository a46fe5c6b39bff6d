"""
Seed script tests.
"""

import pytest
from sqlalchemy import func, select

from backoffice.models import Employee, Manager, Task
from backoffice.scripts.seed import CREDENTIALS, seed


@pytest.mark.asyncio
async def test_seed_is_idempotent(db):
    first = await seed(db)
    await db.commit()
    second = await seed(db)
    await db.commit()

    assert {k: v.id for k, v in first.items()} == {k: v.id for k, v in second.items()}
    assert await db.scalar(select(func.count()).select_from(Manager)) == 2
    assert await db.scalar(select(func.count()).select_from(Employee)) == 1
    assert await db.scalar(select(func.count()).select_from(Task)) == 1


@pytest.mark.asyncio
async def test_seeded_accounts_can_log_in(client, db):
    await seed(db)
    await db.commit()

    for label in ("admin manager", "scoped manager"):
        email, password = CREDENTIALS[label]
        resp = await client.post("/api/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, f"{label}: {resp.text}"

    email, password = CREDENTIALS["employee"]
    resp = await client.post("/api/auth/employee/login", json={"email": email, "password": password})
    assert resp.status_code == 200
    token = resp.json()["token"]

    resp = await client.get("/api/tasks", headers={"Authorization": f"Bearer {token}"})
    assert len(resp.json()) == 1
    assert resp.json()[0]["title"]["en"] == "Install wiring"
