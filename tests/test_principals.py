"""
Authorization predicates and gates over the three principal kinds.
"""

import uuid

import pytest
from fastapi import HTTPException

from backoffice.core.dependencies import admin_only, admin_or_manager, employee_only, manager_only
from backoffice.core.principals import (
    EmployeePrincipal,
    ManagerPrincipal,
    OwnerPrincipal,
    is_admin,
    is_admin_or_manager,
    is_employee,
    is_scoped_manager,
    may_access_owned,
)
from backoffice.models import Employee, Manager, Owner
from backoffice.models.manager import ManagerRole
from backoffice.models.owner import OwnerRole


def owner() -> OwnerPrincipal:
    return OwnerPrincipal(Owner(id=uuid.uuid4(), email="o@example.com", role=OwnerRole.admin))


def manager(role: ManagerRole = ManagerRole.manager) -> ManagerPrincipal:
    return ManagerPrincipal(Manager(id=uuid.uuid4(), name="M", email="m@example.com", role=role))


def employee() -> EmployeePrincipal:
    return EmployeePrincipal(
        Employee(id=uuid.uuid4(), emp_name={"en": "E"}, emp_email="e@example.com")
    )


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

def test_kinds_and_roles():
    assert (owner().kind, owner().role) == ("user", "admin")
    assert (manager().kind, manager().role) == ("manager", "manager")
    assert manager(ManagerRole.admin).role == "admin"
    assert (employee().kind, employee().role) == ("employee", "employee")


def test_is_admin():
    assert is_admin(owner())
    assert is_admin(manager(ManagerRole.admin))
    assert not is_admin(manager())
    assert not is_admin(employee())


def test_is_admin_or_manager():
    assert is_admin_or_manager(owner())
    assert is_admin_or_manager(manager())
    assert is_admin_or_manager(manager(ManagerRole.admin))
    assert not is_admin_or_manager(employee())


def test_is_employee():
    assert is_employee(employee())
    assert not is_employee(owner())
    assert not is_employee(manager())


def test_only_manager_role_is_scoped():
    assert is_scoped_manager(manager())
    assert not is_scoped_manager(manager(ManagerRole.admin))
    assert not is_scoped_manager(owner())
    assert not is_scoped_manager(employee())


def test_may_access_owned():
    scoped = manager()
    worker = employee()
    other_id = uuid.uuid4()

    assert may_access_owned(scoped, scoped.id)
    assert not may_access_owned(scoped, other_id)

    assert may_access_owned(worker, other_id, worker.id)
    assert not may_access_owned(worker, other_id, other_id)
    assert not may_access_owned(worker, other_id)

    assert may_access_owned(owner(), other_id)
    assert may_access_owned(manager(ManagerRole.admin), other_id)


# ---------------------------------------------------------------------------
# Gates
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_gates_admit_matching_principals():
    admin = manager(ManagerRole.admin)
    worker = employee()
    assert await admin_only(principal=admin) is admin
    assert await admin_or_manager(principal=admin) is admin
    assert await manager_only(principal=admin) is admin
    assert await employee_only(principal=worker) is worker


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "gate, make_principal",
    [
        (admin_only, manager),
        (admin_only, employee),
        (admin_or_manager, employee),
        (manager_only, employee),
        (employee_only, owner),
        (employee_only, manager),
    ],
)
async def test_gates_reject_other_principals(gate, make_principal):
    with pytest.raises(HTTPException) as exc_info:
        await gate(principal=make_principal())
    assert exc_info.value.status_code == 403
    assert exc_info.value.detail["code"] == "FORBIDDEN"
