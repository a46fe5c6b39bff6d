"""
Authenticated principals and the authorization predicates over them.

A principal is one of three tagged variants. Predicates look only at the
variant tag and the fine-grained role, never at table internals.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal
from uuid import UUID

from backoffice.models.employee import Employee
from backoffice.models.manager import Manager, ManagerRole
from backoffice.models.owner import Owner, OwnerRole

Role = Literal["admin", "manager", "employee"]


@dataclass(frozen=True)
class OwnerPrincipal:
    record: Owner
    kind: Literal["user"] = "user"

    @property
    def id(self) -> UUID:
        return self.record.id

    @property
    def role(self) -> Role:
        return OwnerRole(self.record.role).value


@dataclass(frozen=True)
class ManagerPrincipal:
    record: Manager
    kind: Literal["manager"] = "manager"

    @property
    def id(self) -> UUID:
        return self.record.id

    @property
    def role(self) -> Role:
        return ManagerRole(self.record.role).value


@dataclass(frozen=True)
class EmployeePrincipal:
    record: Employee
    kind: Literal["employee"] = "employee"

    @property
    def id(self) -> UUID:
        return self.record.id

    @property
    def role(self) -> Role:
        return "employee"


Principal = OwnerPrincipal | ManagerPrincipal | EmployeePrincipal
Predicate = Callable[[Principal], bool]


# ---------------------------------------------------------------------------
# Gate predicates
# ---------------------------------------------------------------------------

def is_admin(principal: Principal) -> bool:
    """Owner, or a manager holding the admin role."""
    match principal:
        case OwnerPrincipal() | ManagerPrincipal():
            return principal.role == "admin"
        case _:
            return False


def is_admin_or_manager(principal: Principal) -> bool:
    """Any owner or any manager, whatever its role."""
    return isinstance(principal, (OwnerPrincipal, ManagerPrincipal))


# Kept as its own name: same rule today.
is_manager = is_admin_or_manager


def is_employee(principal: Principal) -> bool:
    return isinstance(principal, EmployeePrincipal)


# ---------------------------------------------------------------------------
# Ownership narrowing helpers
# ---------------------------------------------------------------------------

def is_scoped_manager(principal: Principal) -> bool:
    """A manager whose role is exactly ``manager``; sees only what it supervises."""
    return isinstance(principal, ManagerPrincipal) and principal.role == "manager"


def may_access_owned(principal: Principal, manager_id: UUID | None, employee_id: UUID | None = None) -> bool:
    """
    Whether a principal may touch a record owned by ``manager_id``.

    Employees pass only when ``employee_id`` is their own id; scoped managers
    only when they are the owning manager; everyone else passes.
    """
    match principal:
        case EmployeePrincipal():
            return employee_id is not None and employee_id == principal.id
        case ManagerPrincipal() if principal.role == "manager":
            return manager_id == principal.id
        case _:
            return True
