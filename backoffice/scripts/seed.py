"""
Seed a development database with one of everything.

Creates (only when missing) an organization, a department, an admin manager,
a scoped manager, an employee and one task for that employee.

Run:
    python -m backoffice.scripts.seed
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.config import settings
from backoffice.core.database import Database
from backoffice.core.logging_config import configure_logging
from backoffice.core.security import hash_password
from backoffice.models import Department, Employee, Manager, Organization, Task
from backoffice.models.base import utcnow
from backoffice.models.manager import ManagerRole
from backoffice.models.task import TaskStatus
from backoffice.services.auth_service import ensure_admin

logger = logging.getLogger(__name__)

CREDENTIALS = {
    "admin manager": ("manager@hassan-elec.com", "manager123"),
    "scoped manager": ("supervisor@hassan-elec.com", "supervisor123"),
    "employee": ("employee@hassan-elec.com", "employee123"),
}


async def _get_or_create(db: AsyncSession, model, lookup, **values):
    result = await db.execute(select(model).where(lookup).limit(1))
    record = result.scalars().first()
    if record is not None:
        logger.info("%s already exists", model.__name__)
        return record
    record = model(**values)
    db.add(record)
    await db.flush()
    logger.info("Created %s %s", model.__name__, record.id)
    return record


async def seed(db: AsyncSession) -> dict[str, object]:
    """Insert the sample records and return them keyed by role."""
    await ensure_admin(db, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)

    org = await _get_or_create(
        db,
        Organization,
        Organization.org_email == "info@hassan-elec.com",
        org_name="Hassan Electrician Service",
        org_address="123 Main Street, City",
        org_email="info@hassan-elec.com",
        org_contact="+1234567890",
    )
    dept = await _get_or_create(
        db,
        Department,
        Department.organization_id == org.id,
        dept_name="Operations",
        dept_contact="+1234567891",
        dept_email="ops@hassan-elec.com",
        organization_id=org.id,
    )

    email, password = CREDENTIALS["admin manager"]
    admin_manager = await _get_or_create(
        db,
        Manager,
        Manager.email == email,
        name="Admin Manager",
        email=email,
        password_hash=hash_password(password),
        contact="+1234567892",
        department_id=dept.id,
        role=ManagerRole.admin,
    )

    email, password = CREDENTIALS["scoped manager"]
    supervisor = await _get_or_create(
        db,
        Manager,
        Manager.email == email,
        name="Department Supervisor",
        email=email,
        password_hash=hash_password(password),
        contact="+1234567893",
        department_id=dept.id,
        role=ManagerRole.manager,
    )

    email, password = CREDENTIALS["employee"]
    employee = await _get_or_create(
        db,
        Employee,
        Employee.emp_email == email,
        emp_name={"en": "John Doe", "fr": "Jean Dupont", "ar": "جون دو"},
        emp_email=email,
        emp_contact="+1234567894",
        emp_dob=date(1990, 1, 15),
        department_id=dept.id,
        manager_id=supervisor.id,
        password_hash=hash_password(password),
    )

    task = await _get_or_create(
        db,
        Task,
        Task.employee_id == employee.id,
        title={"en": "Install wiring", "fr": "Installation câblage", "ar": "تثبيت الأسلاك"},
        description={
            "en": "Complete wiring for new building",
            "fr": "Terminer le câblage du nouveau bâtiment",
            "ar": "إكمال الأسلاك للمبنى الجديد",
        },
        status=TaskStatus.pending,
        due_date=utcnow() + timedelta(days=7),
        employee_id=employee.id,
        manager_id=supervisor.id,
    )

    return {
        "organization": org,
        "department": dept,
        "admin_manager": admin_manager,
        "supervisor": supervisor,
        "employee": employee,
        "task": task,
    }


async def main() -> None:
    configure_logging(settings.LOG_LEVEL)
    database = Database(settings.DATABASE_URL)
    try:
        if settings.AUTO_CREATE_TABLES:
            await database.create_all()
        async with database.session_factory() as session:
            await seed(session)
            await session.commit()
    finally:
        await database.dispose()

    logger.info("Seed completed. Test credentials:")
    for label, (email, password) in CREDENTIALS.items():
        logger.info("  %-15s %s / %s", label, email, password)


if __name__ == "__main__":
    asyncio.run(main())
