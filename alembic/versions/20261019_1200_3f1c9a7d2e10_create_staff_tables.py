"""create_staff_tables

Revision ID: 3f1c9a7d2e10
Revises: 
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2e10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Create owners, organizations, departments, managers, employees and tasks."""
    op.create_table(
        'owners',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('photo', sa.String(length=1000), nullable=False, server_default=''),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='admin'),
        *_timestamps(),
    )
    op.create_index('ix_owners_email', 'owners', ['email'], unique=True)
    op.create_index('ix_owners_created_at', 'owners', ['created_at'])

    op.create_table(
        'organizations',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('org_name', sa.String(length=200), nullable=False),
        sa.Column('org_address', sa.String(length=500), nullable=False, server_default=''),
        sa.Column('org_email', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('org_contact', sa.String(length=50), nullable=False, server_default=''),
        *_timestamps(),
    )
    op.create_index('ix_organizations_created_at', 'organizations', ['created_at'])

    # References between staff tables are plain ids: deleting a parent
    # leaves children pointing at it.
    op.create_table(
        'departments',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('dept_name', sa.String(length=200), nullable=False),
        sa.Column('dept_contact', sa.String(length=50), nullable=False, server_default=''),
        sa.Column('dept_email', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('organization_id', sa.Uuid(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_departments_organization_id', 'departments', ['organization_id'])
    op.create_index('ix_departments_created_at', 'departments', ['created_at'])

    op.create_table(
        'managers',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('contact', sa.String(length=50), nullable=False, server_default=''),
        sa.Column('photo', sa.String(length=1000), nullable=False, server_default=''),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='manager'),
        sa.Column('department_id', sa.Uuid(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_managers_email', 'managers', ['email'], unique=True)
    op.create_index('ix_managers_department_id', 'managers', ['department_id'])
    op.create_index('ix_managers_created_at', 'managers', ['created_at'])

    op.create_table(
        'employees',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('emp_name', sa.JSON(), nullable=False),
        sa.Column('emp_email', sa.String(length=255), nullable=False),
        sa.Column('emp_contact', sa.String(length=50), nullable=False, server_default=''),
        sa.Column('emp_dob', sa.Date(), nullable=True),
        sa.Column('password_hash', sa.String(length=255), nullable=True),
        sa.Column('photo', sa.String(length=1000), nullable=False, server_default=''),
        sa.Column('department_id', sa.Uuid(), nullable=False),
        sa.Column('manager_id', sa.Uuid(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_employees_emp_email', 'employees', ['emp_email'])
    op.create_index('ix_employees_department_id', 'employees', ['department_id'])
    op.create_index('ix_employees_manager_id', 'employees', ['manager_id'])
    op.create_index('ix_employees_created_at', 'employees', ['created_at'])

    op.create_table(
        'tasks',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('title', sa.JSON(), nullable=False),
        sa.Column('description', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('employee_id', sa.Uuid(), nullable=False),
        sa.Column('manager_id', sa.Uuid(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_tasks_status', 'tasks', ['status'])
    op.create_index('ix_tasks_employee_id', 'tasks', ['employee_id'])
    op.create_index('ix_tasks_manager_id', 'tasks', ['manager_id'])
    op.create_index('ix_tasks_created_at', 'tasks', ['created_at'])


def downgrade() -> None:
    """Drop staff tables."""
    op.drop_table('tasks')
    op.drop_table('employees')
    op.drop_table('managers')
    op.drop_table('departments')
    op.drop_table('organizations')
    op.drop_table('owners')
