"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    # Create organizations table
    op.create_table(
        "organizations",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("legal_name", sa.String(255), nullable=True),
        sa.Column("domain", sa.String(255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    # Create departments table (manager FK added after employees exists)
    op.create_table(
        "departments",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("organization_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("code", sa.String(50), nullable=False),
        sa.Column("description", sa.String(1000), nullable=True),
        sa.Column("cost_center", sa.String(100), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("parent_department_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("manager_id", postgresql.UUID(as_uuid=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["organization_id"], ["organizations.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["parent_department_id"], ["departments.id"], ondelete="RESTRICT"
        ),
        sa.UniqueConstraint("organization_id", "code", name="uq_departments_org_code"),
        sa.UniqueConstraint("organization_id", "name", name="uq_departments_org_name"),
    )
    op.create_index("idx_departments_organization_id", "departments", ["organization_id"])
    op.create_index("idx_departments_parent_id", "departments", ["parent_department_id"])

    # Create employees table
    op.create_table(
        "employees",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("organization_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("employee_number", sa.String(50), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("middle_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("preferred_name", sa.String(100), nullable=True),
        sa.Column("work_email", sa.String(255), nullable=True),
        sa.Column("personal_email", sa.String(255), nullable=True),
        sa.Column("phone_number", sa.String(50), nullable=True),
        sa.Column("employment_status", sa.String(50), nullable=False),
        sa.Column("employment_type", sa.String(50), nullable=False),
        sa.Column("job_title", sa.String(255), nullable=True),
        sa.Column("job_level", sa.String(50), nullable=True),
        sa.Column("salary_amount", sa.Numeric(15, 2), nullable=True),
        sa.Column("salary_currency", sa.String(3), nullable=True),
        sa.Column("hire_date", sa.Date(), nullable=True),
        sa.Column("termination_date", sa.Date(), nullable=True),
        sa.Column("termination_reason", sa.String(500), nullable=True),
        sa.Column("probation_end_date", sa.Date(), nullable=True),
        sa.Column("confirmation_date", sa.Date(), nullable=True),
        sa.Column("manager_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("department_id", postgresql.UUID(as_uuid=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["organization_id"], ["organizations.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["manager_id"], ["employees.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["department_id"], ["departments.id"], ondelete="SET NULL"),
        sa.UniqueConstraint("organization_id", "employee_number", name="uq_employees_org_number"),
    )
    op.create_index("idx_employees_organization_id", "employees", ["organization_id"])
    op.create_index("idx_employees_manager_id", "employees", ["manager_id"])
    op.create_index("idx_employees_department_id", "employees", ["department_id"])
    op.create_index("idx_employees_status", "employees", ["employment_status"])

    op.create_foreign_key(
        "fk_departments_manager_id",
        "departments",
        "employees",
        ["manager_id"],
        ["id"],
        ondelete="SET NULL",
    )

    # Create employee_bank_details table
    op.create_table(
        "employee_bank_details",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("employee_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("bank_name", sa.String(255), nullable=False),
        sa.Column("account_number", sa.String(18), nullable=False),
        sa.Column("ifsc_code", sa.String(11), nullable=True),
        sa.Column("branch_name", sa.String(255), nullable=True),
        sa.Column("account_type", sa.String(20), nullable=False),
        sa.Column("is_primary", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "employee_id", "account_number", name="uq_bank_details_employee_account"
        ),
    )
    op.create_index("idx_bank_details_employee_id", "employee_bank_details", ["employee_id"])
    # At most one active primary account per employee
    op.create_index(
        "uq_bank_details_one_primary",
        "employee_bank_details",
        ["employee_id"],
        unique=True,
        postgresql_where=sa.text("is_primary AND is_active"),
    )

    # Create employee_employment_history table
    op.create_table(
        "employee_employment_history",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("employee_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("effective_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("job_title", sa.String(255), nullable=True),
        sa.Column("job_level", sa.String(50), nullable=True),
        sa.Column("department_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("manager_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("salary_amount", sa.Numeric(15, 2), nullable=True),
        sa.Column("salary_currency", sa.String(3), nullable=True),
        sa.Column("change_type", sa.String(50), nullable=False),
        sa.Column("change_reason", sa.String(500), nullable=True),
        sa.Column("changed_by", sa.String(255), nullable=True),
        sa.Column("is_current", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["department_id"], ["departments.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["manager_id"], ["employees.id"], ondelete="SET NULL"),
    )
    op.create_index(
        "idx_employment_history_employee_id", "employee_employment_history", ["employee_id"]
    )
    op.create_index(
        "idx_employment_history_employee_effective",
        "employee_employment_history",
        ["employee_id", "effective_date"],
    )
    op.create_index(
        "idx_employment_history_change_type",
        "employee_employment_history",
        ["employee_id", "change_type"],
    )
    # At most one current record per employee
    op.create_index(
        "uq_employment_history_one_current",
        "employee_employment_history",
        ["employee_id"],
        unique=True,
        postgresql_where=sa.text("is_current"),
    )


def downgrade() -> None:
    op.drop_index("uq_employment_history_one_current", table_name="employee_employment_history")
    op.drop_index("idx_employment_history_change_type", table_name="employee_employment_history")
    op.drop_index(
        "idx_employment_history_employee_effective", table_name="employee_employment_history"
    )
    op.drop_index("idx_employment_history_employee_id", table_name="employee_employment_history")
    op.drop_table("employee_employment_history")
    op.drop_index("uq_bank_details_one_primary", table_name="employee_bank_details")
    op.drop_index("idx_bank_details_employee_id", table_name="employee_bank_details")
    op.drop_table("employee_bank_details")
    op.drop_constraint("fk_departments_manager_id", "departments", type_="foreignkey")
    op.drop_index("idx_employees_status", table_name="employees")
    op.drop_index("idx_employees_department_id", table_name="employees")
    op.drop_index("idx_employees_manager_id", table_name="employees")
    op.drop_index("idx_employees_organization_id", table_name="employees")
    op.drop_table("employees")
    op.drop_index("idx_departments_parent_id", table_name="departments")
    op.drop_index("idx_departments_organization_id", table_name="departments")
    op.drop_table("departments")
    op.drop_table("organizations")
