"""Employee ORM model."""

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import Date, ForeignKey, Index, Numeric, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from hrms_api.models.domain.employee import EmploymentStatus
from hrms_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class EmployeeORM(Base, UUIDMixin, TimestampMixin):
    """Employee database model."""

    __tablename__ = "employees"

    organization_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
    )
    employee_number: Mapped[str] = mapped_column(String(50), nullable=False)

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    middle_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    preferred_name: Mapped[str | None] = mapped_column(String(100), nullable=True)

    work_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    personal_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(50), nullable=True)

    employment_status: Mapped[str] = mapped_column(
        String(50), nullable=False, default=EmploymentStatus.ACTIVE
    )
    employment_type: Mapped[str] = mapped_column(String(50), nullable=False)
    job_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    job_level: Mapped[str | None] = mapped_column(String(50), nullable=True)
    salary_amount: Mapped[Decimal | None] = mapped_column(Numeric(15, 2), nullable=True)
    salary_currency: Mapped[str | None] = mapped_column(String(3), nullable=True)

    hire_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    termination_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    termination_reason: Mapped[str | None] = mapped_column(String(500), nullable=True)
    probation_end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    confirmation_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Self-referential reporting line
    manager_id: Mapped[UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("employees.id", ondelete="SET NULL"),
        nullable=True,
    )
    department_id: Mapped[UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("departments.id", ondelete="SET NULL"),
        nullable=True,
    )

    __table_args__ = (
        UniqueConstraint("organization_id", "employee_number", name="uq_employees_org_number"),
        Index("idx_employees_organization_id", "organization_id"),
        Index("idx_employees_manager_id", "manager_id"),
        Index("idx_employees_department_id", "department_id"),
        Index("idx_employees_status", "employment_status"),
    )

    @property
    def full_name(self) -> str:
        """First, optional middle and last name joined by spaces."""
        parts = [self.first_name]
        if self.middle_name and self.middle_name.strip():
            parts.append(self.middle_name)
        parts.append(self.last_name)
        return " ".join(parts)

    @property
    def is_active(self) -> bool:
        return self.employment_status == EmploymentStatus.ACTIVE

    @property
    def is_terminated(self) -> bool:
        return self.employment_status == EmploymentStatus.TERMINATED

    @property
    def is_on_probation(self) -> bool:
        """True while the probation end date lies in the future."""
        if self.probation_end_date is None:
            return False
        return self.probation_end_date > date.today()
