"""Employee employment history ORM model."""

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import Boolean, Date, ForeignKey, Index, Numeric, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from hrms_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class EmploymentHistoryORM(Base, UUIDMixin, TimestampMixin):
    """One snapshot of an employee's job, department and salary.

    Records of one employee cover non-overlapping ``[effective_date, end_date]``
    intervals; ``end_date`` is null for the open-ended current record.
    """

    __tablename__ = "employee_employment_history"

    employee_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
    )
    effective_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    job_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    job_level: Mapped[str | None] = mapped_column(String(50), nullable=True)
    department_id: Mapped[UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("departments.id", ondelete="SET NULL"),
        nullable=True,
    )
    manager_id: Mapped[UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("employees.id", ondelete="SET NULL"),
        nullable=True,
    )
    salary_amount: Mapped[Decimal | None] = mapped_column(Numeric(15, 2), nullable=True)
    salary_currency: Mapped[str | None] = mapped_column(String(3), nullable=True)

    change_type: Mapped[str] = mapped_column(String(50), nullable=False)
    change_reason: Mapped[str | None] = mapped_column(String(500), nullable=True)
    changed_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_current: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    __table_args__ = (
        Index("idx_employment_history_employee_id", "employee_id"),
        Index("idx_employment_history_employee_effective", "employee_id", "effective_date"),
        Index("idx_employment_history_change_type", "employee_id", "change_type"),
        Index(
            "uq_employment_history_one_current",
            "employee_id",
            unique=True,
            postgresql_where=text("is_current"),
            sqlite_where=text("is_current = 1"),
        ),
    )
