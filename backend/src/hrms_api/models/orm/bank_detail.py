"""Employee bank detail ORM model."""

from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, String, UniqueConstraint, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from hrms_api.constants.validation import MASKED_ACCOUNT_PREFIX
from hrms_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class EmployeeBankDetailORM(Base, UUIDMixin, TimestampMixin):
    """Employee bank account database model.

    Accounts are soft-deleted through ``is_active``. At most one active
    account per employee is primary, guarded by a partial unique index.
    """

    __tablename__ = "employee_bank_details"

    employee_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
    )
    bank_name: Mapped[str] = mapped_column(String(255), nullable=False)
    account_number: Mapped[str] = mapped_column(String(18), nullable=False)
    ifsc_code: Mapped[str | None] = mapped_column(String(11), nullable=True)
    branch_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    account_type: Mapped[str] = mapped_column(String(20), nullable=False)
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    __table_args__ = (
        UniqueConstraint("employee_id", "account_number", name="uq_bank_details_employee_account"),
        Index("idx_bank_details_employee_id", "employee_id"),
        Index(
            "uq_bank_details_one_primary",
            "employee_id",
            unique=True,
            postgresql_where=text("is_primary AND is_active"),
            sqlite_where=text("is_primary = 1 AND is_active = 1"),
        ),
    )

    @property
    def masked_account_number(self) -> str:
        """Account number with everything but the last four digits hidden."""
        if self.account_number is None or len(self.account_number) < 4:
            return self.account_number
        return MASKED_ACCOUNT_PREFIX + self.account_number[-4:]
