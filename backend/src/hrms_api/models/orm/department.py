"""Department ORM model."""

from uuid import UUID

from sqlalchemy import ForeignKey, Index, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from hrms_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class DepartmentORM(Base, UUIDMixin, TimestampMixin):
    """Department database model.

    Departments form a tree per organization through ``parent_department_id``.
    The tree is kept acyclic by the department service on every write.
    """

    __tablename__ = "departments"

    organization_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    code: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    cost_center: Mapped[str | None] = mapped_column(String(100), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)

    parent_department_id: Mapped[UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("departments.id", ondelete="RESTRICT"),
        nullable=True,
    )
    # employees -> departments -> employees is a cycle, emit this one as ALTER
    manager_id: Mapped[UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey(
            "employees.id",
            ondelete="SET NULL",
            use_alter=True,
            name="fk_departments_manager_id",
        ),
        nullable=True,
    )

    __table_args__ = (
        UniqueConstraint("organization_id", "code", name="uq_departments_org_code"),
        UniqueConstraint("organization_id", "name", name="uq_departments_org_name"),
        Index("idx_departments_organization_id", "organization_id"),
        Index("idx_departments_parent_id", "parent_department_id"),
    )
