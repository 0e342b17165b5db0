"""Organization ORM model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from hrms_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class OrganizationORM(Base, UUIDMixin, TimestampMixin):
    """Organization database model. Scopes departments and employees."""

    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    legal_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    domain: Mapped[str | None] = mapped_column(String(255), nullable=True)
