"""Employment history domain enums."""

from enum import StrEnum


class ChangeType(StrEnum):
    """Reason an employment history record was opened."""

    JOINING = "joining"
    PROMOTION = "promotion"
    TRANSFER = "transfer"
    SALARY_REVISION = "salary_revision"
    ROLE_CHANGE = "role_change"
