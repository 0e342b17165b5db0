"""Bank detail domain enums."""

from enum import StrEnum


class AccountType(StrEnum):
    """Bank account type."""

    SAVINGS = "savings"
    CURRENT = "current"
    SALARY = "salary"
