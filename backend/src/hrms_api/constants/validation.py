"""Centralized validation constants for the HRMS API.

This module provides a single source of truth for all validation whitelists,
patterns, default values, and limits used across routers and services.
"""

import re
from typing import Final

# =============================================================================
# Employee Constants
# =============================================================================

ALLOWED_EMPLOYEE_STATUSES: Final[frozenset[str]] = frozenset(
    {
        "active",
        "probation",
        "notice_period",
        "on_leave",
        "suspended",
        "terminated",
        "resigned",
    }
)

ALLOWED_EMPLOYEE_SORT_COLUMNS: Final[frozenset[str]] = frozenset(
    {
        "employee_number",
        "first_name",
        "last_name",
        "job_title",
        "employment_status",
        "hire_date",
        "created_at",
    }
)

DEFAULT_EMPLOYEE_SORT_COLUMN: Final[str] = "last_name"

# =============================================================================
# Department Constants
# =============================================================================

ALLOWED_DEPARTMENT_SORT_COLUMNS: Final[frozenset[str]] = frozenset(
    {"name", "code", "created_at"}
)

DEFAULT_DEPARTMENT_SORT_COLUMN: Final[str] = "name"

# =============================================================================
# Bank Detail Constants
# =============================================================================

# Indian Financial System Code: 4 letters, a literal zero, 6 alphanumerics
IFSC_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[A-Z]{4}0[A-Z0-9]{6}$")

# Digits only, 9-18 characters
ACCOUNT_NUMBER_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[0-9]{9,18}$")

MAX_BANK_NAME_LENGTH: Final[int] = 255
MASKED_ACCOUNT_PREFIX: Final[str] = "****"

# =============================================================================
# Pagination Constants
# =============================================================================

DEFAULT_PAGE_SIZE: Final[int] = 50
MAX_PAGE_SIZE: Final[int] = 200

# =============================================================================
# Text Length Constants
# =============================================================================

MAX_SEARCH_LENGTH: Final[int] = 200
MAX_STATUS_LENGTH: Final[int] = 50
MAX_SORT_BY_LENGTH: Final[int] = 50
