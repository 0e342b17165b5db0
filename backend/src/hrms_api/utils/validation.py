"""Input validation utilities for query parameters and bank details."""

from hrms_api.constants.validation import (
    ACCOUNT_NUMBER_PATTERN,
    IFSC_PATTERN,
    MAX_SEARCH_LENGTH,
    MAX_STATUS_LENGTH,
)


def sanitize_search(search: str | None, max_length: int = MAX_SEARCH_LENGTH) -> str | None:
    """Sanitize search input.

    Args:
        search: Raw search string
        max_length: Maximum allowed length

    Returns:
        Sanitized search string or None
    """
    if search is None:
        return None

    search = search[:max_length]

    # Parameterized by SQLAlchemy anyway
    search = search.replace(";", "").replace("--", "")

    return search.strip() or None


def validate_sort_by(sort_by: str, allowed_columns: frozenset[str] | set[str], default: str) -> str:
    """Validate sort column against whitelist.

    Args:
        sort_by: Raw sort column name
        allowed_columns: Set of allowed column names
        default: Default column if invalid

    Returns:
        Validated sort column name
    """
    if sort_by and sort_by in allowed_columns:
        return sort_by
    return default


def sanitize_status(
    status: str | None, allowed_values: frozenset[str] | set[str] | None = None
) -> str | None:
    """Sanitize status filter input.

    Args:
        status: Raw status string
        allowed_values: Optional set of allowed status values

    Returns:
        Sanitized status string or None
    """
    if status is None:
        return None

    status = status[:MAX_STATUS_LENGTH].strip().lower()

    if not status:
        return None

    if allowed_values and status not in allowed_values:
        return None

    return status


def escape_like_wildcards(value: str) -> str:
    """Escape SQL LIKE wildcards so they match literally.

    Example:
        >>> escape_like_wildcards("test%value")
        'test\\\\%value'
        >>> escape_like_wildcards("test_value")
        'test\\\\_value'
    """
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def is_valid_ifsc_code(ifsc_code: str | None) -> bool:
    """Check an IFSC code: four letters, a zero, six letters or digits."""
    return ifsc_code is not None and IFSC_PATTERN.fullmatch(ifsc_code) is not None


def is_valid_account_number(account_number: str | None) -> bool:
    """Check an account number: 9 to 18 digits."""
    return account_number is not None and ACCOUNT_NUMBER_PATTERN.fullmatch(account_number) is not None
