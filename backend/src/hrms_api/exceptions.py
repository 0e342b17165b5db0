"""Domain-specific exceptions for the HRMS API.

These exceptions provide a clean separation between service-layer errors
and HTTP responses. Services raise them at the point of detection and the
handlers in ``hrms_api.middleware.error_handler`` translate them to status
codes, so routers never match on message strings.
"""

from typing import Any
from uuid import UUID


class HRMSError(Exception):
    """Base exception for all HRMS API errors."""

    def __init__(self, message: str = "An error occurred", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Resource Not Found Errors (404)
# =============================================================================


class NotFoundError(HRMSError):
    """Base class for resource not found errors."""

    entity = "Resource"
    id_field = "id"

    def __init__(self, resource_id: UUID | str | None = None) -> None:
        message = f"{self.entity} not found"
        details = {self.id_field: str(resource_id)} if resource_id else {}
        super().__init__(message, details)


class OrganizationNotFoundError(NotFoundError):
    """Raised when an organization cannot be found."""

    entity = "Organization"
    id_field = "organization_id"


class EmployeeNotFoundError(NotFoundError):
    """Raised when an employee cannot be found."""

    entity = "Employee"
    id_field = "employee_id"


class ManagerNotFoundError(NotFoundError):
    """Raised when a referenced manager cannot be found."""

    entity = "Manager"
    id_field = "manager_id"


class DepartmentNotFoundError(NotFoundError):
    """Raised when a department cannot be found."""

    entity = "Department"
    id_field = "department_id"


class ParentDepartmentNotFoundError(NotFoundError):
    """Raised when a referenced parent department cannot be found."""

    entity = "Parent department"
    id_field = "parent_department_id"


class BankDetailNotFoundError(NotFoundError):
    """Raised when a bank detail cannot be found."""

    entity = "Bank detail"
    id_field = "bank_detail_id"


class EmploymentHistoryNotFoundError(NotFoundError):
    """Raised when an employment history record cannot be found."""

    entity = "Employment history"
    id_field = "history_id"


# =============================================================================
# Validation Errors (400)
# =============================================================================


class ValidationError(HRMSError):
    """Base class for caller-correctable precondition violations."""

    pass


class DuplicateError(ValidationError):
    """Raised when a value must be unique within its scope but is not."""

    def __init__(self, message: str, field: str | None = None, value: str | None = None) -> None:
        details: dict[str, Any] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details)


class CircularHierarchyError(ValidationError):
    """Raised when a parent or manager assignment would create a cycle."""

    def __init__(self, message: str, node_id: UUID, proposed_parent_id: UUID) -> None:
        super().__init__(
            message,
            {"id": str(node_id), "proposed_parent_id": str(proposed_parent_id)},
        )


class HistoryOverlapError(ValidationError):
    """Raised when an employment history interval intersects an existing one."""

    def __init__(self, overlapping_ids: list[UUID]) -> None:
        super().__init__(
            "Employment history record overlaps with existing records",
            {"overlapping_ids": [str(i) for i in overlapping_ids]},
        )


class InvalidStateTransitionError(ValidationError):
    """Raised when an employee status transition is not allowed."""

    def __init__(self, message: str, current_status: str | None = None) -> None:
        details = {"current_status": current_status} if current_status else {}
        super().__init__(message, details)
