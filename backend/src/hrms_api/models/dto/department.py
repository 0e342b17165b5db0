"""Department DTOs."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class DepartmentRequest(BaseModel):
    """DTO for creating or replacing a department.

    On update the request replaces the department: an omitted parent or
    manager clears the existing reference.
    """

    organization_id: UUID
    name: str = Field(min_length=1, max_length=255)
    code: str = Field(min_length=1, max_length=50)
    description: str | None = Field(default=None, max_length=1000)
    cost_center: str | None = Field(default=None, max_length=100)
    location: str | None = Field(default=None, max_length=255)
    parent_department_id: UUID | None = None
    manager_id: UUID | None = None


class DepartmentResponse(BaseModel):
    """Department response DTO."""

    id: UUID
    organization_id: UUID
    name: str
    code: str
    description: str | None = None
    cost_center: str | None = None
    location: str | None = None
    parent_department_id: UUID | None = None
    parent_department_name: str | None = None
    manager_id: UUID | None = None
    manager_name: str | None = None
    created_at: datetime
    updated_at: datetime


class DepartmentListResponse(BaseModel):
    """Department list response DTO."""

    items: list[DepartmentResponse]
    total: int
    page: int
    page_size: int


class DepartmentHierarchyNode(BaseModel):
    """One department in the organization tree."""

    id: UUID
    name: str
    code: str
    description: str | None = None
    cost_center: str | None = None
    manager_id: UUID | None = None
    manager_name: str | None = None
    children: list[DepartmentHierarchyNode] = Field(default_factory=list)
