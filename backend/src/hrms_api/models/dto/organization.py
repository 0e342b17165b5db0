"""Organization DTOs."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class OrganizationCreate(BaseModel):
    """DTO for creating an organization."""

    name: str = Field(min_length=1, max_length=255, description="Organization name")
    legal_name: str | None = Field(default=None, max_length=255, description="Registered legal name")
    domain: str | None = Field(default=None, max_length=255, description="Primary e-mail domain")


class OrganizationResponse(BaseModel):
    """Organization response DTO."""

    id: UUID
    name: str
    legal_name: str | None = None
    domain: str | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        """Pydantic config."""

        from_attributes = True


class OrganizationListResponse(BaseModel):
    """Organization list response DTO."""

    items: list[OrganizationResponse]
    total: int
