"""Base models and mixins for SQLModel schemas.

Usage:
    - Database models (table=True) inherit from TimestampedTable
    - Project children add ProjectScopedMixin for the owning project FK
    - Response schemas use TimestampResponseMixin for timestamp fields
    - List responses use PaginatedResponse[T] generic

Example:
    class Locale(LocaleBase, TimestampedTable, ProjectScopedMixin, table=True):
        ...
"""

import uuid
from datetime import UTC, datetime
from typing import Generic, TypeVar

from sqlmodel import Field, SQLModel

T = TypeVar("T")


def utcnow() -> datetime:
    return datetime.now(UTC)


class UUIDPrimaryKeyMixin(SQLModel):
    """Standard UUID primary key for all models."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)


class TimestampMixin(SQLModel):
    """Created/updated timestamps."""

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class ProjectScopedMixin(SQLModel):
    """For models owned by exactly one project."""

    project_id: uuid.UUID = Field(
        foreign_key="project.id", nullable=False, ondelete="CASCADE", index=True
    )


class BaseTable(UUIDPrimaryKeyMixin):
    """Base for simple tables (ID only).

    Use for: User
    """

    pass


class TimestampedTable(UUIDPrimaryKeyMixin, TimestampMixin):
    """Base for tables with timestamps.

    Use for: Project, Locale, Label, Translation, ApiKey
    """

    pass


class TimestampResponseMixin(SQLModel):
    """For Public/Response schemas that include timestamps."""

    created_at: datetime
    updated_at: datetime


class PaginatedResponse(SQLModel, Generic[T]):
    """Standard paginated response wrapper.

    Example:
        @router.get("/projects", response_model=PaginatedResponse[ProjectPublic])
        def list_projects(...):
            return PaginatedResponse(data=projects, count=count)
    """

    data: list[T]
    count: int
