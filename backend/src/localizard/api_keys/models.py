from datetime import datetime
from typing import TYPE_CHECKING
import uuid

from sqlmodel import Field, Relationship, SQLModel

from localizard.core.base_models import TimestampedTable

if TYPE_CHECKING:
    from localizard.projects.models import Project


class ApiKey(TimestampedTable, table=True):
    """The single read credential of a project.

    Rotation replaces `key` in place; the row itself is kept.
    """

    __tablename__ = "api_key"

    key: str = Field(unique=True, index=True, max_length=64)
    project_id: uuid.UUID = Field(
        foreign_key="project.id", nullable=False, ondelete="CASCADE", unique=True
    )

    project: "Project" = Relationship(back_populates="api_key")


class ApiKeyPublic(SQLModel):
    key: str
    updated_at: datetime


ApiKey.model_rebuild()
