from typing import TYPE_CHECKING
import uuid

from sqlmodel import Field, Relationship, SQLModel

from localizard.core.base_models import (
    PaginatedResponse,
    TimestampedTable,
    TimestampResponseMixin,
)
from localizard.labels.models import LabelSummary
from localizard.locales.models import LocalePublic

if TYPE_CHECKING:
    from localizard.api_keys.models import ApiKey
    from localizard.auth.models import User
    from localizard.labels.models import Label
    from localizard.locales.models import Locale


# At least three lowercase letters, digits or dashes
PROJECT_NAME_PATTERN = r"^[a-z0-9-]{3,}$"


class ProjectBase(SQLModel):
    name: str = Field(unique=True, index=True, max_length=100)
    public: bool = False


class Project(ProjectBase, TimestampedTable, table=True):
    """A tenant-owned namespace of locales and labels.

    The name is globally unique and never changes after creation.
    """

    owner_id: uuid.UUID = Field(
        foreign_key="user.id", nullable=False, ondelete="CASCADE", index=True
    )

    owner: "User" = Relationship(back_populates="projects")
    locales: list["Locale"] = Relationship(
        back_populates="project",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )
    labels: list["Label"] = Relationship(
        back_populates="project",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )
    api_key: "ApiKey" = Relationship(
        back_populates="project",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "uselist": False},
    )


class ProjectCreate(SQLModel):
    name: str = Field(
        min_length=3, max_length=100, schema_extra={"pattern": PROJECT_NAME_PATTERN}
    )


class ProjectUpdate(SQLModel):
    # Only visibility is mutable; the name is fixed at creation
    public: bool


class ProjectPublic(ProjectBase, TimestampResponseMixin):
    id: uuid.UUID
    owner_id: uuid.UUID


ProjectsPublic = PaginatedResponse[ProjectPublic]


class ProjectDetail(ProjectPublic):
    """Owner view of a project with its locales and labels."""

    locales: list[LocalePublic]
    labels: list[LabelSummary]


Project.model_rebuild()
