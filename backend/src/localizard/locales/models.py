from typing import TYPE_CHECKING
import uuid

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from localizard.core.base_models import (
    ProjectScopedMixin,
    TimestampedTable,
    TimestampResponseMixin,
)

if TYPE_CHECKING:
    from localizard.projects.models import Project
    from localizard.translations.models import Translation


# Lowercase letters, dashes and underscores; dots are reserved for label keys
LOCALE_NAME_PATTERN = r"^[a-z_-]+$"


class LocaleBase(SQLModel):
    name: str = Field(max_length=50)


class Locale(LocaleBase, TimestampedTable, ProjectScopedMixin, table=True):
    __table_args__ = (
        UniqueConstraint("project_id", "name", name="uq_locale_project_name"),
    )

    project: "Project" = Relationship(back_populates="locales")
    translations: list["Translation"] = Relationship(
        back_populates="locale",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )


class LocaleCreate(SQLModel):
    name: str = Field(
        min_length=1, max_length=50, schema_extra={"pattern": LOCALE_NAME_PATTERN}
    )


class LocalePublic(LocaleBase, TimestampResponseMixin):
    id: uuid.UUID
    project_id: uuid.UUID


class LocaleDetail(LocalePublic):
    translation_count: int


Locale.model_rebuild()
