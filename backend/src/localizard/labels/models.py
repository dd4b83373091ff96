from typing import TYPE_CHECKING
import uuid

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from localizard.core.base_models import (
    ProjectScopedMixin,
    TimestampedTable,
    TimestampResponseMixin,
)
from localizard.translations.models import TranslationPublic

if TYPE_CHECKING:
    from localizard.projects.models import Project
    from localizard.translations.models import Translation


# Dot-separated segments of lowercase letters, dashes and underscores
LABEL_KEY_PATTERN = r"^[a-z_-]+(\.[a-z_-]+)*$"


class LabelBase(SQLModel):
    key: str = Field(max_length=255)
    description: str | None = Field(default=None, max_length=255)


class Label(LabelBase, TimestampedTable, ProjectScopedMixin, table=True):
    __table_args__ = (
        UniqueConstraint("project_id", "key", name="uq_label_project_key"),
    )

    project: "Project" = Relationship(back_populates="labels")
    translations: list["Translation"] = Relationship(
        back_populates="label",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )


class LabelCreate(SQLModel):
    key: str = Field(
        min_length=1, max_length=255, schema_extra={"pattern": LABEL_KEY_PATTERN}
    )
    description: str | None = Field(default=None, max_length=255)


class LabelUpdate(SQLModel):
    key: str | None = Field(
        default=None,
        min_length=1,
        max_length=255,
        schema_extra={"pattern": LABEL_KEY_PATTERN},
    )
    description: str | None = Field(default=None, max_length=255)


class LabelPublic(LabelBase, TimestampResponseMixin):
    id: uuid.UUID
    project_id: uuid.UUID


class LabelSummary(LabelPublic):
    # Locales holding a non-empty translation, by name
    translated_locales: list[str]


class LabelDetail(LabelPublic):
    translations: list[TranslationPublic]


Label.model_rebuild()
