from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any
import uuid

from pydantic import BaseModel
from pydantic import Field as PydanticField
from sqlalchemy import Text, UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from localizard.core.base_models import TimestampedTable

if TYPE_CHECKING:
    from localizard.labels.models import Label
    from localizard.locales.models import Locale


class OutputMode(str, Enum):
    """Shape of a resolved label mapping.

    FLAT: dotted keys as-is
    NESTED: dotted keys expanded into a tree
    """

    FLAT = "flat"
    NESTED = "nested"


class Translation(TimestampedTable, table=True):
    """Value of one label in one locale.

    An empty value is kept as a row but treated as untranslated.
    """

    __table_args__ = (
        UniqueConstraint("label_id", "locale_id", name="uq_translation_label_locale"),
    )

    value: str = Field(default="", sa_type=Text, nullable=False)
    label_id: uuid.UUID = Field(
        foreign_key="label.id", nullable=False, ondelete="CASCADE", index=True
    )
    locale_id: uuid.UUID = Field(
        foreign_key="locale.id", nullable=False, ondelete="CASCADE", index=True
    )

    label: "Label" = Relationship(back_populates="translations")
    locale: "Locale" = Relationship(back_populates="translations")


class TranslationValue(SQLModel):
    locale_id: uuid.UUID
    value: str


class TranslationsUpdate(SQLModel):
    translations: list[TranslationValue]


class TranslationPublic(SQLModel):
    id: uuid.UUID
    locale_id: uuid.UUID
    value: str
    updated_at: datetime


class UpsertResult(SQLModel):
    created: int = 0
    updated: int = 0
    unchanged: int = 0
    # Pairs naming a locale outside the label's project
    ignored: int = 0


class PublishedProject(BaseModel):
    name: str
    created_at: datetime = PydanticField(serialization_alias="createdAt")
    updated_at: datetime = PydanticField(serialization_alias="updatedAt")
    translations: dict[str, Any]


class PublishedProjectResponse(BaseModel):
    project: PublishedProject


Translation.model_rebuild()
