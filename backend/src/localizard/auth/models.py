from typing import TYPE_CHECKING
import uuid

from pydantic import EmailStr
from sqlmodel import Field, Relationship, SQLModel

from localizard.core.base_models import BaseTable

if TYPE_CHECKING:
    from localizard.projects.models import Project


PASSWORD_MIN_LENGTH = 8


class UserBase(SQLModel):
    email: EmailStr = Field(unique=True, index=True, max_length=255)
    is_active: bool = True


class User(UserBase, BaseTable, table=True):
    hashed_password: str

    projects: list["Project"] = Relationship(
        back_populates="owner",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )


class UserCreate(UserBase):
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=128)


class UserRegister(SQLModel):
    """Schema for user registration (public endpoint)."""

    email: EmailStr = Field(max_length=255)
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=128)


class UserPublic(UserBase):
    id: uuid.UUID


class Token(SQLModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # Access token expiry in seconds


class TokenPayload(SQLModel):
    sub: str | None = None
    type: str = "access"
    jti: str | None = None


class Message(SQLModel):
    message: str
