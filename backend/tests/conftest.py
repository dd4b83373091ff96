"""Shared fixtures: an in-memory SQLite database behind the FastAPI app."""

import os

os.environ.setdefault("ENVIRONMENT", "local")
os.environ.setdefault("SECRET_KEY", "test-secret-key-that-is-long-enough-for-hs256")

from collections.abc import Generator  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from localizard.auth import UserCreate, create_user  # noqa: E402
from localizard.auth.models import User  # noqa: E402
from localizard.core.db import create_store_engine, get_db  # noqa: E402
from localizard.core.security import create_access_token  # noqa: E402
from localizard.labels.crud import create_label  # noqa: E402
from localizard.labels.models import Label, LabelCreate  # noqa: E402
from localizard.locales.crud import create_locale  # noqa: E402
from localizard.locales.models import Locale, LocaleCreate  # noqa: E402
from localizard.main import app  # noqa: E402
import localizard.models  # noqa: E402, F401
from localizard.projects.crud import create_project  # noqa: E402
from localizard.projects.models import Project, ProjectCreate  # noqa: E402

TEST_PASSWORD = "correct-horse-battery"


@pytest.fixture
def engine():
    engine = create_store_engine("sqlite://")
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine) -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(session: Session) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_db] = lambda: session
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


def make_user(session: Session, email: str) -> User:
    return create_user(
        session=session,
        user_create=UserCreate(email=email, password=TEST_PASSWORD),
    )


def auth_headers(user: User) -> dict[str, str]:
    token, _ = create_access_token(str(user.id))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def owner(session: Session) -> User:
    return make_user(session, "owner@example.com")


@pytest.fixture
def other_user(session: Session) -> User:
    return make_user(session, "intruder@example.com")


@pytest.fixture
def owner_headers(owner: User) -> dict[str, str]:
    return auth_headers(owner)


@pytest.fixture
def other_headers(other_user: User) -> dict[str, str]:
    return auth_headers(other_user)


@pytest.fixture
def project(session: Session, owner: User) -> Project:
    return create_project(
        session=session, project_in=ProjectCreate(name="acme"), owner_id=owner.id
    )


@pytest.fixture
def locales(session: Session, project: Project) -> tuple[Locale, Locale]:
    en = create_locale(session=session, project=project, locale_in=LocaleCreate(name="en"))
    it = create_locale(session=session, project=project, locale_in=LocaleCreate(name="it"))
    return en, it


@pytest.fixture
def label(session: Session, project: Project) -> Label:
    return create_label(
        session=session, project=project, label_in=LabelCreate(key="greeting.hello")
    )
