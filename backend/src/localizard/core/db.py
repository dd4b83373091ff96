from collections.abc import Generator
from typing import Any, TypeVar

from sqlalchemy import Engine, event
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine, func, select
from sqlmodel.sql.expression import SelectOfScalar

from localizard.core.config import settings


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_store_engine(url: str, *, echo: bool = False) -> Engine:
    """Build the engine backing the translation store.

    PostgreSQL gets a bounded connection pool. SQLite (used for tests and
    throwaway local runs) gets a single shared connection with foreign keys
    enforced, so cascading deletes behave the same on both.
    """
    if url.startswith("sqlite"):
        sqlite_engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=echo,
        )
        event.listen(sqlite_engine, "connect", _enable_sqlite_foreign_keys)
        return sqlite_engine

    return create_engine(
        url,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        pool_recycle=3600,
        echo=echo,
    )


engine = create_store_engine(
    str(settings.SQLALCHEMY_DATABASE_URI),
    echo=settings.DEBUG and settings.ENVIRONMENT == "local",
)


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


T = TypeVar("T", bound=SQLModel)


def paginate(
    session: Session,
    statement: SelectOfScalar[T],
    skip: int = 0,
    limit: int = 100,
    order_by: InstrumentedAttribute[Any] | None = None,
) -> tuple[list[T], int]:
    """Run `statement` for one page and count the full result set.

    Example:
        statement = select(Project).where(Project.owner_id == user.id)
        projects, total = paginate(session, statement, limit=20, order_by=Project.name)
    """
    count_statement = select(func.count()).select_from(statement.subquery())
    count = session.exec(count_statement).one()

    if order_by is not None:
        statement = statement.order_by(order_by)

    results = session.exec(statement.offset(skip).limit(limit)).all()
    return list(results), count
