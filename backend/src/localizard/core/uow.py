"""Unit of Work pattern for atomic database operations.

Provides transaction management with automatic commit/rollback,
ensuring related database operations succeed or fail together.

Based on patterns from Cosmic Python:
https://www.cosmicpython.com/book/chapter_06_uow.html
"""

from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from localizard.core.db import engine
from localizard.core.exceptions import StoreError
from localizard.core.logging import get_logger

logger = get_logger(__name__)


class UnitOfWork:
    """Manages a database transaction.

    Wraps a SQLModel session and provides explicit commit/rollback control.
    Use with the `atomic()` context manager for automatic handling.

    Attributes:
        session: The underlying SQLModel session
    """

    def __init__(self, session: Session):
        self._session = session
        self._committed = False

    @property
    def session(self) -> Session:
        """Access the underlying session for queries."""
        return self._session

    def commit(self) -> None:
        """Commit the transaction.

        Should only be called once. Subsequent calls are no-ops.
        """
        if not self._committed:
            self._session.commit()
            self._committed = True
            logger.debug("uow_committed")

    def rollback(self) -> None:
        """Rollback the transaction.

        Safe to call multiple times or after commit.
        """
        if not self._committed:
            self._session.rollback()
            logger.debug("uow_rolled_back")

    def flush(self) -> None:
        """Flush pending changes to the database without committing.

        Useful for getting auto-generated IDs or surfacing constraint
        violations before commit.
        """
        self._session.flush()


@contextmanager
def atomic(
    session: Session | None = None,
) -> Generator[UnitOfWork, None, None]:
    """Context manager for atomic database operations.

    Ensures all database operations within the block either
    succeed together or are rolled back together.

    Integrity violations are re-raised untouched so callers can report
    them as conflicts. Any other SQLAlchemy failure becomes a StoreError.

    Args:
        session: Optional existing session. If None, creates a new one.

    Yields:
        UnitOfWork instance for the transaction

    Usage:
        with atomic(session) as uow:
            label = Label(key=key, project_id=project.id)
            uow.session.add(label)
            # Commits automatically on success
    """
    owns_session = session is None
    active_session = Session(engine) if owns_session else session
    assert active_session is not None  # for type narrowing

    uow = UnitOfWork(active_session)

    try:
        yield uow
        uow.commit()
    except IntegrityError:
        uow.rollback()
        raise
    except SQLAlchemyError as e:
        uow.rollback()
        logger.error("uow_store_failure", error_type=type(e).__name__)
        raise StoreError() from e
    except Exception:
        uow.rollback()
        raise
    finally:
        if owns_session:
            active_session.close()
