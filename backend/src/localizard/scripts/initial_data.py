"""Create the first user account if it doesn't exist."""

import logging

from sqlmodel import Session

from localizard.auth import UserCreate, create_user, get_user_by_email
from localizard.core.config import settings
from localizard.core.db import engine

# Import all models to ensure relationships are properly configured
import localizard.models  # noqa: F401

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def init(session: Session) -> None:
    user = get_user_by_email(session=session, email=settings.FIRST_USER_EMAIL)
    if user:
        logger.info(f"First user already exists: {user.email}")
        return

    user_in = UserCreate(
        email=settings.FIRST_USER_EMAIL,
        password=settings.FIRST_USER_PASSWORD,
    )
    user = create_user(session=session, user_create=user_in)
    logger.info(f"Created first user: {user.email}")


def main() -> None:
    logger.info("Creating initial data")
    with Session(engine) as session:
        init(session)
    logger.info("Initial data created")


if __name__ == "__main__":
    main()
