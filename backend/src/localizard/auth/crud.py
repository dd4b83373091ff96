from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from localizard.auth.models import User, UserCreate
from localizard.core.exceptions import ResourceExistsError
from localizard.core.security import get_password_hash, verify_password
from localizard.core.uow import atomic


def create_user(*, session: Session, user_create: UserCreate) -> User:
    """Create a new user in the database.

    Args:
        session: Database session
        user_create: User creation data

    Returns:
        Created user object

    Raises:
        ResourceExistsError: If the email is already registered
    """
    db_obj = User.model_validate(
        user_create,
        update={"hashed_password": get_password_hash(user_create.password)},
    )
    try:
        with atomic(session) as uow:
            uow.session.add(db_obj)
    except IntegrityError as e:
        raise ResourceExistsError("User", "email") from e
    session.refresh(db_obj)
    return db_obj


def get_user_by_email(*, session: Session, email: str) -> User | None:
    statement = select(User).where(User.email == email)
    return session.exec(statement).first()


# Dummy hash for timing-safe authentication when user doesn't exist
# This is a valid bcrypt hash that will always fail verification
# but takes the same time as a real verification
_DUMMY_HASH = "$2b$12$LQv3c1yqBWVHxkd0LHAkCOYz6TtxMQJqhN8/X4.VIiOMjKQBNHxMK"


def authenticate(*, session: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password.

    Always performs a password verification, whether or not the email is
    known, so response time does not reveal registered addresses.

    Returns:
        User object if credentials are valid, None otherwise
    """
    db_user = get_user_by_email(session=session, email=email)

    if not db_user:
        verify_password(password, _DUMMY_HASH)
        return None

    if not verify_password(password, db_user.hashed_password):
        return None

    return db_user
