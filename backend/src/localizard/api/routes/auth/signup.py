"""User registration routes."""

from typing import Any

from fastapi import APIRouter, status

from localizard.auth import (
    SessionDep,
    UserCreate,
    UserPublic,
    UserRegister,
    create_user,
    get_user_by_email,
)
from localizard.core.exceptions import ResourceExistsError
from localizard.core.logging import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.post("/signup", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def register_user(session: SessionDep, user_in: UserRegister) -> Any:
    """Create a new user account."""
    if get_user_by_email(session=session, email=user_in.email):
        raise ResourceExistsError("User", "email")

    user_create = UserCreate.model_validate(user_in)
    user = create_user(session=session, user_create=user_create)

    logger.info("user_registered", user_id=str(user.id))
    return user
