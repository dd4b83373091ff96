"""Login and token authentication routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.security import OAuth2PasswordRequestForm

from localizard.auth import SessionDep, Token, authenticate
from localizard.core.config import settings
from localizard.core.exceptions import AuthenticationError
from localizard.core.logging import get_logger
from localizard.core.rate_limit import AUTH_RATE_LIMIT, limiter
from localizard.core.security import create_access_token

router = APIRouter()
logger = get_logger(__name__)


@router.post("/login", response_model=Token)
@limiter.limit(AUTH_RATE_LIMIT)
def login_access_token(
    request: Request,  # Required for rate limiter
    session: SessionDep,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
) -> Token:
    """OAuth2 compatible token login.

    Rate limited to prevent brute force attacks.
    """
    user = authenticate(
        session=session, email=form_data.username, password=form_data.password
    )
    if not user:
        logger.info("user_login_failed", reason="invalid_credentials")
        raise AuthenticationError("Incorrect email or password")
    if not user.is_active:
        logger.info("user_login_failed", reason="inactive", user_id=str(user.id))
        raise AuthenticationError("Inactive user")

    access_token, _ = create_access_token(str(user.id))
    logger.info("user_login", user_id=str(user.id))

    return Token(
        access_token=access_token,
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
