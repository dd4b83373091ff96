from typing import Annotated
import uuid

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
import jwt
from pydantic import ValidationError
from sqlmodel import Session

from localizard.auth.models import TokenPayload, User
from localizard.core.config import settings
from localizard.core.db import get_db
from localizard.core.exceptions import AuthenticationError
from localizard.core.logging import get_logger
from localizard.core.security import decode_token

logger = get_logger(__name__)

# auto_error is off so the consumer API can fall back to API keys
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_STR}/auth/login", auto_error=False
)

SessionDep = Annotated[Session, Depends(get_db)]
TokenDep = Annotated[str | None, Depends(oauth2_scheme)]


def get_optional_user(session: SessionDep, token: TokenDep) -> User | None:
    """Resolve the owner session behind a bearer token, if one was sent.

    Returns:
        The active user, or None when no bearer token is present

    Raises:
        AuthenticationError: If a token was sent but is invalid
    """
    if token is None:
        return None

    try:
        payload = decode_token(token)
        token_data = TokenPayload(**payload)
    except (jwt.InvalidTokenError, ValidationError) as e:
        raise AuthenticationError("Could not validate credentials") from e

    if token_data.type != "access" or token_data.sub is None:
        raise AuthenticationError("Invalid token type")

    try:
        user_id = uuid.UUID(token_data.sub)
    except ValueError as e:
        raise AuthenticationError("Could not validate credentials") from e

    user = session.get(User, user_id)
    if not user or not user.is_active:
        raise AuthenticationError("Inactive or unknown user")
    return user


OptionalUser = Annotated[User | None, Depends(get_optional_user)]


def get_user_if_valid(session: SessionDep, token: TokenDep) -> User | None:
    """Resolve the bearer session, treating a bad or stale token as absent.

    Used by read-only consumer endpoints, where a public project must stay
    readable whatever credentials the caller happens to send.
    """
    try:
        return get_optional_user(session, token)
    except AuthenticationError as e:
        logger.info("bearer_token_ignored", reason=e.message)
        return None


LenientUser = Annotated[User | None, Depends(get_user_if_valid)]


def get_current_user(user: OptionalUser) -> User:
    """Require an owner session.

    Raises:
        AuthenticationError: If no valid bearer token was sent
    """
    if user is None:
        raise AuthenticationError("Not authenticated")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
