from localizard.auth.crud import (
    authenticate,
    create_user,
    get_user_by_email,
)
from localizard.auth.deps import (
    CurrentUser,
    LenientUser,
    OptionalUser,
    SessionDep,
    TokenDep,
    get_current_user,
    get_optional_user,
    get_user_if_valid,
)
from localizard.auth.models import (
    Message,
    Token,
    TokenPayload,
    User,
    UserCreate,
    UserPublic,
    UserRegister,
)

__all__ = [
    # Dependencies
    "CurrentUser",
    "LenientUser",
    "OptionalUser",
    "SessionDep",
    "TokenDep",
    # Models
    "Message",
    "Token",
    "TokenPayload",
    "User",
    "UserCreate",
    "UserPublic",
    "UserRegister",
    # CRUD
    "authenticate",
    "create_user",
    "get_current_user",
    "get_optional_user",
    "get_user_if_valid",
    "get_user_by_email",
]
