"""Current user routes."""

from typing import Any

from fastapi import APIRouter

from localizard.auth import CurrentUser, UserPublic

router = APIRouter()


@router.get("/me", response_model=UserPublic)
def read_user_me(current_user: CurrentUser) -> Any:
    """Get the current user."""
    return current_user
