"""Authentication routes package.

- login: OAuth2 password login returning a bearer token
- signup: User registration
- profile: The current user (/me)
"""

from fastapi import APIRouter

from localizard.api.routes.auth import login, profile, signup

router = APIRouter(prefix="/auth", tags=["auth"])

router.include_router(login.router)
router.include_router(signup.router)
router.include_router(profile.router)
