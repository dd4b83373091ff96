from fastapi import APIRouter

from localizard.api.routes import api_keys, auth, labels, locales, projects, public

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(projects.listing_router)
api_router.include_router(public.router)
api_router.include_router(projects.router)
api_router.include_router(api_keys.router)
api_router.include_router(locales.router)
api_router.include_router(labels.router)
