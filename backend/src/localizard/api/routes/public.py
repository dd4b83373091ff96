"""Consumer API: published translations for applications.

Private projects need their API key in `X-Api-Key`; public projects are
open to anyone. The owner's bearer session also grants access. Every
refusal looks like a missing project. Responses, errors included, carry
Access-Control-Allow-Origin (set in `localizard.main`).
"""

from typing import Any

from fastapi import APIRouter, Request

from localizard.access.deps import ReadableProject
from localizard.auth import SessionDep
from localizard.core.exceptions import ResourceNotFoundError
from localizard.core.rate_limit import PUBLIC_API_RATE_LIMIT, limiter
from localizard.locales.crud import get_locale_by_name
from localizard.translations.models import (
    OutputMode,
    PublishedProject,
    PublishedProjectResponse,
)
from localizard.translations.resolver import (
    resolve_locale_translations,
    resolve_translations,
)

router = APIRouter(prefix="/projects", tags=["public"])


@router.get("/{project_name}", response_model=PublishedProjectResponse)
@limiter.limit(PUBLIC_API_RATE_LIMIT)
def read_project_translations(
    request: Request,  # Required for rate limiter
    session: SessionDep,
    project: ReadableProject,
    mode: OutputMode = OutputMode.FLAT,
) -> Any:
    """Get every locale's translations for a project."""
    translations = resolve_translations(session=session, project=project, mode=mode)
    return PublishedProjectResponse(
        project=PublishedProject(
            name=project.name,
            created_at=project.created_at,
            updated_at=project.updated_at,
            translations=translations,
        )
    )


@router.get("/{project_name}/{locale_name}", response_model=dict[str, Any])
@limiter.limit(PUBLIC_API_RATE_LIMIT)
def read_locale_translations(
    request: Request,  # Required for rate limiter
    session: SessionDep,
    project: ReadableProject,
    locale_name: str,
    mode: OutputMode = OutputMode.FLAT,
) -> Any:
    """Get one locale's translations for a project."""
    if get_locale_by_name(session=session, project_id=project.id, name=locale_name) is None:
        raise ResourceNotFoundError("Locale", locale_name)

    translations = resolve_locale_translations(
        session=session, project=project, locale=locale_name, mode=mode
    )
    return translations
