from typing import Annotated, Any

from fastapi import APIRouter, Depends, Path, status

from localizard.access.deps import WritableProject
from localizard.auth import Message, SessionDep
from localizard.core.exceptions import ResourceNotFoundError
from localizard.locales.crud import (
    count_locale_translations,
    create_locale,
    delete_locale,
    get_locale_by_name,
    get_project_locales,
)
from localizard.locales.models import Locale, LocaleCreate, LocaleDetail, LocalePublic

router = APIRouter(prefix="/dashboard/projects/{project_name}/locales", tags=["locales"])


def get_project_locale(
    session: SessionDep,
    project: WritableProject,
    locale_name: Annotated[str, Path(description="Locale name")],
) -> Locale:
    locale = get_locale_by_name(session=session, project_id=project.id, name=locale_name)
    if locale is None:
        raise ResourceNotFoundError("Locale", locale_name)
    return locale


ProjectLocale = Annotated[Locale, Depends(get_project_locale)]


@router.get("/", response_model=list[LocalePublic])
def read_locales(session: SessionDep, project: WritableProject) -> Any:
    """List the project's locales by name."""
    return get_project_locales(session=session, project_id=project.id)


@router.post("/", response_model=LocalePublic, status_code=status.HTTP_201_CREATED)
def create_locale_endpoint(
    session: SessionDep,
    project: WritableProject,
    locale_in: LocaleCreate,
) -> Any:
    return create_locale(session=session, project=project, locale_in=locale_in)


@router.get("/{locale_name}", response_model=LocaleDetail)
def read_locale(session: SessionDep, locale: ProjectLocale) -> Any:
    """Get a locale with the number of translations written for it."""
    count = count_locale_translations(session=session, locale_id=locale.id)
    return LocaleDetail.model_validate(locale, update={"translation_count": count})


@router.delete("/{locale_name}", response_model=Message)
def delete_locale_endpoint(
    session: SessionDep,
    project: WritableProject,
    locale: ProjectLocale,
) -> Message:
    """Delete a locale and all of its translations."""
    delete_locale(session=session, project_id=project.id, locale_id=locale.id)
    return Message(message="Locale deleted successfully")
