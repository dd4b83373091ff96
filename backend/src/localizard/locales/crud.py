import uuid

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, func, select

from localizard.core.exceptions import ResourceExistsError, ResourceNotFoundError
from localizard.core.logging import get_logger
from localizard.core.uow import atomic
from localizard.locales.models import Locale, LocaleCreate
from localizard.projects.models import Project
from localizard.translations.models import Translation

logger = get_logger(__name__)


def get_locale_by_name(
    *, session: Session, project_id: uuid.UUID, name: str
) -> Locale | None:
    statement = select(Locale).where(
        Locale.project_id == project_id,
        Locale.name == name,
    )
    return session.exec(statement).first()


def get_project_locales(*, session: Session, project_id: uuid.UUID) -> list[Locale]:
    statement = (
        select(Locale).where(Locale.project_id == project_id).order_by(Locale.name)
    )
    return list(session.exec(statement).all())


def count_locale_translations(*, session: Session, locale_id: uuid.UUID) -> int:
    statement = (
        select(func.count())
        .select_from(Translation)
        .where(Translation.locale_id == locale_id)
    )
    return session.exec(statement).one()


def create_locale(
    *, session: Session, project: Project, locale_in: LocaleCreate
) -> Locale:
    """Add a locale to a project.

    Raises:
        ResourceExistsError: If the project already has a locale with this name
    """
    if get_locale_by_name(session=session, project_id=project.id, name=locale_in.name):
        raise ResourceExistsError("Locale", "name")

    try:
        with atomic(session) as uow:
            locale = Locale(name=locale_in.name, project_id=project.id)
            uow.session.add(locale)
    except IntegrityError as e:
        logger.info("locale_name_race_lost", project=project.name, name=locale_in.name)
        raise ResourceExistsError("Locale", "name") from e

    session.refresh(locale)
    logger.info("locale_created", project=project.name, locale=locale.name)
    return locale


def delete_locale(
    *, session: Session, project_id: uuid.UUID, locale_id: uuid.UUID
) -> None:
    """Delete a locale and every translation written for it.

    Raises:
        ResourceNotFoundError: If the locale is absent from the project,
            including when it was already deleted
    """
    locale = session.get(Locale, locale_id)
    if locale is None or locale.project_id != project_id:
        raise ResourceNotFoundError("Locale", str(locale_id))

    name = locale.name
    with atomic(session):
        session.delete(locale)
    logger.info("locale_deleted", project_id=str(project_id), locale=name)
