import uuid

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from localizard.api_keys.crud import issue_api_key
from localizard.core.base_models import utcnow
from localizard.core.db import paginate
from localizard.core.exceptions import ResourceExistsError
from localizard.core.logging import get_logger
from localizard.core.uow import atomic
from localizard.projects.models import Project, ProjectCreate

logger = get_logger(__name__)


def get_project_by_name(*, session: Session, name: str) -> Project | None:
    statement = select(Project).where(Project.name == name)
    return session.exec(statement).first()


def get_projects_by_owner(
    *, session: Session, owner_id: uuid.UUID, skip: int = 0, limit: int = 100
) -> tuple[list[Project], int]:
    """Get projects owned by a user, ordered by name, with pagination.

    Returns:
        Tuple of (list of projects, total count)
    """
    statement = select(Project).where(Project.owner_id == owner_id)
    return paginate(
        session, statement, skip=skip, limit=limit, order_by=Project.name
    )


def create_project(
    *, session: Session, project_in: ProjectCreate, owner_id: uuid.UUID
) -> Project:
    """Create a project together with its API key.

    The name lookup only gives early feedback; the unique index on
    project.name decides concurrent attempts.

    Raises:
        ResourceExistsError: If the name is already taken
    """
    if get_project_by_name(session=session, name=project_in.name):
        raise ResourceExistsError("Project", "name")

    try:
        with atomic(session) as uow:
            project = Project(name=project_in.name, owner_id=owner_id)
            uow.session.add(project)
            uow.flush()
            issue_api_key(session=uow.session, project=project)
    except IntegrityError as e:
        logger.info("project_name_race_lost", name=project_in.name)
        raise ResourceExistsError("Project", "name") from e

    session.refresh(project)
    logger.info("project_created", project=project.name, owner_id=str(owner_id))
    return project


def set_project_public(*, session: Session, project: Project, public: bool) -> Project:
    with atomic(session):
        project.public = public
        project.updated_at = utcnow()
        session.add(project)

    session.refresh(project)
    logger.info("project_visibility_changed", project=project.name, public=public)
    return project


def delete_project(*, session: Session, project: Project) -> None:
    """Delete a project with its locales, labels, translations and API key."""
    name = project.name
    with atomic(session):
        session.delete(project)
    logger.info("project_deleted", project=name)
