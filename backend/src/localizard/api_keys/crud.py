import uuid

from sqlmodel import Session, select

from localizard.api_keys.models import ApiKey
from localizard.core.base_models import utcnow
from localizard.core.logging import get_logger
from localizard.core.uow import atomic
from localizard.projects.models import Project

logger = get_logger(__name__)


def generate_api_key() -> str:
    """Return a new opaque key (random UUID4, 122 bits of entropy)."""
    return str(uuid.uuid4())


def get_api_key(*, session: Session, project_id: uuid.UUID) -> ApiKey | None:
    statement = select(ApiKey).where(ApiKey.project_id == project_id)
    return session.exec(statement).first()


def issue_api_key(*, session: Session, project: Project) -> ApiKey:
    """Stage a fresh key for a project that has none. Does not commit."""
    db_key = ApiKey(project_id=project.id, key=generate_api_key())
    session.add(db_key)
    return db_key


def rotate_api_key(*, session: Session, project: Project) -> ApiKey:
    """Replace the project's key with a new one.

    The existing row keeps its identity; only its value and updated_at
    change. A project without a key row gets one. The previous key stops
    working as soon as this commits.

    Returns:
        The project's ApiKey row holding the new value
    """
    with atomic(session) as uow:
        db_key = get_api_key(session=uow.session, project_id=project.id)
        if db_key is None:
            db_key = issue_api_key(session=uow.session, project=project)
        else:
            db_key.key = generate_api_key()
            db_key.updated_at = utcnow()
            uow.session.add(db_key)

    session.refresh(db_key)
    logger.info("api_key_rotated", project=project.name, api_key_id=str(db_key.id))
    return db_key
