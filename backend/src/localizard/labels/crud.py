from collections import defaultdict
import uuid

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from localizard.core.base_models import utcnow
from localizard.core.exceptions import (
    ResourceExistsError,
    ResourceNotFoundError,
    ValidationError,
)
from localizard.core.logging import get_logger
from localizard.core.uow import atomic
from localizard.labels.models import Label, LabelCreate, LabelSummary, LabelUpdate
from localizard.locales.models import Locale
from localizard.projects.models import Project
from localizard.translations.models import Translation

logger = get_logger(__name__)


def get_label(
    *, session: Session, project_id: uuid.UUID, label_id: uuid.UUID
) -> Label | None:
    """Get a label by ID, only if it belongs to the given project."""
    label = session.get(Label, label_id)
    if label is None or label.project_id != project_id:
        return None
    return label


def get_label_by_key(
    *, session: Session, project_id: uuid.UUID, key: str
) -> Label | None:
    statement = select(Label).where(Label.project_id == project_id, Label.key == key)
    return session.exec(statement).first()


def find_colliding_key(
    *,
    session: Session,
    project_id: uuid.UUID,
    key: str,
    exclude_id: uuid.UUID | None = None,
) -> str | None:
    """Find a key that is a dotted prefix of `key`, or that `key` prefixes.

    Such pairs (e.g. "a" and "a.b") cannot coexist in nested output.

    Returns:
        The first conflicting key, or None
    """
    segments = key.split(".")
    ancestors = [".".join(segments[:i]) for i in range(1, len(segments))]

    conditions = [col(Label.key).startswith(f"{key}.", autoescape=True)]
    if ancestors:
        conditions.append(col(Label.key).in_(ancestors))

    statement = select(Label.key).where(Label.project_id == project_id, or_(*conditions))
    if exclude_id is not None:
        statement = statement.where(Label.id != exclude_id)
    return session.exec(statement.order_by(Label.key)).first()


def _check_key_available(
    *,
    session: Session,
    project_id: uuid.UUID,
    key: str,
    exclude_id: uuid.UUID | None = None,
) -> None:
    existing = get_label_by_key(session=session, project_id=project_id, key=key)
    if existing is not None and existing.id != exclude_id:
        raise ResourceExistsError("Label", "key")

    collision = find_colliding_key(
        session=session, project_id=project_id, key=key, exclude_id=exclude_id
    )
    if collision is not None:
        raise ValidationError(
            f"key conflicts with existing label '{collision}'", field="key"
        )


def create_label(*, session: Session, project: Project, label_in: LabelCreate) -> Label:
    """Create a label with no translations.

    The key lookup only gives early feedback; the (project_id, key) unique
    index decides concurrent attempts.

    Raises:
        ResourceExistsError: If the project already has a label with this key
        ValidationError: If the key would collide with another in nested output
    """
    _check_key_available(session=session, project_id=project.id, key=label_in.key)

    try:
        with atomic(session) as uow:
            label = Label.model_validate(label_in, update={"project_id": project.id})
            uow.session.add(label)
    except IntegrityError as e:
        logger.info("label_key_race_lost", project=project.name, key=label_in.key)
        raise ResourceExistsError("Label", "key") from e

    session.refresh(label)
    logger.info("label_created", project=project.name, key=label.key)
    return label


def update_label(*, session: Session, label: Label, label_in: LabelUpdate) -> Label:
    """Change a label's key and/or description.

    Raises:
        ResourceExistsError: If the new key is taken by another label
        ValidationError: If the new key would collide in nested output
    """
    label_data = label_in.model_dump(exclude_unset=True)
    new_key = label_data.get("key")
    if new_key is None:
        label_data.pop("key", None)
    elif new_key != label.key:
        _check_key_available(
            session=session,
            project_id=label.project_id,
            key=new_key,
            exclude_id=label.id,
        )

    old_key = label.key
    try:
        with atomic(session):
            label.sqlmodel_update(label_data)
            label.updated_at = utcnow()
            session.add(label)
    except IntegrityError as e:
        raise ResourceExistsError("Label", "key") from e

    session.refresh(label)
    logger.info("label_updated", label_id=str(label.id), old_key=old_key, key=label.key)
    return label


def delete_label(*, session: Session, project_id: uuid.UUID, label_id: uuid.UUID) -> None:
    """Delete a label and all of its translations.

    Raises:
        ResourceNotFoundError: If the label is absent from the project,
            including when it was already deleted
    """
    label = get_label(session=session, project_id=project_id, label_id=label_id)
    if label is None:
        raise ResourceNotFoundError("Label", str(label_id))

    key = label.key
    with atomic(session):
        session.delete(label)
    logger.info("label_deleted", project_id=str(project_id), key=key)


def get_project_labels(*, session: Session, project_id: uuid.UUID) -> list[LabelSummary]:
    """List a project's labels by key, each with its translated locale names."""
    labels = session.exec(
        select(Label).where(Label.project_id == project_id).order_by(Label.key)
    ).all()

    translated = session.exec(
        select(Translation.label_id, Locale.name)
        .join(Locale, col(Translation.locale_id) == col(Locale.id))
        .where(Locale.project_id == project_id, Translation.value != "")
        .order_by(Locale.name)
    ).all()

    locales_by_label: dict[uuid.UUID, list[str]] = defaultdict(list)
    for label_id, locale_name in translated:
        locales_by_label[label_id].append(locale_name)

    return [
        LabelSummary.model_validate(
            label, update={"translated_locales": locales_by_label[label.id]}
        )
        for label in sorted(labels, key=lambda lbl: lbl.key.encode())
    ]


def get_label_translations(*, session: Session, label_id: uuid.UUID) -> list[Translation]:
    statement = (
        select(Translation)
        .join(Locale, col(Translation.locale_id) == col(Locale.id))
        .where(Translation.label_id == label_id)
        .order_by(Locale.name)
    )
    return list(session.exec(statement).all())
