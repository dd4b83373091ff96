from collections.abc import Sequence
import uuid

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from localizard.core.base_models import utcnow
from localizard.core.exceptions import ResourceExistsError
from localizard.core.logging import get_logger
from localizard.core.uow import atomic
from localizard.labels.models import Label
from localizard.locales.models import Locale
from localizard.translations.models import Translation, TranslationValue, UpsertResult

logger = get_logger(__name__)


def upsert_translations(
    *, session: Session, label: Label, updates: Sequence[TranslationValue]
) -> UpsertResult:
    """Write a batch of (locale, value) pairs for one label in one transaction.

    Pairs naming a locale outside the label's project are dropped. A pair
    whose value equals the stored one is skipped, so its updated_at is left
    alone. Everything else is created or updated, and the whole set is
    committed together or not at all. When a locale appears more than
    once, the last value wins.

    Raises:
        ResourceExistsError: If a concurrent writer created one of the rows first
        StoreError: If the database fails; nothing from the batch is applied
    """
    requested: dict[uuid.UUID, str] = {}
    for item in updates:
        requested[item.locale_id] = item.value

    result = UpsertResult()
    if not requested:
        return result

    project_locale_ids = set(
        session.exec(
            select(Locale.id).where(
                Locale.project_id == label.project_id,
                col(Locale.id).in_(list(requested)),
            )
        ).all()
    )
    result.ignored = len(requested) - len(project_locale_ids)
    if result.ignored:
        logger.warning(
            "translation_foreign_locales_ignored",
            label_id=str(label.id),
            count=result.ignored,
        )

    existing = {
        translation.locale_id: translation
        for translation in session.exec(
            select(Translation).where(
                Translation.label_id == label.id,
                col(Translation.locale_id).in_(list(project_locale_ids)),
            )
        ).all()
    }

    to_create: list[tuple[uuid.UUID, str]] = []
    to_update: list[tuple[Translation, str]] = []
    for locale_id, value in requested.items():
        if locale_id not in project_locale_ids:
            continue
        current = existing.get(locale_id)
        if current is None:
            to_create.append((locale_id, value))
        elif current.value == value:
            result.unchanged += 1
        else:
            to_update.append((current, value))

    if not to_create and not to_update:
        return result

    try:
        with atomic(session) as uow:
            now = utcnow()
            for translation, value in to_update:
                translation.value = value
                translation.updated_at = now
                uow.session.add(translation)
            for locale_id, value in to_create:
                uow.session.add(
                    Translation(label_id=label.id, locale_id=locale_id, value=value)
                )
    except IntegrityError as e:
        logger.info("translation_upsert_race_lost", label_id=str(label.id))
        raise ResourceExistsError("Translation", "locale_id") from e

    result.created = len(to_create)
    result.updated = len(to_update)
    logger.info(
        "translations_upserted",
        label_id=str(label.id),
        created=result.created,
        updated=result.updated,
        unchanged=result.unchanged,
    )
    return result
