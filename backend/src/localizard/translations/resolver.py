"""Assemble published translation maps.

For a project, every label with a non-empty value in a locale contributes
`key -> value` to that locale's map. Labels are visited in ascending key
order, so both the flat map and the nested tree built from it keep that
order. Locales are listed by name unless the caller asks for specific ones,
in which case their order is kept.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from sqlmodel import Session, col, select

from localizard.core.exceptions import LabelKeyCollisionError
from localizard.labels.models import Label
from localizard.locales.models import Locale
from localizard.projects.models import Project
from localizard.translations.models import OutputMode, Translation


def nest_keys(flat: Mapping[str, str]) -> dict[str, Any]:
    """Expand dotted keys into a tree.

    {"a.b": "x", "a.c": "y"} -> {"a": {"b": "x", "c": "y"}}

    Raises:
        LabelKeyCollisionError: If one key is a dotted prefix of another
    """
    tree: dict[str, Any] = {}
    for key, value in flat.items():
        *parents, leaf = key.split(".")
        node = tree
        for depth, part in enumerate(parents, start=1):
            child = node.setdefault(part, {})
            if not isinstance(child, dict):
                raise LabelKeyCollisionError(key, ".".join(parents[:depth]))
            node = child
        if leaf in node:
            other = next(k for k in flat if k.startswith(f"{key}."))
            raise LabelKeyCollisionError(key, other)
        node[leaf] = value
    return tree


def _project_locale_names(
    session: Session, project: Project, locales: Sequence[str] | None
) -> list[str]:
    statement = select(Locale.name).where(Locale.project_id == project.id)
    if locales is None:
        return list(session.exec(statement.order_by(Locale.name)).all())

    known = set(session.exec(statement.where(col(Locale.name).in_(list(locales)))).all())
    # Keep request order, drop unknown names and repeats
    return [name for name in dict.fromkeys(locales) if name in known]


def resolve_translations(
    *,
    session: Session,
    project: Project,
    locales: Sequence[str] | None = None,
    mode: OutputMode = OutputMode.FLAT,
) -> dict[str, dict[str, Any]]:
    """Build `{locale: {label_key: value}}` for a project.

    Every selected locale appears, even when it has no translated labels.
    Locale names that do not exist in the project are left out.

    Args:
        session: Database session
        project: Project to resolve
        locales: Optional locale names to restrict to, in output order
        mode: FLAT keeps dotted keys; NESTED expands them into trees

    Returns:
        Ordered mapping of locale name to label map
    """
    locale_names = _project_locale_names(session, project, locales)
    output: dict[str, dict[str, Any]] = {name: {} for name in locale_names}
    if not locale_names:
        return output

    rows = session.exec(
        select(Label.key, Locale.name, Translation.value)
        .join(Translation, col(Translation.label_id) == col(Label.id))
        .join(Locale, col(Translation.locale_id) == col(Locale.id))
        .where(
            Label.project_id == project.id,
            Locale.project_id == project.id,
            col(Locale.name).in_(locale_names),
            Translation.value != "",
        )
    ).all()

    # Byte-wise key order regardless of database collation
    for key, locale_name, value in sorted(rows, key=lambda row: row[0].encode()):
        output[locale_name][key] = value

    if mode is OutputMode.NESTED:
        return {name: nest_keys(flat) for name, flat in output.items()}
    return output


def resolve_locale_translations(
    *,
    session: Session,
    project: Project,
    locale: str,
    mode: OutputMode = OutputMode.FLAT,
) -> dict[str, Any]:
    """Resolve a single locale; an unknown locale yields an empty map."""
    resolved = resolve_translations(
        session=session, project=project, locales=[locale], mode=mode
    )
    return resolved.get(locale, {})
