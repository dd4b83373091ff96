import pytest
from sqlmodel import select

from localizard.core.exceptions import LabelKeyCollisionError
from localizard.labels.models import Label
from localizard.locales.crud import create_locale
from localizard.locales.models import LocaleCreate
from localizard.projects.crud import create_project
from localizard.projects.models import ProjectCreate
from localizard.translations.crud import upsert_translations
from localizard.translations.models import OutputMode, Translation, TranslationValue
from localizard.translations.resolver import (
    nest_keys,
    resolve_locale_translations,
    resolve_translations,
)


def flatten(tree, prefix=""):
    flat = {}
    for key, value in tree.items():
        path = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(flatten(value, f"{path}."))
        else:
            flat[path] = value
    return flat


def add_label(session, project, key, values):
    """Create a label and write `values`, a list of (locale, value) pairs."""
    label = Label(key=key, project_id=project.id)
    session.add(label)
    session.commit()
    session.refresh(label)
    upsert_translations(
        session=session,
        label=label,
        updates=[
            TranslationValue(locale_id=locale.id, value=value)
            for locale, value in values
        ],
    )
    return label


class TestNestKeys:
    def test_expands_dotted_keys(self):
        flat = {"a.b": "x", "a.c": "y", "d": "z"}
        assert nest_keys(flat) == {"a": {"b": "x", "c": "y"}, "d": "z"}

    def test_keeps_insertion_order(self):
        tree = nest_keys({"b.z": "1", "b.a": "2", "a": "3"})
        assert list(tree) == ["b", "a"]
        assert list(tree["b"]) == ["z", "a"]

    @pytest.mark.parametrize(
        "flat",
        [{"a": "x", "a.b": "y"}, {"a.b": "y", "a": "x"}],
        ids=["parent-first", "child-first"],
    )
    def test_prefix_collision_raises(self, flat):
        with pytest.raises(LabelKeyCollisionError):
            nest_keys(flat)


def test_example_scenario(session, project, locales, label):
    en, it = locales
    upsert_translations(
        session=session,
        label=label,
        updates=[
            TranslationValue(locale_id=en.id, value="Hello"),
            TranslationValue(locale_id=it.id, value=""),
        ],
    )

    flat = resolve_translations(session=session, project=project)
    assert flat == {"en": {"greeting.hello": "Hello"}, "it": {}}

    nested = resolve_translations(session=session, project=project, mode=OutputMode.NESTED)
    assert nested == {"en": {"greeting": {"hello": "Hello"}}, "it": {}}


def test_project_without_labels_resolves_to_empty_locales(session, project, locales):
    assert resolve_translations(session=session, project=project) == {"en": {}, "it": {}}


def test_project_without_locales_resolves_to_empty_mapping(session, project):
    assert resolve_translations(session=session, project=project) == {}


def test_includes_only_non_empty_translations(session, project, locales):
    en, it = locales
    add_label(session, project, "home.title", [(en, "Home"), (it, "Casa")])
    add_label(session, project, "home.subtitle", [(en, "Welcome")])
    add_label(session, project, "footer", [(en, ""), (it, "Piede")])
    add_label(session, project, "untranslated", [])

    resolved = resolve_translations(session=session, project=project)

    stored = session.exec(select(Translation)).all()
    assert len(stored) == 5
    assert resolved == {
        "en": {"home.subtitle": "Welcome", "home.title": "Home"},
        "it": {"footer": "Piede", "home.title": "Casa"},
    }


def test_keys_are_sorted_bytewise(session, project, locales):
    en, _ = locales
    for key in ["b.a", "a_b", "a-b", "a.b"]:
        add_label(session, project, key, [(en, key.upper())])

    resolved = resolve_translations(session=session, project=project)
    assert list(resolved["en"]) == sorted(["b.a", "a_b", "a-b", "a.b"], key=str.encode)


def test_locale_filter_keeps_request_order_and_drops_unknown(session, project, locales):
    en, it = locales
    add_label(session, project, "greeting", [(en, "Hi"), (it, "Ciao")])

    resolved = resolve_translations(
        session=session, project=project, locales=["it", "fr", "en", "it"]
    )
    assert list(resolved) == ["it", "en"]
    assert resolved["it"] == {"greeting": "Ciao"}


def test_other_projects_do_not_leak(session, project, locales, owner):
    en, _ = locales
    add_label(session, project, "greeting", [(en, "Hi")])

    other = create_project(
        session=session, project_in=ProjectCreate(name="globex"), owner_id=owner.id
    )
    other_en = create_locale(session=session, project=other, locale_in=LocaleCreate(name="en"))
    add_label(session, other, "farewell", [(other_en, "Bye")])

    assert resolve_translations(session=session, project=project) == {
        "en": {"greeting": "Hi"},
        "it": {},
    }


def test_single_locale(session, project, locales):
    en, _ = locales
    add_label(session, project, "menu.open", [(en, "Open")])

    assert resolve_locale_translations(session=session, project=project, locale="en") == {
        "menu.open": "Open"
    }
    assert resolve_locale_translations(
        session=session, project=project, locale="en", mode=OutputMode.NESTED
    ) == {"menu": {"open": "Open"}}
    assert resolve_locale_translations(session=session, project=project, locale="fr") == {}


def test_nested_output_flattens_back_to_flat_output(session, project, locales):
    en, it = locales
    add_label(session, project, "app.menu.file", [(en, "File"), (it, "File")])
    add_label(session, project, "app.menu.edit", [(en, "Edit")])
    add_label(session, project, "app.title", [(en, "App"), (it, "Applicazione")])
    add_label(session, project, "errors.not-found", [(it, "Non trovato")])

    flat = resolve_translations(session=session, project=project)
    nested = resolve_translations(session=session, project=project, mode=OutputMode.NESTED)

    assert {locale: flatten(tree) for locale, tree in nested.items()} == flat


def test_nested_mode_raises_on_colliding_data(session, project, locales):
    en, _ = locales
    # Written directly; the label API refuses such pairs
    add_label(session, project, "a", [(en, "parent")])
    add_label(session, project, "a.b", [(en, "child")])

    assert resolve_translations(session=session, project=project)["en"] == {
        "a": "parent",
        "a.b": "child",
    }
    with pytest.raises(LabelKeyCollisionError):
        resolve_translations(session=session, project=project, mode=OutputMode.NESTED)
