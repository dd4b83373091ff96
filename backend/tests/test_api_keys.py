from sqlmodel import select

from localizard.api_keys.crud import generate_api_key, get_api_key, rotate_api_key
from localizard.api_keys.models import ApiKey


def test_generated_keys_are_distinct():
    keys = {generate_api_key() for _ in range(100)}
    assert len(keys) == 100


def test_rotation_replaces_value_in_place(session, project):
    before = get_api_key(session=session, project_id=project.id)
    old_id, old_key = before.id, before.key

    rotated = rotate_api_key(session=session, project=project)

    assert rotated.id == old_id
    assert rotated.key != old_key
    assert len(session.exec(select(ApiKey)).all()) == 1


def test_rotation_creates_missing_key(session, project):
    session.delete(get_api_key(session=session, project_id=project.id))
    session.commit()

    created = rotate_api_key(session=session, project=project)

    assert created.project_id == project.id
    assert get_api_key(session=session, project_id=project.id).key == created.key
