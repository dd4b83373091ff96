import uuid

import pytest

from localizard.access.policy import (
    Allow,
    Anonymous,
    ApiKeyAccess,
    Capability,
    Deny,
    DenyReason,
    OwnerSession,
    ProjectAccessView,
    authorize,
)

OWNER_ID = uuid.uuid4()
STRANGER_ID = uuid.uuid4()
KEY = "5f0c7f9e-1b7e-4f41-9a8e-6f3f2f1d2c3b"


@pytest.fixture
def private_project() -> ProjectAccessView:
    return ProjectAccessView(owner_id=OWNER_ID, is_public=False, api_key=KEY)


@pytest.fixture
def public_project() -> ProjectAccessView:
    return ProjectAccessView(owner_id=OWNER_ID, is_public=True, api_key=KEY)


class TestRead:
    def test_owner_session_allowed_without_key(self, private_project):
        decision = authorize(OwnerSession(OWNER_ID), private_project, Capability.READ)
        assert decision == Allow()

    def test_matching_key_allowed(self, private_project):
        decision = authorize(ApiKeyAccess(KEY), private_project, Capability.READ)
        assert decision == Allow()

    def test_public_project_allows_anyone(self, public_project):
        assert authorize(Anonymous(), public_project, Capability.READ) == Allow()
        assert authorize(ApiKeyAccess("wrong"), public_project, Capability.READ) == Allow()
        assert authorize(OwnerSession(STRANGER_ID), public_project, Capability.READ) == Allow()

    @pytest.mark.parametrize(
        "context",
        [Anonymous(), ApiKeyAccess("wrong"), OwnerSession(STRANGER_ID)],
        ids=["no-key", "wrong-key", "stranger-session"],
    )
    def test_private_denials_look_like_missing_project(self, private_project, context):
        denied = authorize(context, private_project, Capability.READ)
        missing = authorize(context, None, Capability.READ)
        assert denied == missing == Deny(DenyReason.NOT_FOUND)

    def test_key_never_matches_project_without_key(self):
        view = ProjectAccessView(owner_id=OWNER_ID, is_public=False, api_key=None)
        assert authorize(ApiKeyAccess(""), view, Capability.READ) == Deny(
            DenyReason.NOT_FOUND
        )


class TestWrite:
    def test_owner_allowed(self, private_project):
        assert authorize(OwnerSession(OWNER_ID), private_project, Capability.WRITE) == Allow()

    @pytest.mark.parametrize("context", [Anonymous(), ApiKeyAccess(KEY)])
    def test_without_session_is_unauthenticated(self, public_project, context):
        decision = authorize(context, public_project, Capability.WRITE)
        assert decision == Deny(DenyReason.UNAUTHENTICATED)

    def test_non_owner_sees_not_found(self, public_project):
        decision = authorize(OwnerSession(STRANGER_ID), public_project, Capability.WRITE)
        assert decision == Deny(DenyReason.NOT_FOUND)

    def test_missing_project_with_session_is_not_found(self):
        decision = authorize(OwnerSession(OWNER_ID), None, Capability.WRITE)
        assert decision == Deny(DenyReason.NOT_FOUND)


def test_view_from_project(session, project):
    view = ProjectAccessView.from_project(project)
    assert view.owner_id == project.owner_id
    assert view.is_public is False
    assert view.api_key == project.api_key.key
