from typing import Annotated

from fastapi import Depends, Path
from fastapi.security import APIKeyHeader

from localizard.access.policy import (
    AccessContext,
    Anonymous,
    ApiKeyAccess,
    Capability,
    Deny,
    DenyReason,
    OwnerSession,
    ProjectAccessView,
    authorize,
)
from localizard.auth.deps import LenientUser, OptionalUser, SessionDep
from localizard.auth.models import User
from localizard.core.exceptions import AuthenticationError, ResourceNotFoundError
from localizard.core.logging import get_logger
from localizard.projects.crud import get_project_by_name
from localizard.projects.models import Project

logger = get_logger(__name__)

api_key_header = APIKeyHeader(name="X-Api-Key", auto_error=False)

ApiKeyDep = Annotated[str | None, Depends(api_key_header)]
ProjectNameDep = Annotated[str, Path(description="Project name")]


def _build_context(user: User | None, api_key: str | None) -> AccessContext:
    if user is not None:
        return OwnerSession(user_id=user.id)
    if api_key:
        return ApiKeyAccess(key=api_key)
    return Anonymous()


def get_access_context(user: OptionalUser, api_key: ApiKeyDep) -> AccessContext:
    """Build the caller's access context.

    A bearer session takes precedence over an X-Api-Key header. An invalid
    bearer token is rejected with 401.
    """
    return _build_context(user, api_key)


def get_read_access_context(user: LenientUser, api_key: ApiKeyDep) -> AccessContext:
    """Build the access context for read-only consumer endpoints.

    An invalid bearer token counts as no token, so the caller falls back to
    the API key or to anonymous access.
    """
    return _build_context(user, api_key)


AccessContextDep = Annotated[AccessContext, Depends(get_access_context)]
ReadAccessContextDep = Annotated[AccessContext, Depends(get_read_access_context)]


def _load_authorized_project(
    session: SessionDep,
    context: AccessContext,
    project_name: str,
    capability: Capability,
) -> Project:
    project = get_project_by_name(session=session, name=project_name)
    view = ProjectAccessView.from_project(project) if project else None

    decision = authorize(context, view, capability)
    if isinstance(decision, Deny):
        logger.info(
            "access_denied",
            project=project_name,
            capability=capability.value,
            context=type(context).__name__,
            reason=decision.reason.value,
        )
        if decision.reason is DenyReason.UNAUTHENTICATED:
            raise AuthenticationError("Not authenticated")
        raise ResourceNotFoundError("Project", project_name)

    assert project is not None  # Allow implies the project exists
    return project


def get_readable_project(
    session: SessionDep, context: ReadAccessContextDep, project_name: ProjectNameDep
) -> Project:
    return _load_authorized_project(session, context, project_name, Capability.READ)


def get_writable_project(
    session: SessionDep, context: AccessContextDep, project_name: ProjectNameDep
) -> Project:
    return _load_authorized_project(session, context, project_name, Capability.WRITE)


ReadableProject = Annotated[Project, Depends(get_readable_project)]
WritableProject = Annotated[Project, Depends(get_writable_project)]
