"""Project access decisions.

`authorize()` is a pure function over an access context, a view of the
target project, and the capability the caller needs. It never touches the
database and never raises; the dependency layer turns a `Deny` into the
matching HTTP error.

Read denials are always NOT_FOUND, whether the project is missing, the key
is absent, or the key is wrong. A caller cannot use the read API to learn
that a private project exists.
"""

from dataclasses import dataclass
from enum import Enum
import secrets
import uuid

from localizard.projects.models import Project


class Capability(str, Enum):
    READ = "read"
    WRITE = "write"


@dataclass(frozen=True)
class OwnerSession:
    user_id: uuid.UUID


@dataclass(frozen=True)
class ApiKeyAccess:
    key: str


@dataclass(frozen=True)
class Anonymous:
    pass


AccessContext = OwnerSession | ApiKeyAccess | Anonymous


@dataclass(frozen=True)
class ProjectAccessView:
    """The parts of a project an access decision looks at."""

    owner_id: uuid.UUID
    is_public: bool
    api_key: str | None = None

    @classmethod
    def from_project(cls, project: Project) -> "ProjectAccessView":
        return cls(
            owner_id=project.owner_id,
            is_public=project.public,
            api_key=project.api_key.key if project.api_key else None,
        )


class DenyReason(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Allow:
    pass


@dataclass(frozen=True)
class Deny:
    reason: DenyReason


Decision = Allow | Deny


def _is_owner(context: AccessContext, project: ProjectAccessView) -> bool:
    return isinstance(context, OwnerSession) and context.user_id == project.owner_id


def _key_matches(context: AccessContext, project: ProjectAccessView) -> bool:
    if not isinstance(context, ApiKeyAccess) or project.api_key is None:
        return False
    return secrets.compare_digest(context.key.encode(), project.api_key.encode())


def authorize(
    context: AccessContext,
    project: ProjectAccessView | None,
    capability: Capability,
) -> Decision:
    """Decide whether `context` may use `capability` on `project`.

    Args:
        context: Who is asking
        project: Access view of the target, or None if it does not exist
        capability: READ for the consumer API, WRITE for any mutation

    Returns:
        Allow, or Deny carrying the reason to report
    """
    if capability is Capability.WRITE:
        if not isinstance(context, OwnerSession):
            return Deny(DenyReason.UNAUTHENTICATED)
        if project is None or not _is_owner(context, project):
            return Deny(DenyReason.NOT_FOUND)
        return Allow()

    if project is None:
        return Deny(DenyReason.NOT_FOUND)
    if _is_owner(context, project):
        return Allow()
    if project.is_public:
        return Allow()
    if _key_matches(context, project):
        return Allow()
    return Deny(DenyReason.NOT_FOUND)
