from typing import Any

from fastapi import APIRouter, status

from localizard.access.deps import WritableProject
from localizard.auth import CurrentUser, Message, SessionDep
from localizard.labels.crud import get_project_labels
from localizard.locales.crud import get_project_locales
from localizard.locales.models import LocalePublic
from localizard.projects.crud import (
    create_project,
    delete_project,
    get_projects_by_owner,
    set_project_public,
)
from localizard.projects.models import (
    ProjectCreate,
    ProjectDetail,
    ProjectPublic,
    ProjectsPublic,
    ProjectUpdate,
)

router = APIRouter(prefix="/dashboard/projects", tags=["projects"])

# Owner listing lives beside the consumer API at /projects
listing_router = APIRouter(prefix="/projects", tags=["projects"])


@listing_router.get("/", response_model=ProjectsPublic)
def read_projects(
    session: SessionDep,
    current_user: CurrentUser,
    skip: int = 0,
    limit: int = 100,
) -> Any:
    """List the current user's projects by name."""
    projects, count = get_projects_by_owner(
        session=session, owner_id=current_user.id, skip=skip, limit=limit
    )
    return ProjectsPublic(data=projects, count=count)


@router.post("/", response_model=ProjectPublic, status_code=status.HTTP_201_CREATED)
def create_project_endpoint(
    session: SessionDep,
    current_user: CurrentUser,
    project_in: ProjectCreate,
) -> Any:
    """Create a project owned by the current user.

    The project starts private, with an API key already issued.
    """
    return create_project(session=session, project_in=project_in, owner_id=current_user.id)


@router.get("/{project_name}", response_model=ProjectDetail)
def read_project(session: SessionDep, project: WritableProject) -> Any:
    """Get a project with its locales and labels."""
    locales = get_project_locales(session=session, project_id=project.id)
    labels = get_project_labels(session=session, project_id=project.id)
    return ProjectDetail.model_validate(
        project,
        update={
            "locales": [LocalePublic.model_validate(locale) for locale in locales],
            "labels": labels,
        },
    )


@router.patch("/{project_name}", response_model=ProjectPublic)
def update_project(
    session: SessionDep,
    project: WritableProject,
    project_in: ProjectUpdate,
) -> Any:
    """Make a project public or private."""
    return set_project_public(session=session, project=project, public=project_in.public)


@router.delete("/{project_name}", response_model=Message)
def delete_project_endpoint(session: SessionDep, project: WritableProject) -> Message:
    """Delete a project and everything in it."""
    delete_project(session=session, project=project)
    return Message(message="Project deleted successfully")
