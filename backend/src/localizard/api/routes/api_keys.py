from typing import Any

from fastapi import APIRouter

from localizard.access.deps import WritableProject
from localizard.api_keys.crud import get_api_key, rotate_api_key
from localizard.api_keys.models import ApiKeyPublic
from localizard.auth import SessionDep
from localizard.core.exceptions import ResourceNotFoundError

router = APIRouter(prefix="/dashboard/projects/{project_name}/api-key", tags=["api-keys"])


@router.get("/", response_model=ApiKeyPublic)
def read_api_key(session: SessionDep, project: WritableProject) -> Any:
    """Get the project's current API key."""
    api_key = get_api_key(session=session, project_id=project.id)
    if api_key is None:
        raise ResourceNotFoundError("ApiKey")
    return api_key


@router.post("/rotate", response_model=ApiKeyPublic)
def rotate_api_key_endpoint(session: SessionDep, project: WritableProject) -> Any:
    """Replace the project's API key. The old key stops working immediately."""
    return rotate_api_key(session=session, project=project)
