import uuid
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Path, status

from localizard.access.deps import WritableProject
from localizard.auth import Message, SessionDep
from localizard.core.exceptions import ResourceNotFoundError
from localizard.labels.crud import (
    create_label,
    delete_label,
    get_label,
    get_label_translations,
    get_project_labels,
    update_label,
)
from localizard.labels.models import (
    Label,
    LabelCreate,
    LabelDetail,
    LabelPublic,
    LabelSummary,
    LabelUpdate,
)
from localizard.translations.crud import upsert_translations
from localizard.translations.models import (
    TranslationPublic,
    TranslationsUpdate,
    UpsertResult,
)

router = APIRouter(prefix="/dashboard/projects/{project_name}/labels", tags=["labels"])


def get_project_label(
    session: SessionDep,
    project: WritableProject,
    label_id: Annotated[uuid.UUID, Path(description="Label UUID")],
) -> Label:
    """Get a label of the project.

    Raises:
        ResourceNotFoundError: If the project has no label with this ID
    """
    label = get_label(session=session, project_id=project.id, label_id=label_id)
    if label is None:
        raise ResourceNotFoundError("Label", str(label_id))
    return label


ProjectLabel = Annotated[Label, Depends(get_project_label)]


@router.get("/", response_model=list[LabelSummary])
def read_labels(session: SessionDep, project: WritableProject) -> Any:
    """List the project's labels by key, with the locales each is translated in."""
    return get_project_labels(session=session, project_id=project.id)


@router.post("/", response_model=LabelPublic, status_code=status.HTTP_201_CREATED)
def create_label_endpoint(
    session: SessionDep,
    project: WritableProject,
    label_in: LabelCreate,
) -> Any:
    return create_label(session=session, project=project, label_in=label_in)


@router.get("/{label_id}", response_model=LabelDetail)
def read_label(session: SessionDep, label: ProjectLabel) -> Any:
    """Get a label with its translations."""
    translations = get_label_translations(session=session, label_id=label.id)
    return LabelDetail.model_validate(
        label,
        update={
            "translations": [TranslationPublic.model_validate(t) for t in translations]
        },
    )


@router.patch("/{label_id}", response_model=LabelPublic)
def update_label_endpoint(
    session: SessionDep,
    label: ProjectLabel,
    label_in: LabelUpdate,
) -> Any:
    """Rename a label or change its description."""
    return update_label(session=session, label=label, label_in=label_in)


@router.delete("/{label_id}", response_model=Message)
def delete_label_endpoint(
    session: SessionDep,
    project: WritableProject,
    label_id: Annotated[uuid.UUID, Path(description="Label UUID")],
) -> Message:
    """Delete a label and all of its translations."""
    delete_label(session=session, project_id=project.id, label_id=label_id)
    return Message(message="Label deleted successfully")


@router.put("/{label_id}/translations", response_model=UpsertResult)
def upsert_label_translations(
    session: SessionDep,
    label: ProjectLabel,
    body: TranslationsUpdate,
) -> Any:
    """Write the label's values for several locales at once.

    Either every submitted value is stored or none is. Values equal to the
    stored ones are left untouched, and locales from other projects are
    ignored.
    """
    return upsert_translations(session=session, label=label, updates=body.translations)
