"""Project API endpoints."""

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.orm import Session

from ourportfolio.database import get_db
from ourportfolio.dependencies import CurrentUser, get_current_user
from ourportfolio.schemas.common import ResponseEnvelope, SliceResponse
from ourportfolio.schemas.project import ProjectFields, ProjectResponse
from ourportfolio.services.project import get_project_service
from ourportfolio.services.storage import ImageUpload

router = APIRouter(prefix="/api/projects", tags=["Projects"])


@router.post("", response_model=ResponseEnvelope[ProjectResponse])
async def create_project(
    title: str = Form(...),
    term: str | None = Form(default=None),
    people: str | None = Form(default=None),
    position: str | None = Form(default=None),
    description: str | None = Form(default=None),
    images: list[UploadFile] = File(default=[]),
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ResponseEnvelope[ProjectResponse]:
    """Create a project with any number of images."""
    fields = ProjectFields(title=title, term=term, people=people, position=position, description=description)
    uploads = [ImageUpload(data=await image.read(), content_type=image.content_type) for image in images]

    data = get_project_service().create_project(db, user.user_id, fields, uploads)
    return ResponseEnvelope[ProjectResponse].success("프로젝트 생성 완료", ProjectResponse(**data))


@router.get("", response_model=ResponseEnvelope[SliceResponse[ProjectResponse]])
def list_projects(
    last_project_id: int | None = Query(default=None, alias="last-project-id"),
    size: int = Query(default=12, ge=1, le=100),
    db: Session = Depends(get_db),
) -> ResponseEnvelope[SliceResponse[ProjectResponse]]:
    """Slice of projects, newest first."""
    items, has_next = get_project_service().get_projects(db, last_project_id, size)
    page = SliceResponse[ProjectResponse](
        items=[ProjectResponse(**item) for item in items],
        size=size,
        has_next=has_next,
    )
    return ResponseEnvelope[SliceResponse[ProjectResponse]].success("조회 완료", page)


@router.get("/{project_id}", response_model=ResponseEnvelope[ProjectResponse])
def get_project(project_id: int, db: Session = Depends(get_db)) -> ResponseEnvelope[ProjectResponse]:
    """Get a project with its images."""
    data = get_project_service().get_project(db, project_id)
    return ResponseEnvelope[ProjectResponse].success("조회 완료", ProjectResponse(**data))


@router.delete("/{project_id}", response_model=ResponseEnvelope[None])
def delete_project(
    project_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ResponseEnvelope[None]:
    """Delete one of the caller's projects."""
    get_project_service().delete_project(db, project_id, user.user_id)
    return ResponseEnvelope[None].success("프로젝트 삭제 완료")
