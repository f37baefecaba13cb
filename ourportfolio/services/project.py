"""Project service for creating and browsing projects."""

from dataclasses import asdict

from sqlalchemy.orm import Session

from ourportfolio.exceptions import AppError, ErrorKind
from ourportfolio.models.project import Project, ProjectImage
from ourportfolio.models.user import User
from ourportfolio.schemas.project import ProjectFields
from ourportfolio.services.storage import ImageUpload, StorageService, get_storage_service


def project_to_dict(project: Project) -> dict:
    return {
        "id": project.id,
        "title": project.title,
        "term": project.term,
        "people": project.people,
        "position": project.position,
        "description": project.description,
        "user_id": project.user_id,
        "nickname": project.user.nickname,
        "images": [image.image_url for image in project.images],
        "created_at": project.created_at,
    }


class ProjectService:
    """Handles project creation, retrieval and deletion."""

    def __init__(self, storage: StorageService | None = None) -> None:
        self.storage = storage or get_storage_service()

    def create_project(
        self, db: Session, user_id: int, fields: ProjectFields, images: list[ImageUpload] | None = None
    ) -> dict:
        """Create a project with its images. Images are validated before any is stored."""
        owner = db.get(User, user_id)
        if not owner or owner.is_deleted:
            raise AppError(ErrorKind.NOT_FOUND_USER)

        images = images or []
        for image in images:
            error = self.storage.validate_image(image.content_type, len(image.data))
            if error:
                raise AppError(ErrorKind.UNSUPPORTED_IMAGE, error)

        project = Project(user_id=user_id, **asdict(fields))
        stored_urls = []
        try:
            for image in images:
                url = self.storage.upload_file(image.data, image.content_type)
                stored_urls.append(url)
                project.images.append(ProjectImage(image_url=url))
            db.add(project)
            db.commit()
        except Exception:
            db.rollback()
            for url in stored_urls:
                self.storage.delete_file(url)
            raise
        db.refresh(project)
        return project_to_dict(project)

    def get_project(self, db: Session, project_id: int) -> dict:
        project = db.get(Project, project_id)
        if not project:
            raise AppError(ErrorKind.NOT_FOUND_PROJECT)
        return project_to_dict(project)

    def get_projects(self, db: Session, last_project_id: int | None, size: int) -> tuple[list[dict], bool]:
        """Get the slice of projects older than last_project_id (newest first when None)."""
        query = db.query(Project)
        if last_project_id is not None:
            query = query.filter(Project.id < last_project_id)
        rows = query.order_by(Project.id.desc()).limit(size + 1).all()
        return [project_to_dict(p) for p in rows[:size]], len(rows) > size

    def delete_project(self, db: Session, project_id: int, user_id: int) -> None:
        project = db.get(Project, project_id)
        if not project:
            raise AppError(ErrorKind.NOT_FOUND_PROJECT)
        if project.user_id != user_id:
            raise AppError(ErrorKind.UNAUTHORIZED)

        image_urls = [image.image_url for image in project.images]
        db.delete(project)
        db.commit()
        for url in image_urls:
            self.storage.delete_file(url)


_project_service: ProjectService | None = None


def get_project_service() -> ProjectService:
    """Get singleton project service instance."""
    global _project_service
    if _project_service is None:
        _project_service = ProjectService()
    return _project_service
