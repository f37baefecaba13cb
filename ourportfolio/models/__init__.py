"""SQLAlchemy models."""

from ourportfolio.models.portfolio import Portfolio
from ourportfolio.models.project import Project, ProjectImage
from ourportfolio.models.refresh_token import RefreshToken
from ourportfolio.models.user import User

__all__ = ["User", "RefreshToken", "Portfolio", "Project", "ProjectImage"]
