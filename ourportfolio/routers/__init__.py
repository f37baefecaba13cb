"""API routers."""

from ourportfolio.routers.portfolios import router as portfolios_router
from ourportfolio.routers.projects import router as projects_router
from ourportfolio.routers.users import router as users_router

__all__ = ["users_router", "portfolios_router", "projects_router"]
