"""Portfolio service for publishing, listing and searching portfolios."""

import math
from dataclasses import asdict

from sqlalchemy import func, or_
from sqlalchemy.orm import Query, Session

from ourportfolio.exceptions import AppError, ErrorKind
from ourportfolio.models.portfolio import Portfolio
from ourportfolio.models.user import User
from ourportfolio.schemas.portfolio import PortfolioFields
from ourportfolio.services.storage import ImageUpload, StorageService, get_storage_service


def portfolio_summary(portfolio: Portfolio) -> dict:
    """Flatten a portfolio and its owner into a list-item dict."""
    return {
        "id": portfolio.id,
        "title": portfolio.title,
        "tech_stack": portfolio.tech_stack,
        "experience": portfolio.experience,
        "category": portfolio.category,
        "filter": portfolio.filter,
        "portfolio_image": portfolio.portfolio_image,
        "user_id": portfolio.user_id,
        "nickname": portfolio.user.nickname,
        "profile_image": portfolio.user.profile_image,
        "created_at": portfolio.created_at,
    }


def portfolio_detail(portfolio: Portfolio) -> dict:
    data = portfolio_summary(portfolio)
    data.update(
        {
            "residence": portfolio.residence,
            "location": portfolio.location,
            "telephone": portfolio.telephone,
            "description": portfolio.description,
            "youtube_url": portfolio.youtube_url,
            "blog_url": portfolio.blog_url,
            "github_id": portfolio.github_id,
        }
    )
    return data


class PortfolioService:
    """Handles portfolio creation, retrieval, slice listing and keyword search."""

    def __init__(self, storage: StorageService | None = None) -> None:
        self.storage = storage or get_storage_service()

    def create_portfolio(
        self, db: Session, user_id: int, fields: PortfolioFields, image: ImageUpload | None = None
    ) -> dict:
        """Create a portfolio owned by user_id."""
        owner = db.get(User, user_id)
        if not owner or owner.is_deleted:
            raise AppError(ErrorKind.NOT_FOUND_USER)

        portfolio = Portfolio(user_id=user_id, **asdict(fields))
        stored_url = None
        if image is not None:
            stored_url = self.storage.upload_file(image.data, image.content_type)
            portfolio.portfolio_image = stored_url
        db.add(portfolio)
        try:
            db.commit()
        except Exception:
            db.rollback()
            self.storage.delete_file(stored_url)
            raise
        db.refresh(portfolio)
        return portfolio_detail(portfolio)

    def get_portfolio(self, db: Session, portfolio_id: int) -> dict:
        portfolio = db.get(Portfolio, portfolio_id)
        if not portfolio:
            raise AppError(ErrorKind.NOT_FOUND_PORTFOLIO)
        return portfolio_detail(portfolio)

    def get_portfolios(
        self,
        db: Session,
        last_portfolio_id: int,
        size: int,
        category: str | None = None,
        filter: str | None = None,
    ) -> tuple[list[dict], bool]:
        """Get the slice of portfolios older than last_portfolio_id. Returns (items, has_next)."""
        query = self._filtered(db.query(Portfolio), category, filter).filter(Portfolio.id < last_portfolio_id)
        rows = query.order_by(Portfolio.id.desc()).limit(size + 1).all()
        has_next = len(rows) > size
        return [portfolio_summary(p) for p in rows[:size]], has_next

    def search_portfolios(self, db: Session, keyword: str, page: int, size: int) -> tuple[list[dict], int, int]:
        """Search title, tech stack and description. Returns (items, total, total_pages)."""
        pattern = f"%{keyword}%"
        query = db.query(Portfolio).filter(
            or_(
                Portfolio.title.ilike(pattern),
                Portfolio.tech_stack.ilike(pattern),
                Portfolio.description.ilike(pattern),
            )
        )

        total = query.count()
        rows = query.order_by(Portfolio.id.desc()).offset(page * size).limit(size).all()
        total_pages = math.ceil(total / size) if size else 0
        return [portfolio_summary(p) for p in rows], total, total_pages

    def get_my_portfolios(self, db: Session, user_id: int) -> list[dict]:
        rows = db.query(Portfolio).filter(Portfolio.user_id == user_id).order_by(Portfolio.id.desc()).all()
        return [portfolio_summary(p) for p in rows]

    def get_last_portfolio_id(self, db: Session, category: str | None = None, filter: str | None = None) -> int:
        """Cursor to start a slice from: one past the newest matching portfolio id."""
        last_id = self._filtered(db.query(func.max(Portfolio.id)), category, filter).scalar()
        return (last_id or 0) + 1

    def delete_portfolio(self, db: Session, portfolio_id: int, user_id: int) -> None:
        portfolio = db.get(Portfolio, portfolio_id)
        if not portfolio:
            raise AppError(ErrorKind.NOT_FOUND_PORTFOLIO)
        if portfolio.user_id != user_id:
            raise AppError(ErrorKind.UNAUTHORIZED)

        image_url = portfolio.portfolio_image
        db.delete(portfolio)
        db.commit()
        self.storage.delete_file(image_url)

    def _filtered(self, query: Query, category: str | None, filter: str | None) -> Query:
        if category:
            query = query.filter(Portfolio.category == category)
        if filter:
            query = query.filter(Portfolio.filter == filter)
        return query


_portfolio_service: PortfolioService | None = None


def get_portfolio_service() -> PortfolioService:
    """Get singleton portfolio service instance."""
    global _portfolio_service
    if _portfolio_service is None:
        _portfolio_service = PortfolioService()
    return _portfolio_service
