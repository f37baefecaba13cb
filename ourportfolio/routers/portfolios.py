"""Portfolio API endpoints."""

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.orm import Session

from ourportfolio.database import get_db
from ourportfolio.dependencies import CurrentUser, get_current_user
from ourportfolio.schemas.common import PageResponse, ResponseEnvelope, SliceResponse
from ourportfolio.schemas.portfolio import PortfolioDetailResponse, PortfolioFields, PortfolioResponse
from ourportfolio.services.portfolio import get_portfolio_service
from ourportfolio.services.storage import ImageUpload

router = APIRouter(prefix="/api/portfolios", tags=["Portfolios"])


@router.post("", response_model=ResponseEnvelope[PortfolioDetailResponse])
async def create_portfolio(
    title: str = Form(...),
    tech_stack: str | None = Form(default=None),
    residence: str | None = Form(default=None),
    location: str | None = Form(default=None),
    telephone: str | None = Form(default=None),
    experience: str | None = Form(default=None),
    description: str | None = Form(default=None),
    youtube_url: str | None = Form(default=None),
    blog_url: str | None = Form(default=None),
    github_id: str | None = Form(default=None),
    category: str | None = Form(default=None),
    filter: str | None = Form(default=None),
    image: UploadFile | None = File(default=None),
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ResponseEnvelope[PortfolioDetailResponse]:
    """Publish a new portfolio."""
    fields = PortfolioFields(
        title=title,
        tech_stack=tech_stack,
        residence=residence,
        location=location,
        telephone=telephone,
        experience=experience,
        description=description,
        youtube_url=youtube_url,
        blog_url=blog_url,
        github_id=github_id,
        category=category,
        filter=filter,
    )
    upload = None
    if image is not None:
        upload = ImageUpload(data=await image.read(), content_type=image.content_type)

    data = get_portfolio_service().create_portfolio(db, user.user_id, fields, upload)
    return ResponseEnvelope[PortfolioDetailResponse].success("포트폴리오 작성 완료", PortfolioDetailResponse(**data))


@router.get("", response_model=ResponseEnvelope[SliceResponse[PortfolioResponse]])
def list_portfolios(
    last_portfolio_id: int = Query(..., alias="last-portfolio-id"),
    size: int = Query(default=12, ge=1, le=100),
    category: str | None = None,
    filter: str | None = None,
    db: Session = Depends(get_db),
) -> ResponseEnvelope[SliceResponse[PortfolioResponse]]:
    """Slice of portfolios older than the cursor, optionally filtered."""
    items, has_next = get_portfolio_service().get_portfolios(db, last_portfolio_id, size, category, filter)
    page = SliceResponse[PortfolioResponse](
        items=[PortfolioResponse(**item) for item in items],
        size=size,
        has_next=has_next,
    )
    return ResponseEnvelope[SliceResponse[PortfolioResponse]].success("조회 완료", page)


@router.get("/search", response_model=ResponseEnvelope[PageResponse[PortfolioResponse]])
def search_portfolios(
    keyword: str,
    page: int = Query(default=0, ge=0),
    size: int = Query(default=12, ge=1, le=100),
    db: Session = Depends(get_db),
) -> ResponseEnvelope[PageResponse[PortfolioResponse]]:
    """Keyword search across title, tech stack and description."""
    items, total, total_pages = get_portfolio_service().search_portfolios(db, keyword, page, size)
    result = PageResponse[PortfolioResponse](
        items=[PortfolioResponse(**item) for item in items],
        page=page,
        size=size,
        total=total,
        total_pages=total_pages,
    )
    return ResponseEnvelope[PageResponse[PortfolioResponse]].success("검색 완료", result)


@router.get("/myportfolios", response_model=ResponseEnvelope[list[PortfolioResponse]])
def my_portfolios(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ResponseEnvelope[list[PortfolioResponse]]:
    """All of the caller's portfolios, newest first."""
    items = get_portfolio_service().get_my_portfolios(db, user.user_id)
    return ResponseEnvelope[list[PortfolioResponse]].success(
        "MY PORTFOLIO 조회 완료", [PortfolioResponse(**item) for item in items]
    )


@router.get("/id", response_model=ResponseEnvelope[int])
def last_portfolio_id(
    category: str | None = None,
    filter: str | None = None,
    db: Session = Depends(get_db),
) -> ResponseEnvelope[int]:
    """Starting cursor for the portfolio slice."""
    last_id = get_portfolio_service().get_last_portfolio_id(db, category, filter)
    return ResponseEnvelope[int].success("Last Id 조회 완료", last_id)


@router.get("/{portfolio_id}", response_model=ResponseEnvelope[PortfolioDetailResponse])
def get_portfolio(portfolio_id: int, db: Session = Depends(get_db)) -> ResponseEnvelope[PortfolioDetailResponse]:
    """Get a portfolio with all of its details."""
    data = get_portfolio_service().get_portfolio(db, portfolio_id)
    return ResponseEnvelope[PortfolioDetailResponse].success("조회 완료", PortfolioDetailResponse(**data))


@router.delete("/{portfolio_id}", response_model=ResponseEnvelope[None])
def delete_portfolio(
    portfolio_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ResponseEnvelope[None]:
    """Delete one of the caller's portfolios."""
    get_portfolio_service().delete_portfolio(db, portfolio_id, user.user_id)
    return ResponseEnvelope[None].success("포트폴리오 삭제 완료")
