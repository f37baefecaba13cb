"""OurPortfolio - Portfolio & Project Showcase API."""

import logging
import time
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from ourportfolio import __version__
from ourportfolio.config import get_settings
from ourportfolio.exceptions import AppError
from ourportfolio.rate_limit import limiter
from ourportfolio.routers import portfolios_router, projects_router, users_router
from ourportfolio.services.token import ACCESS_TOKEN_HEADER, REFRESH_TOKEN_HEADER

# Logging
logger = logging.getLogger("ourportfolio")
logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

settings = get_settings()
for warning in settings.validate():
    logger.warning(warning)

app = FastAPI(title="OurPortfolio", version=__version__)
app.state.limiter = limiter


def envelope(status_code: int, message: str, data=None) -> JSONResponse:
    """Render an error or message into the uniform response envelope."""
    return JSONResponse(status_code=status_code, content={"status_code": status_code, "message": message, "data": data})


# --- Security headers middleware ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Content-Security-Policy"] = "default-src 'none'; img-src 'self'; frame-ancestors 'none'"
        return response


# --- Request size limit middleware ---
class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    # Room for several images per multipart request
    MAX_BODY_SIZE = (settings.MAX_IMAGE_SIZE_MB * 5 + 1) * 1024 * 1024

    async def dispatch(self, request: Request, call_next) -> Response:
        content_length = request.headers.get("content-length")
        if content_length and int(content_length) > self.MAX_BODY_SIZE:
            return envelope(413, "Request body too large")
        return await call_next(request)


# --- Audit logging middleware ---
class AuditLogMiddleware(BaseHTTPMiddleware):
    AUDIT_PREFIXES = ("/api/users",)
    AUDIT_METHODS = ("POST", "PATCH", "DELETE")

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.time()
        response = await call_next(request)
        duration_ms = (time.time() - start) * 1000

        path = request.url.path
        method = request.method
        if method in self.AUDIT_METHODS and path.startswith(self.AUDIT_PREFIXES):
            logger.info(
                "AUDIT %s %s -> %d (%.0fms) from %s",
                method,
                path,
                response.status_code,
                duration_ms,
                request.client.host if request.client else "unknown",
            )

        return response


# --- Token headers must be readable by browser clients ---
class ExposeTokenHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        if ACCESS_TOKEN_HEADER in response.headers or REFRESH_TOKEN_HEADER in response.headers:
            response.headers["Access-Control-Expose-Headers"] = f"{ACCESS_TOKEN_HEADER}, {REFRESH_TOKEN_HEADER}"
        return response


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(ExposeTokenHeadersMiddleware)
app.add_middleware(RequestSizeLimitMiddleware)
app.add_middleware(AuditLogMiddleware)

# Uploaded images
Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount(settings.UPLOAD_URL_PREFIX, StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

# API routers
app.include_router(users_router)
app.include_router(portfolios_router)
app.include_router(projects_router)


# --- Exception handlers: everything leaves as an envelope ---
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render expected application errors."""
    return envelope(exc.status_code, exc.detail)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Render framework HTTP errors (401 from auth dependencies, 404 routes)."""
    response = envelope(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed request bodies and parameters."""
    errors = [{"loc": list(err.get("loc", ())), "msg": err.get("msg", "")} for err in exc.errors()]
    return envelope(422, "요청 형식이 올바르지 않습니다.", errors)


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """A uniqueness race lost at commit time. Not retried."""
    logger.warning("Constraint violation on %s %s: %s", request.method, request.url.path, exc.orig)
    return envelope(409, "이미 존재하는 데이터입니다.")


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle rate limit exceeded."""
    return envelope(429, "Rate limit exceeded. Try again later.")


# --- Health check ---
@app.get("/api/health")
def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok", "app": "ourportfolio", "version": __version__}
