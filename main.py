"""Happy Homes - Property Listing API."""

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.config import get_settings
from app.exceptions import AppError
from app.rate_limit import limiter
from app.routers import auth_router, properties_router, users_router
from app.services.image_store import URL_PREFIX
from app.services.jwt import get_jwt_service

# Logging
logger = logging.getLogger("happy_homes")
logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Refuse to start with an invalid configuration."""
    errors = settings.validate()
    if errors:
        for error in errors:
            logger.error("Configuration error: %s", error)
        raise RuntimeError("Invalid configuration: " + "; ".join(errors))
    get_jwt_service()
    logger.info("Happy Homes started (env=%s, uploads=%s)", settings.APP_ENV, settings.UPLOAD_DIR)
    yield


app = FastAPI(title="Happy Homes", version="0.1.0", lifespan=lifespan)
app.state.limiter = limiter


# --- Security headers middleware ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


# --- Request size limit middleware ---
class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    # Every image at its maximum size, plus 1MB for form fields
    MAX_BODY_SIZE = (settings.MAX_IMAGES_PER_PROPERTY * settings.MAX_IMAGE_SIZE_MB + 1) * 1024 * 1024

    async def dispatch(self, request: Request, call_next) -> Response:
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.MAX_BODY_SIZE:
            return JSONResponse(status_code=413, content={"detail": "Request body too large"})
        return await call_next(request)


# --- Audit logging middleware ---
class AuditLogMiddleware(BaseHTTPMiddleware):
    AUDIT_PATHS = ("/api/register", "/api/login", "/api/auth/", "/api/properties")

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.time()
        response = await call_next(request)
        duration_ms = (time.time() - start) * 1000

        path = request.url.path
        method = request.method
        if method in ("POST", "DELETE") and path.startswith(self.AUDIT_PATHS):
            logger.info(
                "AUDIT %s %s -> %d (%.0fms) from %s",
                method,
                path,
                response.status_code,
                duration_ms,
                request.client.host if request.client else "unknown",
            )

        return response


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestSizeLimitMiddleware)
app.add_middleware(AuditLogMiddleware)

# Stored images
Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount(URL_PREFIX, StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

# API routers
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(properties_router)


# --- Error handlers ---
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Map application errors to their status code."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed or missing input as 400 with the offending fields."""
    fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
    detail = f"Missing or invalid fields: {', '.join(fields)}" if fields else "Invalid request"
    return JSONResponse(status_code=400, content={"detail": detail})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Log storage failures without leaking their text to the caller."""
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle rate limit exceeded."""
    return JSONResponse(status_code=429, content={"detail": "Rate limit exceeded. Try again later."})


# --- Health check ---
@app.get("/api/health")
def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok", "app": "happy-homes", "version": "0.1.0"}
