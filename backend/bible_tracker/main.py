import logging
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bible_tracker.api.guard import RouteGuard, RouteGuardMiddleware
from bible_tracker.api.routes import auth, pages, readings
from bible_tracker.core.config import Settings, get_settings
from bible_tracker.core.database import Base, create_db_engine, create_session_factory
from bible_tracker.core.security import TokenService
from bible_tracker.core.session_cookie import SessionCookieManager
# Models must be imported so their tables are registered on Base.metadata
from bible_tracker.models import reading, user  # noqa: F401

logger = logging.getLogger(__name__)


def describe_validation_error(exc: RequestValidationError) -> str:
    """Turn pydantic's error list into the single message returned to clients"""
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    error = errors[0]
    raw_loc = error.get("loc", ())
    # Unparseable JSON is reported at ("body", <character offset>)
    if error.get("type") == "json_invalid" or (raw_loc and isinstance(raw_loc[-1], int)):
        return "Invalid JSON body"

    loc = [str(part) for part in raw_loc if part not in ("body", "query", "path")]
    field = loc[-1] if loc else "request"

    if field == "gender":
        return "Invalid gender value"
    if error.get("type") in ("missing", "string_too_short"):
        return f"{field} is required"
    return f"Invalid value for {field}"


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": describe_validation_error(exc)},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Settings are loaded once here and everything that needs them (token
    signing, cookies, database) is constructed from this one object.
    """
    settings = settings or get_settings()

    engine = create_db_engine(settings.DATABASE_URL)
    # In production, use migrations instead of create_all
    Base.metadata.create_all(bind=engine)

    token_service = TokenService(
        secret_key=settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        default_expires=timedelta(seconds=settings.SESSION_MAX_AGE_SECONDS),
    )
    session_cookies = SessionCookieManager(
        cookie_name=settings.SESSION_COOKIE_NAME,
        secure=settings.PRODUCTION,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        remember_me_max_age=settings.REMEMBER_ME_MAX_AGE_SECONDS,
    )

    app = FastAPI(
        title="Bible Tracker API",
        description="Personal Bible-reading tracker",
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.token_service = token_service
    app.state.session_cookies = session_cookies

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.add_middleware(
        RouteGuardMiddleware,
        guard=RouteGuard(token_service, settings.SESSION_COOKIE_NAME),
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,  # session cookie
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth.router)
    app.include_router(readings.router)
    app.include_router(pages.router)

    @app.get("/health")
    async def health():
        """Health check endpoint - used by monitoring/deployment tools"""
        return {"status": "healthy"}

    logger.info(f"Application created (production={settings.PRODUCTION})")
    return app
