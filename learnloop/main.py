"""FastAPI application entry point."""

from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError

from learnloop.config import configure_logging, get_settings
from learnloop.database import dispose_engine, initialize_database
from learnloop.domain.common.exceptions import DomainError, EntityNotFoundError
from learnloop.exceptions import LearnLoopError
from learnloop.infrastructure.common.rate_limit import limiter
from learnloop.infrastructure.common.routers import settings as settings_router
from learnloop.infrastructure.identity.routers import users
from learnloop.infrastructure.learning.routers import ai_content, quizzes, topics
from learnloop.infrastructure.social.routers import posts, realtime

settings = get_settings()
configure_logging(settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncGenerator[None, None]:
    initialize_database(settings)
    logger.info("application_started", environment=settings.ENVIRONMENT, version=settings.VERSION)
    yield
    dispose_engine()
    logger.info("application_stopped")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    docs_url=f"{settings.API_V1_PREFIX}/docs",
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def bind_log_context(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        method=request.method,
        path=request.url.path,
        caller=request.headers.get("x-user-id"),
    )
    return await call_next(request)


@app.exception_handler(LearnLoopError)
async def learnloop_error_handler(_: Request, exc: LearnLoopError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request_failed", error_code=exc.error_code, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


@app.exception_handler(DomainError)
async def domain_error_handler(_: Request, exc: DomainError) -> JSONResponse:
    # Domain rules reject input before anything is written
    if isinstance(exc, EntityNotFoundError):
        status_code, error_code = status.HTTP_404_NOT_FOUND, "not_found"
    else:
        status_code, error_code = status.HTTP_400_BAD_REQUEST, "validation_error"
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error": error_code, "retryable": False, "partial": False},
    )


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(_: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("store_error", error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "The data store failed to complete the request",
            "error": "store_error",
            "retryable": True,
            "partial": False,
        },
    )


app.include_router(users.router, prefix=settings.API_V1_PREFIX)
app.include_router(topics.router, prefix=settings.API_V1_PREFIX)
app.include_router(quizzes.router, prefix=settings.API_V1_PREFIX)
app.include_router(ai_content.router, prefix=settings.API_V1_PREFIX)
app.include_router(posts.router, prefix=settings.API_V1_PREFIX)
app.include_router(settings_router.router, prefix=settings.API_V1_PREFIX)
app.include_router(realtime.router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}
