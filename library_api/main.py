"""
FastAPI main application for the Book Library API.
"""

import time
import traceback
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog.repository import BookRepository
from library_api.auth import TokenService
from library_api.config import APIConfig, config
from library_api.errors import APIError
from library_api.models import ErrorResponse, NotFoundResponse
from library_api.routes import AVAILABLE_ENDPOINTS, auth_router, books_router, service_router
from utilities.logger import get_logger, setup_logging

# Setup logging
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings: APIConfig = app.state.settings

    # Startup
    logger.info(
        "Starting Book Library API",
        environment=settings.environment,
        port=settings.port,
        books=app.state.repository.count()
    )
    if settings.uses_default_secret():
        if settings.is_production():
            logger.warning("JWT_SECRET is not set; tokens are signed with the built-in default secret")
        else:
            logger.info("Using the built-in default JWT secret")

    yield

    # Shutdown
    logger.info("Shutting down Book Library API")


def create_app(
    settings: Optional[APIConfig] = None,
    repository: Optional[BookRepository] = None,
    token_service: Optional[TokenService] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Configuration, defaults to the global config
        repository: Book store, defaults to a freshly seeded catalog
        token_service: Token issuer/verifier, defaults to one built from settings

    Returns:
        Configured FastAPI application
    """
    settings = settings or config

    setup_logging(
        log_level=settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        debug=settings.log_level == "DEBUG"
    )

    app = FastAPI(
        title=settings.api_title,
        description="""
    Mock REST API for managing a book catalog.

    ## Features

    * **Books**: List, read, create, update and delete books
    * **Authentication**: Admin login issuing JWT session tokens

    ## Authentication

    Creating, updating and deleting books requires a token from `POST /auth/login`:

    ```
    Authorization: Bearer your_token_here
    ```

    All data is kept in memory and resets to the seeded catalog on restart.
    """,
        version=settings.api_version,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.repository = repository if repository is not None else BookRepository.seeded()
    app.state.token_service = token_service or TokenService.from_config(settings)
    app.state.started_at = time.monotonic()

    def internal_error_response(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled exception", error=str(exc), path=request.url.path, exc_info=exc)
        content = ErrorResponse(
            error=str(exc) or "Internal Server Error",
            message="Internal Server Error"
        ).model_dump()
        if not settings.is_production():
            content["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)

    # Added before CORS so that 500 responses pass through it
    @app.middleware("http")
    async def catch_unhandled_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return internal_error_response(request, exc)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log each request with its status and duration."""
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "Request handled",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2)
        )
        return response

    # Exception handlers
    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        """Render API errors as JSON error envelopes."""
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(**exc.to_content()).model_dump(),
            headers=exc.headers
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions; unmatched paths and methods become 404."""
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content=NotFoundResponse(
                    error="Not Found",
                    message=f"Cannot {request.method} {request.url.path}",
                    available_endpoints=AVAILABLE_ENDPOINTS
                ).model_dump(by_alias=True)
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=str(exc.detail), message=str(exc.detail)).model_dump(),
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Report unparseable request bodies as bad requests."""
        details = [
            {
                "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
                "message": error.get("msg", "")
            }
            for error in exc.errors()
        ]
        message = "; ".join(
            f"{detail['field']}: {detail['message']}" if detail["field"] else detail["message"]
            for detail in details
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(
                error="Bad Request",
                message=f"Invalid request: {message}",
                details=details
            ).model_dump()
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle general exceptions."""
        return internal_error_response(request, exc)

    app.include_router(service_router)
    app.include_router(auth_router)
    app.include_router(books_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "library_api.main:app",
        host=config.host,
        port=config.port,
        reload=config.is_development(),
        log_level=config.log_level.lower()
    )
