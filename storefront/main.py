"""Storefront API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, exception handlers and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.api.categories import router as categories_router
from storefront.api.health import router as health_router
from storefront.api.merchandising import banners_router, brands_router, images_router
from storefront.api.middleware import setup_middleware
from storefront.api.products import router as products_router
from storefront.api.products import variants_router
from storefront.api.promotions import collections_router, discounts_router, sales_router
from storefront.api.promotions import router as promotions_router
from storefront.api.stores import router as stores_router
from storefront.api.storefront import router as storefront_router
from storefront.domain.exceptions import (
    DomainError,
    DuplicateSkuError,
    ForbiddenError,
    NotFoundError,
    ProductRetrievalError,
    UnauthorizedError,
    ValidationError,
)
from storefront.infrastructure.config import settings
from storefront.infrastructure.file_storage import FileStorageClient, FileStorageError
from storefront.infrastructure.logging import configure_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    # Startup
    configure_logging(settings.log_level, settings.debug)
    logger.info(
        "Starting Storefront API",
        version=settings.api_version,
        debug=settings.debug,
    )
    app.state.file_storage = FileStorageClient.from_settings(settings)

    yield

    # Shutdown
    await app.state.file_storage.close()
    logger.info("Shutting down Storefront API")


app = FastAPI(
    title="Storefront API",
    description="Multi-tenant storefront and admin console backend",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware (request ID, session resolution, error handling)
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(stores_router)
app.include_router(categories_router)
app.include_router(products_router)
app.include_router(variants_router)
app.include_router(brands_router)
app.include_router(banners_router)
app.include_router(images_router)
app.include_router(collections_router)
app.include_router(discounts_router)
app.include_router(sales_router)
app.include_router(promotions_router)
app.include_router(storefront_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


def error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: list[dict] | None = None,
) -> JSONResponse:
    """Build the standard error envelope."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error_code": error_code,
            "message": message,
            "details": details or [],
            "request_id": getattr(request.state, "request_id", None),
        },
    )


# Domain error class -> (HTTP status, error code)
_DOMAIN_ERRORS: list[tuple[type[DomainError], int, str]] = [
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY, "VALIDATION_ERROR"),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED, "UNAUTHORIZED"),
    (ForbiddenError, status.HTTP_403_FORBIDDEN, "FORBIDDEN"),
    (DuplicateSkuError, status.HTTP_400_BAD_REQUEST, "DUPLICATE_SKU"),
    (ProductRetrievalError, status.HTTP_500_INTERNAL_SERVER_ERROR, "PRODUCT_RETRIEVAL_FAILED"),
]


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Map domain errors onto HTTP statuses and error codes."""
    if isinstance(exc, NotFoundError):
        status_code, error_code = status.HTTP_404_NOT_FOUND, exc.error_code
    else:
        status_code, error_code = status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR"
        for error_class, mapped_status, mapped_code in _DOMAIN_ERRORS:
            if isinstance(exc, error_class):
                status_code, error_code = mapped_status, mapped_code
                break

    details: list[dict] = []
    if isinstance(exc, ValidationError):
        details = [{"field": f, "message": m} for f, m in exc.field_errors.items()]

    log = logger.error if status_code >= 500 else logger.warning
    log(
        "Request failed",
        error_code=error_code,
        path=request.url.path,
        method=request.method,
        error=exc.message,
    )

    return error_response(request, status_code, error_code, exc.message, details)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request body/query validation failures field by field."""
    details = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    logger.warning(
        "Request validation failed",
        path=request.url.path,
        method=request.method,
        fields=[d["field"] for d in details],
    )
    return error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        "Request validation failed",
        details,
    )


@app.exception_handler(FileStorageError)
async def file_storage_exception_handler(request: Request, exc: FileStorageError) -> JSONResponse:
    """Handle file storage failures."""
    logger.error(
        "File storage failure",
        path=request.url.path,
        method=request.method,
        status_code=exc.status_code,
        error=exc.message,
    )
    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "FILE_STORAGE_ERROR",
        "Failed to delete stored files",
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions with consistent format."""
    detail = exc.detail
    if isinstance(detail, dict):
        error_code = detail.get("error_code", "ERROR")
        message = detail.get("message", str(detail))
        details = detail.get("details", [])
    else:
        error_code = "ERROR"
        message = str(detail)
        details = []

    return error_response(request, exc.status_code, error_code, message, details)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions with consistent format."""
    logger.exception(
        "Unhandled exception in handler",
        path=request.url.path,
        method=request.method,
        error=str(exc),
    )
    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        "An internal error occurred",
    )
