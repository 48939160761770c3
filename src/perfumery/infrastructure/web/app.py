"""FastAPI application factory."""

from __future__ import annotations

from pathlib import Path

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from perfumery.domain.exceptions import (
    AuthorizationError,
    DomainException,
    EntityNotFoundError,
    NotificationChannelFailure,
    OrderNumberConflict,
    PersistenceError,
    UploadRejectedError,
    ValidationError,
)
from perfumery.infrastructure.bootstrap import Container, build_container
from perfumery.infrastructure.web import diagnostic_routes, order_routes, product_routes

logger = structlog.get_logger(__name__)

ERROR_STATUS_CODES: dict[type, int] = {
    ValidationError: 400,
    UploadRejectedError: 400,
    AuthorizationError: 403,
    EntityNotFoundError: 404,
    PersistenceError: 500,
    OrderNumberConflict: 500,
    NotificationChannelFailure: 500,
}

# Storefront pages served from the static directory.
PAGES = {
    "/": "index.html",
    "/products": "products.html",
    "/checkout": "checkout.html",
    "/checkout.html": "checkout.html",
    "/admin": "admin.html",
    "/admin.html": "admin.html",
    "/orders": "orders.html",
    "/orders.html": "orders.html",
    "/email-test": "email-test.html",
    "/email-test.html": "email-test.html",
}


def create_app(container: Container | None = None) -> FastAPI:
    container = container or build_container()

    app = FastAPI(
        title="Herman Perfume API",
        description="Storefront backend: catalog, checkout and order administration",
        version="0.1.0",
    )
    app.state.container = container

    _register_error_handlers(app)

    app.include_router(order_routes.router)
    app.include_router(product_routes.router)
    app.include_router(diagnostic_routes.router)

    static_dir = Path(container.settings.static_dir)
    _register_pages(app, static_dir)

    upload_dir = Path(container.settings.upload_dir)
    if upload_dir.is_dir():
        app.mount("/uploads", StaticFiles(directory=upload_dir), name="uploads")
    # Mounted last so API and page routes take precedence.
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir), name="static")

    return app


def _register_pages(app: FastAPI, static_dir: Path) -> None:
    for route, filename in PAGES.items():
        app.add_api_route(
            route, _page_endpoint(static_dir / filename), methods=["GET"], include_in_schema=False
        )


def _page_endpoint(page: Path):
    def serve_page() -> FileResponse:
        if not page.is_file():
            raise StarletteHTTPException(status_code=404)
        return FileResponse(page)

    return serve_page


def _register_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(DomainException)
    async def domain_error_handler(request: Request, exc: DomainException) -> JSONResponse:
        """Map DomainException subclasses to HTTP responses."""
        status_code = ERROR_STATUS_CODES.get(type(exc), 500)
        content: dict = {"error": str(exc)}
        if isinstance(exc, ValidationError) and exc.details:
            content["details"] = [d.to_dict() for d in exc.details]
        if status_code >= 500:
            logger.error("request_failed", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"Invalid request: {location} {first.get('msg', '')}".strip()
        else:
            message = "Invalid request"
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            return JSONResponse(status_code=404, content={"error": "Route not found"})
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("request_failed", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=500, content={"error": "Internal server error"})
