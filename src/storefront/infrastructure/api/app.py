"""Storefront HTTP gateway.

Translates REST calls into component calls and maps the domain error
taxonomy onto HTTP status codes. The gateway is the only place that knows
about HTTP; components only raise DomainException subclasses.

Usage:
    storefront serve --port 8080
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from storefront.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    InsufficientStockError,
    PersistenceError,
    ValidationError,
)
from storefront.infrastructure.api.routes import order_router, product_router, user_router
from storefront.infrastructure.bootstrap import Services

logger = structlog.get_logger(__name__)

STATUS_BY_ERROR: dict[type[DomainException], int] = {
    ValidationError: 400,
    EntityNotFoundError: 404,
    InsufficientStockError: 409,
    PersistenceError: 500,
    DomainException: 500,
}


async def domain_error_handler(request: Request, exc: DomainException) -> JSONResponse:
    status_code = 500
    for error_type in type(exc).__mro__:
        if error_type in STATUS_BY_ERROR:
            status_code = STATUS_BY_ERROR[error_type]
            break

    if status_code >= 500:
        logger.error(
            "Request failed",
            method=request.method,
            path=request.url.path,
            error=str(exc),
            exc_info=exc,
        )
    return JSONResponse(status_code=status_code, content={"error": str(exc)})


def create_app(services: Services) -> FastAPI:
    app = FastAPI(
        title="Storefront API",
        description="Catalog, orders and users behind one gateway",
    )
    app.state.services = services

    app.add_exception_handler(DomainException, domain_error_handler)

    app.include_router(product_router)
    app.include_router(order_router)
    app.include_router(user_router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app
