"""FastAPI application factory and domain-error mapping."""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from shophub.domain.exceptions import (
    CheckoutConflict,
    DomainException,
    EntityNotFoundError,
    ForbiddenError,
    PersistenceError,
    StockConflict,
    ValidationError,
)
from shophub.infrastructure.api import schemas
from shophub.infrastructure.api.routes import router
from shophub.infrastructure.bootstrap import Container

logger = structlog.get_logger(__name__)

_STATUS_FOR = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (CheckoutConflict, status.HTTP_409_CONFLICT),
)


def _stock_conflict(request: Request, exc: StockConflict) -> JSONResponse:
    body = schemas.StockConflictOut(
        message=str(exc),
        unavailable=[line.product_code for line in exc.unavailable],
        items=[
            schemas.ConflictItemOut(
                product_id=line.product_code,
                name=line.product_name,
                requested=line.requested,
                available=line.available,
                in_stock=line.satisfiable,
            )
            for line in exc.lines
        ],
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())


def _persistence_error(request: Request, exc: PersistenceError) -> JSONResponse:
    logger.error("api.persistence_error", path=request.url.path, error=str(exc))
    message = "Request failed"
    if request.url.path.rstrip("/") == "/orders" and request.method == "POST":
        message = "Order was not placed"
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": message},
    )


def _domain_error(request: Request, exc: DomainException) -> JSONResponse:
    for exc_type, code in _STATUS_FOR:
        if isinstance(exc, exc_type):
            return JSONResponse(status_code=code, content={"message": str(exc)})
    logger.error("api.unmapped_domain_error", path=request.url.path, error=repr(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Request failed"},
    )


def create_app(container: Container) -> FastAPI:
    app = FastAPI(
        title="Shophub",
        description="Carts, checkout, stock and reviews",
        version="1.0.0",
    )
    app.state.container = container

    app.add_exception_handler(StockConflict, _stock_conflict)
    app.add_exception_handler(PersistenceError, _persistence_error)
    app.add_exception_handler(DomainException, _domain_error)
    app.include_router(router)

    @app.get("/health")
    def health_check():
        return {"status": "healthy", "service": "shophub"}

    @app.on_event("startup")
    def _startup() -> None:
        container.start_sweeper()

    @app.on_event("shutdown")
    def _shutdown() -> None:
        container.close()

    return app
