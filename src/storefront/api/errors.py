"""Exception-to-HTTP mapping for the storefront API."""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import DatabaseError, ExpectedVersionError
from protean.integrations.fastapi import register_exception_handlers

logger = structlog.get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register Protean's standard handlers plus store-level failures.

    Validation errors map to 400, missing references to 404 and references
    still in use to 409. A version conflict that survived the handler
    retries is also a 409. Any other store failure is a 500 with a generic
    body.
    """
    register_exception_handlers(app)

    @app.exception_handler(ExpectedVersionError)
    async def version_conflict_handler(request: Request, exc: ExpectedVersionError) -> JSONResponse:
        logger.warning("Concurrent update conflict", path=request.url.path, error=str(exc))
        return JSONResponse(
            status_code=409,
            content={"error": "The record was modified concurrently, please retry"},
        )

    @app.exception_handler(DatabaseError)
    async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
        logger.error("Entity store failure", path=request.url.path, error=str(exc), exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"error": "An unexpected storage error occurred"},
        )
