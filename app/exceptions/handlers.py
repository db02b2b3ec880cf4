import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.validation import format_violations
from app.exceptions.exceptions import DomainError
from app.schemas.base import ErrorResponse

logger = logging.getLogger(__name__)

UNKNOWN_ERROR_MESSAGE = "An unexpected error occurred."


def _error_response(status_code: int, message: str, code: str, errors: list[str] | None = None) -> JSONResponse:
    body = ErrorResponse(message=message, code=code, errors=errors)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainError)
    async def _domain_handler(request: Request, exc: DomainError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "Request failed: %s (Code: %s)",
                exc.message,
                exc.code,
                extra={"path": request.url.path, "status_code": exc.status_code},
            )
        else:
            logger.info("Request rejected: %s (Code: %s)", exc.message, exc.code)
        return _error_response(exc.status_code, exc.message, exc.code)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
        violations = format_violations(exc.errors())
        logger.info("Request validation failed", extra={"violations": violations})
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            "Validation failed",
            "VALIDATION_ERROR",
            errors=violations,
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        code = "NOT_FOUND" if exc.status_code == status.HTTP_404_NOT_FOUND else "HTTP_ERROR"
        return _error_response(exc.status_code, str(exc.detail), code)

    @app.exception_handler(Exception)
    async def _unexpected_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled error: %s (Code: UNKNOWN_ERROR)",
            exc,
            exc_info=exc,
            extra={"path": request.url.path},
        )
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, UNKNOWN_ERROR_MESSAGE, "UNKNOWN_ERROR")
