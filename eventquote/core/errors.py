"""Error taxonomy for the quotation service.

Each error knows the HTTP status it renders as; the handlers registered in
``eventquote.main`` turn them into JSON responses.
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class QuotationServiceError(Exception):
    status_code = 500
    public_message = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message

    def to_body(self) -> Dict[str, Any]:
        return {"detail": self.message}


class InputValidationError(QuotationServiceError):
    """Malformed or out-of-range input. Always carries every violation."""

    status_code = 422
    public_message = "Validation failed"

    def __init__(self, errors: List[Dict[str, str]]):
        super().__init__(self.public_message)
        self.errors = errors

    def to_body(self) -> Dict[str, Any]:
        return {"detail": self.message, "errors": self.errors}


class DomainError(QuotationServiceError):
    status_code = 400


class AuthorizationError(QuotationServiceError):
    status_code = 403
    public_message = "Forbidden"


class NotFoundError(QuotationServiceError):
    status_code = 404
    public_message = "Not found"


class DependencyError(QuotationServiceError):
    status_code = 503
    public_message = "Service temporarily unavailable"

    def to_body(self) -> Dict[str, Any]:
        return {"detail": self.public_message}


class InternalError(QuotationServiceError):
    status_code = 500

    def to_body(self) -> Dict[str, Any]:
        return {"detail": self.public_message}


def format_pydantic_errors(errors) -> List[Dict[str, str]]:
    formatted = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        formatted.append({
            "field": ".".join(loc) or "__root__",
            "message": err.get("msg", "Invalid value"),
            "type": err.get("type", "value_error"),
        })
    return formatted


async def service_error_handler(request: Request, exc: QuotationServiceError):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def request_validation_handler(request: Request, exc: RequestValidationError):
    err = InputValidationError(format_pydantic_errors(exc.errors()))
    return JSONResponse(status_code=err.status_code, content=err.to_body())


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database failure on {request.method} {request.url.path}", exc_info=exc)
    err = DependencyError()
    return JSONResponse(status_code=err.status_code, content=err.to_body())


def register_error_handlers(app) -> None:
    app.add_exception_handler(QuotationServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
