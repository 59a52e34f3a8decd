from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import SQLAlchemyError
from framework.logging.logger import get_logger
from framework.response import ResponseModel
from typing import Any
from framework.config import settings

logger = get_logger("exception_handler")

class BusinessException(Exception):
    """Base class for business exceptions."""
    def __init__(self, message: str, status_code: int = 200, code: int = 400, detail: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.detail = detail


class NotFoundException(BusinessException):
    """A requested entity is absent or soft-deleted."""
    def __init__(self, message: str = "Resource not found", detail: Any = None):
        super().__init__(message, status_code=status.HTTP_404_NOT_FOUND, code=404, detail=detail)


class InvalidArgumentError(BusinessException):
    """Caller passed an argument the data layer refuses, e.g. page <= 0."""
    def __init__(self, message: str, detail: Any = None):
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST, code=400, detail=detail)


class TransactionStateError(BusinessException):
    """Transaction control called in the wrong unit-of-work state."""
    def __init__(self, message: str = "A transaction is already active"):
        super().__init__(message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, code=500)


def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    trace_id = getattr(request.state, "trace_id", "unknown")

    if isinstance(exc, BusinessException):
        logger.warning(f"Trace[{trace_id}] - {type(exc).__name__}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=ResponseModel.fail(code=exc.code, message=exc.message, data=jsonable_encoder(exc.detail))
        )

    if isinstance(exc, RequestValidationError):
        logger.error(f"Trace[{trace_id}] - ValidationError: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=ResponseModel.fail(code=422, message="Invalid request parameters", data=jsonable_encoder(exc.errors()))
        )

    if isinstance(exc, SQLAlchemyError):
        logger.critical(f"Trace[{trace_id}] - DatabaseError: {str(exc)}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ResponseModel.fail(code=500, message="Service temporarily unavailable")
        )

    logger.opt(exception=True).error(f"Trace[{trace_id}] - UncaughtException: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ResponseModel.fail(
            code=500,
            message="System busy, please try again later",
            data={"trace_id": trace_id} if settings.DEBUG else None
        )
    )
