"""Domain errors and the handlers that turn them into JSON responses."""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class RoomVoteError(Exception):
    """Base class for errors reported back to the client."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(RoomVoteError):
    status_code = 400
    default_message = "Invalid request"


class NotFound(RoomVoteError):
    status_code = 404
    default_message = "Not found"


class Locked(RoomVoteError):
    status_code = 403
    default_message = "Room is locked"


class Conflict(RoomVoteError):
    status_code = 409
    default_message = "Already exists"


class DuplicateVote(RoomVoteError):
    status_code = 409
    default_message = "You have already voted for this suggestion"


class InternalError(RoomVoteError):
    pass


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RoomVoteError)
    async def room_vote_error_handler(request: Request, exc: RoomVoteError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            first = errors[0]
            field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"{field}: {first.get('msg')}" if field else first.get("msg", "Invalid request")
        else:
            message = "Invalid request"
        return _error_response(ValidationError.status_code, message)

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception(f"Store failure in {request.method} {request.url.path}")
        return _error_response(InternalError.status_code, InternalError.default_message)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error in {request.method} {request.url.path}")
        return _error_response(InternalError.status_code, InternalError.default_message)
