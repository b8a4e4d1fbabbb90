import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from ewm.errors import EntityNotFoundError, OperationNotAllowedError, UserError

logger = logging.getLogger(__name__)


def create_json_error_response(status_code: int, message: str, error_type: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, "type": error_type})


async def user_error_handler(request: Request, exc: Exception) -> Response:
    """Translate domain errors into 404 / 409 JSON responses."""
    if isinstance(exc, EntityNotFoundError):
        status_code = 404
        error_type = "not_found"
    elif isinstance(exc, OperationNotAllowedError):
        status_code = 409
        error_type = "not_allowed"
    else:
        status_code = 400
        error_type = "bad_request"

    logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
    return create_json_error_response(status_code, str(exc), error_type)


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("Unexpected error: %s", exc)
    return create_json_error_response(500, "An unexpected error occurred.", "internal_server_error")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)
