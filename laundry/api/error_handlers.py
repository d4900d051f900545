"""
Exception handlers translating application errors into JSON responses.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from laundry.core.exceptions import BaseAppException, ServiceUnavailableError

logger = logging.getLogger(__name__)

UNHANDLED_ERROR_MESSAGE = "The server encountered an unhandled error."


async def app_exception_handler(request: Request, exc: BaseAppException) -> JSONResponse:
    if isinstance(exc, ServiceUnavailableError):
        logger.error(
            f"Service unavailable during {request.method} {request.url.path}",
            extra={"request_id": getattr(request.state, "request_id", None), **exc.details},
        )
    elif exc.status_code >= 500:
        logger.error(f"{exc!r} during {request.method} {request.url.path}", extra=exc.to_dict())
    content = {"error": exc.message}
    if exc.status_code < 500:
        content.update(exc.details)
    return JSONResponse(status_code=exc.status_code, content=content)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled error during {request.method} {request.url.path}: {exc}",
        exc_info=exc,
        extra={"request_id": getattr(request.state, "request_id", None)},
    )
    return JSONResponse(status_code=500, content={"error": UNHANDLED_ERROR_MESSAGE})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BaseAppException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
