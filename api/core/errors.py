"""
Mapping of internal failures to the single external failure shape.

Every failed request answers with `{"message": "..."}` and a status code:
- ClientInputError (decode / validation problems) -> 400
- StorageError                                     -> 500, storage text exposed
- anything else                                    -> 500, generic text

Messages are always one line so log consumers never see a record split.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .db import StorageError

GENERIC_SERVER_MESSAGE = "Internal server error."
LINE_SEPARATOR = " | "

_LINE_BREAKS = re.compile(r"\s*[\r\n]+\s*")

logger = logging.getLogger(__name__)


class ClientInputError(ValueError):
    """
    Base for failures caused by the request payload itself.
    """

    @property
    def message(self) -> str:
        return str(self)


@dataclass(frozen=True)
class ApiFailure:
    status_code: int
    message: str

    def to_response(self) -> JSONResponse:
        return JSONResponse(status_code=self.status_code, content={"message": self.message})


def flatten_message(message: str) -> str:
    return _LINE_BREAKS.sub(LINE_SEPARATOR, (message or "").strip())


def to_failure(exc: BaseException) -> ApiFailure:
    if isinstance(exc, ClientInputError):
        return ApiFailure(status.HTTP_400_BAD_REQUEST, flatten_message(exc.message))
    if isinstance(exc, StorageError):
        return ApiFailure(status.HTTP_500_INTERNAL_SERVER_ERROR, flatten_message(str(exc)))
    return ApiFailure(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_SERVER_MESSAGE)


async def _handle_client_input_error(request: Request, exc: Exception) -> JSONResponse:
    failure = to_failure(exc)
    logger.info(
        "request_rejected method=%s path=%s status=%s message=%s",
        request.method,
        request.url.path,
        failure.status_code,
        failure.message,
    )
    return failure.to_response()


async def _handle_server_error(request: Request, exc: Exception) -> JSONResponse:
    failure = to_failure(exc)
    logger.error(
        "request_failed method=%s path=%s status=%s message=%s",
        request.method,
        request.url.path,
        failure.status_code,
        failure.message,
        exc_info=exc,
    )
    return failure.to_response()


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ClientInputError, _handle_client_input_error)
    app.add_exception_handler(StorageError, _handle_server_error)
    app.add_exception_handler(Exception, _handle_server_error)
