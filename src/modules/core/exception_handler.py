"""Error translator.

Maps a raised failure to ``(status, envelope, headers)``.  The mapping is a
total table over ``ErrorKind``; anything that is not a ``CatalogError`` is
treated as an unclassified ``StoreFailure``.  Internal detail is only
exposed while ``DEBUG`` is on.

Envelope::

    {"success": false, "error": "<Kind>", "message": "...", ...payload}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import structlog
from django.conf import settings
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from modules.core.exceptions import (
    CatalogError,
    ErrorKind,
    FieldError,
    InvalidCredential,
    StoreFailure,
    Unauthenticated,
    ValidationFailed,
)

logger = structlog.get_logger(__name__)

AUTHENTICATE_HEADER = 'Bearer realm="api"'

STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID_CREDENTIAL: status.HTTP_403_FORBIDDEN,
    ErrorKind.MALFORMED_IDENTIFIER: status.HTTP_400_BAD_REQUEST,
    ErrorKind.MISSING_FIELDS: status.HTTP_400_BAD_REQUEST,
    ErrorKind.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorKind.DUPLICATE_ENTITY: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.STORE_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

GENERIC_FAILURE_MESSAGE = "Internal server error."


@dataclass(frozen=True)
class ErrorResponse:
    status: int
    body: Dict[str, Any]
    headers: Dict[str, str] = field(default_factory=dict)


def translate(
    exc: BaseException,
    *,
    failure_message: str = GENERIC_FAILURE_MESSAGE,
    debug: Optional[bool] = None,
) -> ErrorResponse:
    """Translate ``exc`` into a client-facing error.

    ``failure_message`` replaces the message of unclassified failures so
    each operation reports its own generic text.
    """
    if debug is None:
        debug = settings.DEBUG

    if not isinstance(exc, CatalogError):
        exc = StoreFailure(cause=exc)

    kind = exc.kind
    body: Dict[str, Any] = {"success": False, "error": kind.value}
    headers: Dict[str, str] = {}

    if kind is ErrorKind.STORE_FAILURE:
        cause = getattr(exc, "cause", None) or exc
        body["message"] = failure_message
        if debug:
            body["details"] = str(cause)
        logger.error(
            "request.failed",
            error_kind=kind.value,
            error_type=type(cause).__name__,
            exc_info=cause,
        )
    else:
        body["message"] = exc.message
        body.update(exc.payload())
        logger.warning("request.rejected", error_kind=kind.value, reason=exc.message)

    if kind is ErrorKind.UNAUTHENTICATED:
        headers["WWW-Authenticate"] = AUTHENTICATE_HEADER

    return ErrorResponse(status=STATUS_BY_KIND[kind], body=body, headers=headers)


def to_response(
    exc: BaseException, *, failure_message: str = GENERIC_FAILURE_MESSAGE
) -> Response:
    """DRF ``Response`` for ``exc``; see :func:`translate`."""
    error = translate(exc, failure_message=failure_message)
    return Response(error.body, status=error.status, headers=error.headers)


def _error_code(exc: exceptions.APIException) -> str:
    code = getattr(exc, "default_code", "error")
    return "".join(part.capitalize() for part in str(code).split("_"))


def _flatten_detail(data: Any) -> str:
    if isinstance(data, dict):
        if "detail" in data:
            return str(data["detail"])
        return "; ".join(f"{k}: {_flatten_detail(v)}" for k, v in data.items())
    if isinstance(data, list):
        return "; ".join(_flatten_detail(item) for item in data)
    return str(data)


def catalog_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """DRF ``EXCEPTION_HANDLER``.

    Catches what fails before or around the resource handlers (auth,
    parsing, method not allowed) and renders it in the catalog envelope.
    """
    if isinstance(exc, CatalogError):
        return to_response(exc)
    if isinstance(exc, exceptions.ParseError):
        return to_response(ValidationFailed([FieldError("body", str(exc.detail))]))
    if isinstance(exc, exceptions.NotAuthenticated):
        return to_response(Unauthenticated())
    if isinstance(exc, exceptions.AuthenticationFailed):
        return to_response(InvalidCredential(str(exc.detail)))

    response = drf_exception_handler(exc, context)
    if response is None:
        return to_response(exc)

    response.data = {
        "success": False,
        "error": _error_code(exc),
        "message": _flatten_detail(response.data),
    }
    return response
