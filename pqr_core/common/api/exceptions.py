# pqr_core/common/api/exceptions.py
from __future__ import annotations

import logging
import uuid
from typing import Any

from django.core.exceptions import ObjectDoesNotExist
from django.http import Http404
from rest_framework import exceptions as drf
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from pqr_core.common import errors

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "Request failed."

# DRF exception -> envelope code; anything else falls back to exc.default_code
DRF_CODES: tuple[tuple[type[Exception], str], ...] = (
    (drf.ValidationError, "validation_error"),
    (drf.NotAuthenticated, "not_authenticated"),
    (drf.AuthenticationFailed, "authentication_failed"),
    (drf.PermissionDenied, "permission_denied"),
    (Http404, "not_found"),
)


def ensure_request_id(request) -> str:
    """Request id shared by the scope middleware and the DRF handler for one request."""
    if request is None:
        return uuid.uuid4().hex
    rid = getattr(request, "request_id", None)
    if not rid:
        rid = uuid.uuid4().hex
        request.request_id = rid
    return rid


def build_error_envelope(*, request=None, code: str, message: str, details: Any = None) -> dict[str, Any]:
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details,
            "request_id": ensure_request_id(request),
        }
    }


def _envelope(request, http_status: int, code: str, message: str, details=None, headers=None) -> Response:
    return Response(
        build_error_envelope(request=request, code=code, message=message, details=details),
        status=http_status,
        headers=headers,
    )


def _from_domain(exc: errors.DomainError, request) -> Response:
    if isinstance(exc, errors.ValidationError):
        return _envelope(request, status.HTTP_400_BAD_REQUEST, "validation_error", exc.reason, exc.as_dict())
    if isinstance(exc, errors.NotFoundError):
        return _envelope(request, status.HTTP_404_NOT_FOUND, "not_found", str(exc))
    if isinstance(exc, errors.BusinessRuleError):
        return _envelope(request, status.HTTP_409_CONFLICT, exc.code, exc.reason)
    # bare DomainError subclasses are still caller mistakes, not server faults
    return _envelope(request, status.HTTP_400_BAD_REQUEST, "domain_error", str(exc))


def _drf_code(exc: Exception) -> str:
    for klass, code in DRF_CODES:
        if isinstance(exc, klass):
            return code
    return getattr(exc, "default_code", None) or "api_error"


def _split_detail(data) -> tuple[str, Any]:
    """
    {"detail": "x"}            -> ("x", None)
    {"detail": "x", "f": ...}  -> ("x", {"f": ...})
    anything else              -> (GENERIC_MESSAGE, data)
    """
    if isinstance(data, dict) and "detail" in data:
        rest = {k: v for k, v in data.items() if k != "detail"}
        return str(data["detail"]), rest or None
    return GENERIC_MESSAGE, data


def api_exception_handler(exc: Exception, context: dict[str, Any]):
    """
    Every API error leaves as {"error": {code, message, details, request_id}}.
    Domain errors: ValidationError -> 400, NotFoundError -> 404, BusinessRuleError -> 409.
    """
    request = context.get("request")

    if isinstance(exc, errors.DomainError):
        return _from_domain(exc, request)

    if isinstance(exc, ObjectDoesNotExist):
        exc = Http404(str(exc) or "Not found.")

    response = drf_exception_handler(exc, context)
    if response is None:
        logger.exception("Unhandled API error", exc_info=exc)
        return _envelope(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "server_error", "Unexpected server error.")

    message, details = _split_detail(response.data)
    return _envelope(request, response.status_code, _drf_code(exc), message, details, headers=response.headers)
