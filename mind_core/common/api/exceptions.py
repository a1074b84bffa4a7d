# mind_core/common/api/exceptions.py
from __future__ import annotations

import logging
import re
import traceback
import uuid
from typing import Any

from django.conf import settings
from django.core.exceptions import ObjectDoesNotExist
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError
from django.db.models import ProtectedError, RestrictedError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    APIException,
    AuthenticationFailed,
    MethodNotAllowed,
    NotAuthenticated,
    NotFound,
    ParseError,
    PermissionDenied,
    Throttled,
    UnsupportedMediaType,
    ValidationError,
)
from rest_framework.fields import get_error_detail
from rest_framework.response import Response
from rest_framework.settings import api_settings
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.views import set_rollback

from mind_core.common.api.errors import DependencyInUse, DomainError, DuplicateError

logger = logging.getLogger(__name__)


def ensure_request_id(request) -> str:
    """
    Ensures request has a stable request_id attribute and returns it.
    Safe to call from middleware, views and the DRF exception handler.
    """
    rid = getattr(request, "request_id", None) if request is not None else None
    if not rid:
        rid = uuid.uuid4().hex
        if request is not None:
            setattr(request, "request_id", rid)
    return rid


def build_error_envelope(
    *,
    request=None,
    code: str,
    message: str,
    errors: list[dict[str, Any]] | None = None,
    stack: str | None = None,
) -> dict[str, Any]:
    """
    Canonical failure envelope, shared by DRF views, middleware and the
    Django 404/500 handlers.
    """
    body: dict[str, Any] = {
        "success": False,
        "message": message,
        "error": code,
        "request_id": ensure_request_id(request),
    }
    if errors:
        body["errors"] = errors
    if stack and settings.DEBUG:
        body["stack"] = stack
    return body


_DRF_CODES: tuple[tuple[type[Exception], str], ...] = (
    (ValidationError, "VALIDATION_ERROR"),
    (NotAuthenticated, "UNAUTHORIZED"),
    (AuthenticationFailed, "UNAUTHORIZED"),
    (PermissionDenied, "FORBIDDEN"),
    (NotFound, "NOT_FOUND"),
    (Http404, "NOT_FOUND"),
    (MethodNotAllowed, "METHOD_NOT_ALLOWED"),
    (Throttled, "RATE_LIMITED"),
    (ParseError, "PARSE_ERROR"),
    (UnsupportedMediaType, "UNSUPPORTED_MEDIA_TYPE"),
)

_PG_KEY_RE = re.compile(r"Key \((?P<field>[^)]+)\)=")
_SQLITE_UNIQUE_RE = re.compile(r"UNIQUE constraint failed: (?P<cols>[\w., ]+)")


def _duplicate_field(exc: IntegrityError) -> str | None:
    text = str(exc)
    m = _PG_KEY_RE.search(text)
    if m:
        return m.group("field")
    m = _SQLITE_UNIQUE_RE.search(text)
    if m:
        cols = [c.strip().split(".")[-1] for c in m.group("cols").split(",")]
        return ", ".join(cols)
    return None


def _translate(exc: Exception) -> Exception:
    """
    Map Django/database exceptions onto the API exception family so that
    constraint violations look the same regardless of which view raised them.
    """
    if isinstance(exc, DjangoValidationError):
        # get_error_detail keeps Django error codes (e.g. "unique")
        return ValidationError(detail=get_error_detail(exc))
    if isinstance(exc, IntegrityError):
        text = str(exc).lower()
        if "unique" in text or "duplicate" in text:
            return DuplicateError(field=_duplicate_field(exc))
        return DomainError(detail="The write violates a data integrity rule.")
    if isinstance(exc, (ProtectedError, RestrictedError)):
        return DependencyInUse()
    if isinstance(exc, ObjectDoesNotExist):
        model = type(exc).__qualname__.split(".")[0]
        if model in {"DoesNotExist", "ObjectDoesNotExist"}:
            model = "Record"
        return NotFound(f"{model} not found.")
    return exc


def _code_for(exc: Exception) -> str:
    code = getattr(exc, "default_code", None)
    # domain errors declare their public code directly (upper-case)
    if isinstance(code, str) and code.isupper():
        return code
    for exc_type, mapped in _DRF_CODES:
        if isinstance(exc, exc_type):
            return mapped
    if isinstance(exc, APIException):
        return str(code or "api_error").upper()
    return "ERROR"


def _field_errors(detail: Any, data: Any) -> list[dict[str, Any]]:
    """
    Flatten DRF's nested error detail into [{field, message, value}].
    """
    out: list[dict[str, Any]] = []

    def walk(node, field, value):
        if isinstance(node, dict):
            for key, child in node.items():
                child_field = key if field is None else f"{field}.{key}"
                child_value = value.get(key) if isinstance(value, dict) else None
                walk(child, child_field, child_value)
        elif isinstance(node, list):
            for item in node:
                walk(item, field, value)
        else:
            out.append({"field": field, "message": str(node), "value": value})

    walk(detail, None, data)
    return out


def _unique_fields(exc: ValidationError) -> list[str]:
    codes = exc.get_codes()
    if not isinstance(codes, dict):
        return []
    return [field for field, c in codes.items() if isinstance(c, list) and "unique" in c]


def _validation_response(exc: ValidationError, request, headers) -> Response:
    detail = exc.detail
    data = getattr(request, "data", None) if request is not None else None

    # {"detail": "..."} style raised from views/services
    if isinstance(detail, dict) and set(detail.keys()) == {"detail"}:
        return Response(
            build_error_envelope(request=request, code="VALIDATION_ERROR", message=str(detail["detail"])),
            status=status.HTTP_400_BAD_REQUEST,
            headers=headers,
        )

    unique = _unique_fields(exc)
    if unique:
        field = unique[0]
        message = f"The {field} already exists"
        if field == api_settings.NON_FIELD_ERRORS_KEY:
            # unique-together violations carry the combined message
            message = str(detail[field][0])
        return Response(
            build_error_envelope(
                request=request,
                code="DUPLICATE_KEY",
                message=message,
                errors=_field_errors({field: detail[field]}, data),
            ),
            status=status.HTTP_400_BAD_REQUEST,
            headers=headers,
        )

    errors = _field_errors(detail, data)
    message = "Validation failed."
    if isinstance(detail, list) and errors:
        message = errors[0]["message"]
    return Response(
        build_error_envelope(request=request, code="VALIDATION_ERROR", message=message, errors=errors),
        status=status.HTTP_400_BAD_REQUEST,
        headers=headers,
    )


def api_exception_handler(exc: Exception, context: dict[str, Any]):
    request = context.get("request")
    exc = _translate(exc)
    response = drf_exception_handler(exc, context)

    # Truly unhandled error
    if response is None:
        logger.exception("Unhandled API error", exc_info=exc)
        set_rollback()
        return Response(
            build_error_envelope(
                request=request,
                code="INTERNAL_ERROR",
                message="Unexpected server error.",
                stack="".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
            ),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, ValidationError):
        return _validation_response(exc, request, response.headers)

    data = response.data
    message = "Request failed."
    if isinstance(data, dict) and "detail" in data:
        message = str(data["detail"])
    elif isinstance(data, list) and data:
        message = str(data[0])

    return Response(
        build_error_envelope(request=request, code=_code_for(exc), message=message),
        status=response.status_code,
        headers=response.headers,
    )
