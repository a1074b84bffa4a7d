# mind_core/common/api/errors.py
"""
Domain error family. Kept free of rest_framework.views so authentication
classes can import it while DRF itself is still loading.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.exceptions import APIException


class DomainError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request could not be processed."
    default_code = "BAD_REQUEST"


class ConflictError(DomainError):
    """
    Business rule blocks the write (e.g. double-booked specialist).
    """
    default_detail = "Conflict."
    default_code = "CONFLICT"


class DependencyInUse(ConflictError):
    default_detail = "The record is referenced by other records and cannot be deleted."
    default_code = "IN_USE"


class InvalidStateError(DomainError):
    default_detail = "The requested transition is not allowed from the current state."
    default_code = "INVALID_STATE"


class DuplicateError(DomainError):
    default_detail = "The value already exists."
    default_code = "DUPLICATE_KEY"

    def __init__(self, field: str | None = None, detail=None, code=None):
        self.field = field
        if detail is None and field:
            detail = f"The {field} already exists"
        super().__init__(detail=detail, code=code)


class InvalidIdError(DomainError):
    default_detail = "Invalid id format."
    default_code = "INVALID_ID"
