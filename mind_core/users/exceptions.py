# mind_core/users/exceptions.py
from __future__ import annotations

from rest_framework import status
from rest_framework.exceptions import APIException, AuthenticationFailed

from mind_core.common.api.errors import DomainError, DuplicateError


class DuplicateEmail(DuplicateError):
    default_detail = "The email is already registered."
    default_code = "DUPLICATE_EMAIL"

    def __init__(self, detail=None, code=None):
        super().__init__(field="email", detail=detail or self.default_detail, code=code)


class DuplicateDocument(DuplicateError):
    default_detail = "A person with this document already exists."
    default_code = "DUPLICATE_DOCUMENT"

    def __init__(self, detail=None, code=None):
        super().__init__(field="document_number", detail=detail or self.default_detail, code=code)


# -------------------------------------------------------------------
# Login (401). Wrong email and wrong password share one error.
# -------------------------------------------------------------------

class LoginError(APIException):
    status_code = status.HTTP_401_UNAUTHORIZED


class InvalidCredentials(LoginError):
    default_detail = "Invalid credentials."
    default_code = "INVALID_CREDENTIALS"


class AccountInactive(LoginError):
    default_detail = "The account is inactive."
    default_code = "ACCOUNT_INACTIVE"


class AccountLocked(LoginError):
    default_detail = "The account is locked after too many failed login attempts."
    default_code = "ACCOUNT_LOCKED"


# -------------------------------------------------------------------
# Bearer token (401)
# -------------------------------------------------------------------

class Unauthorized(AuthenticationFailed):
    default_detail = "Authentication required."
    default_code = "UNAUTHORIZED"


class TokenInvalid(AuthenticationFailed):
    default_detail = "Invalid token."
    default_code = "INVALID_TOKEN"


class TokenExpired(AuthenticationFailed):
    default_detail = "Token has expired."
    default_code = "EXPIRED_TOKEN"


# -------------------------------------------------------------------
# Email verification (400)
# -------------------------------------------------------------------

class VerificationCodeMissing(DomainError):
    default_detail = "No verification code pending."
    default_code = "VERIFICATION_CODE_MISSING"


class VerificationCodeExpired(DomainError):
    default_detail = "The verification code has expired."
    default_code = "VERIFICATION_CODE_EXPIRED"


class VerificationCodeMismatch(DomainError):
    default_detail = "Incorrect verification code."
    default_code = "VERIFICATION_CODE_MISMATCH"


class IncorrectPassword(DomainError):
    default_detail = "Current password is incorrect."
    default_code = "INCORRECT_PASSWORD"
