# mind_core/users/authentication.py

from __future__ import annotations

from dataclasses import dataclass

import jwt
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework.authentication import BaseAuthentication, get_authorization_header

from mind_core.common.config import get_config
from mind_core.users.exceptions import TokenExpired, TokenInvalid, Unauthorized
from mind_core.users.models import User
from mind_core.users.tokens import decode_token


@dataclass(frozen=True)
class MockPrincipal:
    """
    Stand-in user injected when JWT_DISABLED is on (local testing only).
    """
    id: str = "000000000000000000000000"
    email: str = "dev@mind.local"
    is_active: bool = True
    is_authenticated: bool = True
    is_anonymous: bool = False

    @property
    def pk(self) -> str:
        return self.id


class BearerTokenAuthentication(BaseAuthentication):
    """
    Authorization: Bearer <token>

      - no header          -> anonymous (permission layer answers UNAUTHORIZED)
      - malformed header   -> UNAUTHORIZED
      - bad signature      -> INVALID_TOKEN
      - expired            -> EXPIRED_TOKEN
      - unknown / inactive -> UNAUTHORIZED
    """

    keyword = b"bearer"

    def authenticate(self, request):
        cfg = get_config()
        if cfg.jwt_disabled:
            return MockPrincipal(), None

        header = get_authorization_header(request)
        if not header:
            return None

        parts = header.split()
        if len(parts) != 2 or parts[0].lower() != self.keyword:
            raise Unauthorized("Authorization header must be 'Bearer <token>'.")

        try:
            token = parts[1].decode("utf-8")
        except UnicodeError:
            raise TokenInvalid()

        try:
            payload = decode_token(token, config=cfg)
        except jwt.ExpiredSignatureError:
            raise TokenExpired()
        except jwt.InvalidTokenError:
            raise TokenInvalid()

        try:
            user = User.objects.select_related("person", "user_type", "status").filter(pk=payload["user_id"]).first()
        except (DjangoValidationError, ValueError):
            raise TokenInvalid()

        if user is None or not user.is_active:
            raise Unauthorized("User not found or inactive.")

        return user, payload

    def authenticate_header(self, request):
        return 'Bearer realm="api"'
