# mind_core/users/tokens.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict

import jwt
from django.utils import timezone

from mind_core.common.config import MindConfig, get_config

ALGORITHM = "HS256"


def issue_token(user, *, config: MindConfig | None = None, issued_at: datetime | None = None) -> str:
    """
    Signed, time-limited credential carrying the user id and email.
    """
    cfg = config or get_config()
    iat = issued_at or timezone.now()
    payload = {
        "user_id": str(user.id),
        "email": user.email,
        "iss": cfg.jwt_issuer,
        "iat": iat,
        "exp": iat + cfg.jwt_lifetime,
    }
    return jwt.encode(payload, cfg.jwt_secret, algorithm=ALGORITHM)


def decode_token(token: str, *, config: MindConfig | None = None) -> Dict[str, Any]:
    """
    Raises jwt.ExpiredSignatureError for expired tokens and
    jwt.InvalidTokenError for anything else that fails verification.
    """
    cfg = config or get_config()
    return jwt.decode(
        token,
        cfg.jwt_secret,
        algorithms=[ALGORITHM],
        issuer=cfg.jwt_issuer,
        options={"require": ["exp", "iat", "user_id"]},
    )
