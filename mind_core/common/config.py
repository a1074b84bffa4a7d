"""
Typed, immutable view over the settings the domain services depend on.

Services never read os.environ or django.conf.settings directly; they accept an
optional ``config`` keyword and fall back to ``get_config()``.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache

from django.conf import settings

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_UNIT_SECONDS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_duration(value, default: timedelta) -> timedelta:
    """
    Parse "24h", "30m", "7d", "45s" or a bare number of seconds.
    """
    if value is None or value == "":
        return default
    if isinstance(value, timedelta):
        return value
    if isinstance(value, (int, float)):
        return timedelta(seconds=value)

    match = _DURATION_RE.match(str(value).lower())
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return timedelta(seconds=int(amount) * _UNIT_SECONDS[unit])


@dataclass(frozen=True)
class MindConfig:
    service_name: str
    environment: str
    jwt_secret: str
    jwt_issuer: str
    jwt_lifetime: timedelta
    jwt_disabled: bool
    bcrypt_rounds: int
    password_pepper: str
    default_user_type_code: str
    default_user_type_name: str
    verification_code_ttl: timedelta
    max_failed_attempts: int
    default_from_email: str

    @property
    def is_production(self) -> bool:
        return self.environment == "prod"

    @property
    def expose_verification_code(self) -> bool:
        # verification codes are echoed back only outside production
        return not self.is_production


@lru_cache
def get_config() -> MindConfig:
    """Build the config once from Django settings."""
    return MindConfig(
        service_name=getattr(settings, "SERVICE_NAME", "mind-api"),
        environment=str(getattr(settings, "MIND_ENV", "local")).lower(),
        jwt_secret=getattr(settings, "JWT_SECRET", "") or settings.SECRET_KEY,
        jwt_issuer=getattr(settings, "JWT_ISSUER", "mind-api"),
        jwt_lifetime=parse_duration(getattr(settings, "JWT_EXPIRES_IN", "24h"), timedelta(hours=24)),
        jwt_disabled=bool(getattr(settings, "JWT_DISABLED", False)),
        bcrypt_rounds=int(getattr(settings, "BCRYPT_SALT_ROUNDS", 12)),
        password_pepper=getattr(settings, "PASSWORD_PEPPER", ""),
        default_user_type_code=str(getattr(settings, "DEFAULT_USER_TYPE_CODE", "PACIENTE")).upper(),
        default_user_type_name=getattr(settings, "DEFAULT_USER_TYPE_NAME", "Paciente"),
        verification_code_ttl=parse_duration(
            getattr(settings, "VERIFICATION_CODE_TTL", "15m"), timedelta(minutes=15)
        ),
        max_failed_attempts=int(getattr(settings, "MAX_FAILED_LOGIN_ATTEMPTS", 5)),
        default_from_email=getattr(settings, "DEFAULT_FROM_EMAIL", "no-reply@mind.local"),
    )


def reset_config(**kwargs) -> None:
    """`setting_changed` receiver; keeps test overrides visible to services."""
    get_config.cache_clear()
