# mind_core/common/throttling.py
from __future__ import annotations

import re

from rest_framework.throttling import AnonRateThrottle, SimpleRateThrottle, UserRateThrottle

_PERIOD_RE = re.compile(r"^(\d*)([smhd])")
_PERIOD_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}


class WindowRateMixin:
    """
    Accepts rates such as "100/15m" in addition to DRF's "100/minute".
    """

    def parse_rate(self, rate):
        if rate is None:
            return (None, None)
        num, period = rate.split("/")
        m = _PERIOD_RE.match(period.strip().lower())
        if not m:
            raise ValueError(f"Invalid throttle rate: {rate!r}")
        multiplier = int(m.group(1) or 1)
        return int(num), multiplier * _PERIOD_SECONDS[m.group(2)]


class WindowAnonRateThrottle(WindowRateMixin, AnonRateThrottle):
    pass


class WindowUserRateThrottle(WindowRateMixin, UserRateThrottle):
    pass


class AuthRateThrottle(WindowRateMixin, SimpleRateThrottle):
    """
    Per-IP limiter for the credential endpoints (login, register, verification).
    """
    scope = "auth"

    def get_cache_key(self, request, view):
        return self.cache_format % {"scope": self.scope, "ident": self.get_ident(request)}
