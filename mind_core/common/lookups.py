# mind_core/common/lookups.py
from __future__ import annotations

from typing import Any, Optional, Tuple, Type, TypeVar

from django.db import IntegrityError, models, transaction

M = TypeVar("M", bound=models.Model)


def get_or_create_lookup(
    model: Type[M],
    *,
    code: str,
    defaults: Optional[dict[str, Any]] = None,
) -> Tuple[M, bool]:
    """
    Idempotent "create if missing" for lookup rows keyed by a unique code.

    The insert runs inside a savepoint so a unique-constraint violation does not
    poison an outer transaction. When a concurrent request wins the insert we
    re-fetch exactly once; any other error propagates.
    """
    try:
        return model.objects.get(code=code), False
    except model.DoesNotExist:
        pass

    try:
        with transaction.atomic():
            return model.objects.create(code=code, **(defaults or {})), True
    except IntegrityError:
        return model.objects.get(code=code), False
