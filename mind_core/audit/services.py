# mind_core/audit/services.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Dict, Optional

from django.core.serializers.json import DjangoJSONEncoder
from django.db import models, transaction
from django.utils.timezone import now

from mind_core.audit.models import AuditAction, AuditDomain, audit_model_for

logger = logging.getLogger(__name__)

SYSTEM_ACTOR = "system"

# never copied into before/after snapshots
SECRET_FIELDS = frozenset({"password_hash", "verification_code", "verification_code_expires_at"})


@dataclass(frozen=True)
class AuditEntry:
    domain: str
    entity: str
    entity_id: str
    action: str
    actor_id: str
    before: Optional[Dict[str, Any]] = None
    after: Optional[Dict[str, Any]] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


def snapshot(instance: models.Model | None) -> Optional[Dict[str, Any]]:
    """
    JSON-safe dict of a model's concrete fields (FKs as ids), without secrets.
    """
    if instance is None:
        return None
    data = {}
    for f in instance._meta.concrete_fields:
        if f.name in SECRET_FIELDS:
            continue
        data[f.attname] = f.value_from_object(instance)
    return json.loads(json.dumps(data, cls=DjangoJSONEncoder))


def client_ip(request) -> str:
    if request is None:
        return ""
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR", "") or ""


def actor_for(request) -> str:
    user = getattr(request, "user", None) if request is not None else None
    if user is not None and getattr(user, "is_authenticated", False) and getattr(user, "id", None):
        return str(user.id)
    return SYSTEM_ACTOR


def request_metadata(request) -> Dict[str, Any]:
    if request is None:
        return {}
    return {
        "ip": client_ip(request),
        "user_agent": request.META.get("HTTP_USER_AGENT", ""),
    }


class AuditSink:
    """
    Best-effort writer for one domain's audit table.

    record() never raises: a failed write is logged and swallowed so the
    caller's primary response is unaffected.
    """

    def __init__(self, domain: str):
        self.domain = AuditDomain(domain)
        self.model = audit_model_for(self.domain)

    def record(
        self,
        *,
        entity: str,
        entity_id: Any,
        action: str,
        actor: Optional[str] = None,
        before: Optional[Dict[str, Any]] = None,
        after: Optional[Dict[str, Any]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Optional[AuditEntry]:
        entry = AuditEntry(
            domain=self.domain,
            entity=entity,
            entity_id=str(entity_id),
            action=AuditAction(action),
            actor_id=str(actor) if actor else SYSTEM_ACTOR,
            before=None if action == AuditAction.CREATE else before,
            after=None if action == AuditAction.DELETE else after,
            metadata=dict(metadata or {}),
        )

        try:
            self._write(entry)
        except Exception:
            logger.exception(
                "Audit write failed domain=%s entity=%s id=%s action=%s",
                entry.domain,
                entry.entity,
                entry.entity_id,
                entry.action,
            )
            return None
        return entry

    def _write(self, entry: AuditEntry) -> None:
        extra = dict(entry.metadata)
        ip = str(extra.pop("ip", "") or "")
        user_agent = str(extra.pop("user_agent", "") or "")

        # own savepoint: a failing insert must not break the caller's transaction
        with transaction.atomic():
            self.model.objects.create(
                entity=entry.entity,
                entity_id=entry.entity_id,
                action=entry.action,
                actor_id=entry.actor_id,
                before=entry.before,
                after=entry.after,
                ip=ip,
                user_agent=user_agent,
                metadata=extra,
            )


class AuditRetentionService:
    @staticmethod
    @transaction.atomic
    def cleanup(*, domain: str, days: int) -> int:
        """
        Delete records older than `days`. No archival. Returns deleted count.
        """
        model = audit_model_for(domain)
        cutoff = now() - timedelta(days=days)
        deleted, _ = model.objects.filter(created_at__lt=cutoff).delete()
        return deleted
