# mind_core/audit/mixins.py
from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

from mind_core.audit.services import AuditEntry, AuditSink, actor_for, request_metadata, snapshot

T = TypeVar("T")


class AuditMixin:
    """
    The one place views talk to the audit sink.

    Views declare `audit_domain` / `audit_entity` and call `audit()` after a
    committed write, or wrap the write with `audited()` to get before/after
    snapshots for free.
    """

    audit_domain: str = ""
    audit_entity: str = ""

    def audit(
        self,
        action: str,
        instance: Any = None,
        *,
        entity: Optional[str] = None,
        entity_id: Any = None,
        before: Optional[dict] = None,
        after: Optional[dict] = None,
        extra: Optional[dict] = None,
        actor: Any = None,
    ) -> Optional[AuditEntry]:
        request = getattr(self, "request", None)
        metadata = request_metadata(request)
        if extra:
            metadata.update(extra)
        return AuditSink(self.audit_domain).record(
            entity=entity or self.audit_entity,
            entity_id=entity_id if entity_id is not None else getattr(instance, "pk", ""),
            action=action,
            actor=str(actor) if actor is not None else actor_for(request),
            before=before,
            after=after,
            metadata=metadata,
        )

    def audited(self, action: str, instance: Any, mutate: Callable[[], T], **kwargs: Any) -> T:
        before = snapshot(instance)
        result = mutate()
        self.audit(action, result, before=before, after=snapshot(result), **kwargs)
        return result
