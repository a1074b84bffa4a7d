# mind_core/audit/selectors.py
from __future__ import annotations

from datetime import datetime

from django.db.models import Count, Max, QuerySet

from mind_core.audit.models import AuditRecord, audit_model_for


def list_audit_records(
    *,
    domain: str,
    entity: str | None = None,
    entity_id: str | None = None,
    actor_id: str | None = None,
    action: str | None = None,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
) -> QuerySet[AuditRecord]:
    qs = audit_model_for(domain).objects.all()

    if entity:
        qs = qs.filter(entity=entity)
    if entity_id:
        qs = qs.filter(entity_id=str(entity_id))
    if actor_id:
        qs = qs.filter(actor_id=str(actor_id))
    if action:
        qs = qs.filter(action=action)
    if date_from:
        qs = qs.filter(created_at__gte=date_from)
    if date_to:
        qs = qs.filter(created_at__lte=date_to)

    return qs.order_by("-created_at", "-id")


def audit_stats(*, domain: str) -> list[dict]:
    """
    Grouped by entity, then action: [{entity, total, actions: [{action, count, last_at}]}]
    """
    rows = (
        audit_model_for(domain)
        .objects.values("entity", "action")
        .annotate(count=Count("id"), last_at=Max("created_at"))
        .order_by("entity", "action")
    )

    grouped: dict[str, dict] = {}
    for row in rows:
        bucket = grouped.setdefault(row["entity"], {"entity": row["entity"], "total": 0, "actions": []})
        bucket["total"] += row["count"]
        bucket["actions"].append(
            {"action": row["action"], "count": row["count"], "last_at": row["last_at"]}
        )
    return sorted(grouped.values(), key=lambda b: b["total"], reverse=True)
