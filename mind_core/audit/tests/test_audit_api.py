from datetime import timedelta

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from django.utils import timezone

from mind_core.audit.models import AgendaAudit, UserAudit
from mind_core.audit.services import AuditSink

pytestmark = pytest.mark.django_db

AUDIT_URL = "/api/users/audit/"


def record(domain="users", **kwargs):
    data = {"entity": "User", "entity_id": "u-1", "action": "UPDATE", "actor": "a-1", "after": {"x": 1}}
    data.update(kwargs)
    return AuditSink(domain).record(**data)


def age(model, days):
    model.objects.update(created_at=timezone.now() - timedelta(days=days))


def test_list_filters_and_pagination(api_client):
    record(entity_id="u-1")
    record(entity_id="u-2", action="DELETE")
    record(entity="Person", entity_id="p-1", action="CREATE")

    res = api_client.get(AUDIT_URL, {"entity": "User"})
    assert res.status_code == 200
    assert res.data["pagination"]["total"] == 2

    res = api_client.get(AUDIT_URL, {"action": "DELETE"})
    assert [r["entity_id"] for r in res.data["data"]] == ["u-2"]

    res = api_client.get(AUDIT_URL, {"action": "EXPLODE"})
    assert res.status_code == 400


def test_by_entity_and_by_actor(api_client):
    record(entity_id="u-1")
    record(entity_id="u-1", actor="a-2")
    record(entity_id="u-9")

    res = api_client.get(f"{AUDIT_URL}by-entity/User/u-1/")
    assert res.data["pagination"]["total"] == 2

    res = api_client.get(f"{AUDIT_URL}by-actor/a-2/")
    assert res.data["pagination"]["total"] == 1


def test_retrieve(api_client):
    record()
    rec = UserAudit.objects.get()

    res = api_client.get(f"{AUDIT_URL}{rec.id}/")
    assert res.data["data"]["after"] == {"x": 1}

    assert api_client.get(f"{AUDIT_URL}999999/").status_code == 404
    res = api_client.get(f"{AUDIT_URL}abc/")
    assert res.status_code == 400
    assert res.data["error"] == "INVALID_ID"


def test_stats_group_by_entity_then_action(api_client):
    record(action="CREATE")
    record(action="UPDATE")
    record(action="UPDATE")
    record(entity="Person", action="CREATE")

    res = api_client.get(f"{AUDIT_URL}stats/")

    user_bucket = next(b for b in res.data["data"] if b["entity"] == "User")
    assert user_bucket["total"] == 3
    assert {a["action"]: a["count"] for a in user_bucket["actions"]} == {"CREATE": 1, "UPDATE": 2}
    assert all(a["last_at"] for a in user_bucket["actions"])


def test_audit_tables_are_separate_per_domain(api_client):
    record(domain="agenda", entity="Appointment")

    assert AgendaAudit.objects.count() == 1
    assert api_client.get(AUDIT_URL).data["pagination"]["total"] == 0
    assert api_client.get("/api/schedule/audit/").data["pagination"]["total"] == 1


def test_cleanup_deletes_only_older_records(api_client):
    record()
    age(UserAudit, 120)
    record()

    res = api_client.delete(f"{AUDIT_URL}cleanup/?days=90")

    assert res.status_code == 200
    assert res.data["data"] == {"deleted_count": 1, "days": 90}
    assert UserAudit.objects.count() == 1


def test_cleanup_bounds_per_domain(api_client):
    assert api_client.delete(f"{AUDIT_URL}cleanup/?days=3650").status_code == 200
    assert api_client.delete(f"{AUDIT_URL}cleanup/?days=3651").status_code == 400
    assert api_client.delete("/api/schedule/audit/cleanup/?days=366").status_code == 400
    assert api_client.delete("/api/schedule/audit/cleanup/?days=0").status_code == 400


def test_cleanup_command():
    record(domain="agenda", entity="Appointment")
    age(AgendaAudit, 400)

    call_command("cleanup_audit", domain="agenda", days=365)
    assert AgendaAudit.objects.count() == 0

    with pytest.raises(CommandError):
        call_command("cleanup_audit", domain="agenda", days=400)


def test_audit_requires_authentication(anon_client):
    res = anon_client.get(AUDIT_URL)

    assert res.status_code == 401
