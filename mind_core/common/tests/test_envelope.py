import pytest
from django.core.exceptions import ValidationError as DjangoValidationError

from mind_core.administrative.models import Status
from mind_core.common.api.exceptions import api_exception_handler
from mind_core.common.config import parse_duration
from mind_core.common.lookups import get_or_create_lookup

pytestmark = pytest.mark.django_db


def test_health_needs_no_auth(anon_client):
    res = anon_client.get("/health")

    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["service"] == "mind-api"
    assert body["message"] == "mind-api is running"
    assert body["timestamp"]


def test_unknown_route_is_a_json_404(anon_client):
    res = anon_client.get("/api/nothing-here/")

    assert res.status_code == 404
    body = res.json()
    assert body["success"] is False
    assert body["error"] == "NOT_FOUND"
    assert "/api/nothing-here/" in body["message"]
    assert body["request_id"]


def test_missing_record_is_not_found(api_client):
    res = api_client.get("/api/admin/statuses/4b7e3d4c-16b4-4a3f-9d0c-1b2f1cdb7a11/")

    assert res.status_code == 404
    assert res.data["error"] == "NOT_FOUND"


def test_malformed_id_is_invalid_id(api_client):
    res = api_client.get("/api/admin/statuses/12345/")

    assert res.status_code == 400
    assert res.data["error"] == "INVALID_ID"


def test_unique_violation_is_duplicate_key(api_client):
    Status.objects.create(code="0099", name="Custom")

    res = api_client.post("/api/admin/statuses/", {"code": "0099", "name": "Again"}, format="json")

    assert res.status_code == 400
    assert res.data["error"] == "DUPLICATE_KEY"
    assert res.data["message"] == "The code already exists"


def test_validation_errors_are_listed(api_client):
    res = api_client.post("/api/admin/statuses/", {"name": "No code", "color": "red"}, format="json")

    assert res.status_code == 400
    assert res.data["error"] == "VALIDATION_ERROR"
    fields = {e["field"] for e in res.data["errors"]}
    assert {"code", "color"} <= fields
    color = next(e for e in res.data["errors"] if e["field"] == "color")
    assert color["value"] == "red"


def test_get_or_create_lookup_is_idempotent():
    first, created = get_or_create_lookup(Status, code="0042", defaults={"name": "Answer"})
    again, created_again = get_or_create_lookup(Status, code="0042", defaults={"name": "Other"})

    assert created is True
    assert created_again is False
    assert again.pk == first.pk
    assert again.name == "Answer"


def test_get_or_create_lookup_refetches_after_lost_race(monkeypatch):
    winner = Status.objects.create(code="0043", name="Winner")
    calls = {"get": 0}
    real_get = Status.objects.get

    def racing_get(**kwargs):
        calls["get"] += 1
        if calls["get"] == 1:
            raise Status.DoesNotExist()
        return real_get(**kwargs)

    monkeypatch.setattr(Status.objects, "get", racing_get)

    row, created = get_or_create_lookup(Status, code="0043", defaults={"name": "Loser"})

    assert created is False
    assert row.pk == winner.pk
    assert calls["get"] == 2


def test_get_or_create_lookup_propagates_other_errors(monkeypatch):
    def broken_create(**kwargs):
        raise ValueError("bad defaults")

    monkeypatch.setattr(Status.objects, "create", broken_create)

    with pytest.raises(ValueError):
        get_or_create_lookup(Status, code="0044")


@pytest.mark.parametrize(
    "raw,seconds",
    [("24h", 86400), ("30m", 1800), ("3600", 3600), ("7d", 604800), (45, 45)],
)
def test_parse_duration(raw, seconds):
    from datetime import timedelta

    assert parse_duration(raw, timedelta(0)).total_seconds() == seconds


def test_seed_lookups_is_idempotent():
    from django.core.management import call_command

    from mind_core.users.models import UserType

    call_command("seed_lookups")
    call_command("seed_lookups")

    assert set(Status.objects.values_list("code", flat=True)) == {"0002", "0003", "0004", "0005"}
    assert Status.objects.get(code="0004").color == "#E8871E"
    assert UserType.objects.filter(code="PACIENTE").count() == 1


def test_model_unique_error_keeps_its_code():
    exc = DjangoValidationError({"code": [DjangoValidationError("Status with this code already exists.", code="unique")]})

    res = api_exception_handler(exc, {"request": None})

    assert res.status_code == 400
    assert res.data["error"] == "DUPLICATE_KEY"
    assert res.data["message"] == "The code already exists"
