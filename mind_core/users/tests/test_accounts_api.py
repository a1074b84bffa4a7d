import pytest

from mind_core.audit.models import UserAudit
from mind_core.users.models import User

pytestmark = pytest.mark.django_db

ACCOUNTS_URL = "/api/users/accounts/"


def test_list_is_paginated(api_client, make_user):
    for _ in range(3):
        make_user()

    res = api_client.get(ACCOUNTS_URL, {"limit": 2})

    assert res.status_code == 200
    assert res.data["success"] is True
    assert len(res.data["data"]) == 2
    assert res.data["pagination"] == {"page": 1, "limit": 2, "total": 4, "pages": 2}


def test_list_filters(api_client, make_user):
    make_user(email="locked@mind.test", is_locked=True)
    make_user(email="off@mind.test", is_active=False)

    res = api_client.get(ACCOUNTS_URL, {"is_locked": "true"})
    assert [u["email"] for u in res.data["data"]] == ["locked@mind.test"]

    res = api_client.get(ACCOUNTS_URL, {"email": "OFF@"})
    assert [u["email"] for u in res.data["data"]] == ["off@mind.test"]


def test_put_is_not_allowed(api_client, user):
    res = api_client.put(f"{ACCOUNTS_URL}{user.id}/", {"email": "x@mind.test"}, format="json")

    assert res.status_code == 405
    assert res.data["error"] == "METHOD_NOT_ALLOWED"


def test_accounts_cannot_be_created_here(api_client):
    res = api_client.post(ACCOUNTS_URL, {"email": "x@mind.test"}, format="json")

    assert res.status_code == 405


def test_patch_status_code_drives_lifecycle_flags(api_client, make_user):
    target = make_user()

    res = api_client.patch(f"{ACCOUNTS_URL}{target.id}/", {"status": "0005"}, format="json")

    assert res.status_code == 200, res.data
    assert res.data["message"] == "User updated"
    target.refresh_from_db()
    assert target.is_locked is True
    assert target.status.code == "0005"

    res = api_client.patch(f"{ACCOUNTS_URL}{target.id}/", {"status": "0002"}, format="json")
    target.refresh_from_db()
    assert target.is_locked is False
    assert target.is_active is False
    assert target.status.code == "0002"


def test_empty_patch_is_rejected(api_client, user):
    res = api_client.patch(f"{ACCOUNTS_URL}{user.id}/", {}, format="json")

    assert res.status_code == 400
    assert res.data["error"] == "VALIDATION_ERROR"


def test_patch_email_to_taken_address_is_rejected(api_client, make_user):
    make_user(email="taken@mind.test")
    target = make_user()

    res = api_client.patch(f"{ACCOUNTS_URL}{target.id}/", {"email": "taken@mind.test"}, format="json")

    assert res.status_code == 400
    assert res.data["error"] == "DUPLICATE_EMAIL"


def test_toggle_active_flips_and_audits(api_client, make_user):
    target = make_user()

    res = api_client.patch(f"{ACCOUNTS_URL}{target.id}/toggle-active/")
    assert res.status_code == 200
    assert res.data["message"] == "User deactivated"
    assert res.data["data"]["is_active"] is False

    res = api_client.patch(f"{ACCOUNTS_URL}{target.id}/toggle-active/")
    assert res.data["message"] == "User activated"

    records = UserAudit.objects.filter(entity="User", entity_id=str(target.id), action="UPDATE")
    assert records.count() == 2
    first = records.order_by("created_at", "id").first()
    assert first.before["is_active"] is True
    assert first.after["is_active"] is False


def test_unblock_requires_locked_account(api_client, make_user):
    target = make_user(is_locked=True, failed_attempts=5)

    res = api_client.patch(f"{ACCOUNTS_URL}{target.id}/unblock/")
    assert res.status_code == 200
    target.refresh_from_db()
    assert target.is_locked is False
    assert target.failed_attempts == 0

    res = api_client.patch(f"{ACCOUNTS_URL}{target.id}/unblock/")
    assert res.status_code == 400
    assert res.data["error"] == "INVALID_STATE"


def test_delete_is_a_soft_deactivation(api_client, make_user):
    target = make_user()

    res = api_client.delete(f"{ACCOUNTS_URL}{target.id}/")

    assert res.status_code == 200
    assert res.data["message"] == "User deactivated"
    assert User.objects.filter(pk=target.pk, is_active=False).exists()
    assert UserAudit.objects.filter(action="DELETE", entity_id=str(target.id)).exists()


def test_stats(api_client, make_user):
    make_user(is_active=False)
    make_user(is_locked=True)

    res = api_client.get(f"{ACCOUNTS_URL}stats/")

    assert res.data["data"] == {"total": 3, "active": 2, "inactive": 1, "locked": 1}


def test_user_type_delete_is_guarded(api_client, user):
    res = api_client.delete(f"/api/users/user-types/{user.user_type_id}/")

    assert res.status_code == 400
    assert res.data["error"] == "IN_USE"


def test_person_search(api_client, make_person):
    make_person(first_names="Lucía", last_names="Pérez")

    res = api_client.get("/api/users/persons/", {"search": "pér"})

    assert [p["last_names"] for p in res.data["data"]] == ["Pérez"]
