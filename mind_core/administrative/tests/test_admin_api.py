from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from mind_core.administrative.models import Menu, Notification, NotificationType, SubscriptionType, VariableType

pytestmark = pytest.mark.django_db


@pytest.fixture
def reminder(db):
    return NotificationType.objects.create(code="REMINDER", name="Reminder")


def notify(user, kind, **kwargs):
    data = {"title": "Cita", "message": "Mañana a las 9", "scheduled_at": timezone.now()}
    data.update(kwargs)
    return Notification.objects.create(user=user, notification_type=kind, **data)


def test_mark_sent_once(api_client, user, reminder):
    n = notify(user, reminder)

    res = api_client.patch(f"/api/admin/notifications/{n.id}/mark-sent/")
    assert res.status_code == 200
    assert res.data["data"]["sent"] is True
    assert res.data["data"]["sent_at"]

    res = api_client.patch(f"/api/admin/notifications/{n.id}/mark-sent/")
    assert res.status_code == 400
    assert res.data["error"] == "INVALID_STATE"


def test_sent_notification_cannot_be_deleted(api_client, user, reminder):
    sent = notify(user, reminder, sent=True, sent_at=timezone.now())
    unsent = notify(user, reminder)

    assert api_client.delete(f"/api/admin/notifications/{sent.id}/").status_code == 400
    assert api_client.delete(f"/api/admin/notifications/{unsent.id}/").status_code == 200


def test_pending_lists_due_unsent_only(api_client, user, reminder):
    due = notify(user, reminder, scheduled_at=timezone.now() - timedelta(minutes=5))
    notify(user, reminder, scheduled_at=timezone.now() + timedelta(days=1))
    notify(user, reminder, sent=True, scheduled_at=timezone.now() - timedelta(days=1))

    res = api_client.get("/api/admin/notifications/pending/")

    assert [n["id"] for n in res.data["data"]] == [str(due.id)]


def test_notifications_by_user(api_client, user, make_user, reminder):
    notify(user, reminder)
    notify(make_user(), reminder)

    res = api_client.get(f"/api/admin/notifications/by-user/{user.id}/")

    assert res.data["pagination"]["total"] == 1


def test_menu_tree_nests_active_menus(api_client):
    root = Menu.objects.create(name="Agenda", order=1)
    Menu.objects.create(name="Citas", parent=root, level=2, order=2)
    Menu.objects.create(name="Días", parent=root, level=2, order=1)
    hidden = Menu.objects.create(name="Oculto", order=2, is_active=False)
    Menu.objects.create(name="Hijo oculto", parent=hidden, level=2)

    res = api_client.get("/api/admin/menus/tree/")

    assert res.status_code == 200
    tree = res.data["data"]
    assert [m["name"] for m in tree] == ["Agenda"]
    assert [c["name"] for c in tree[0]["children"]] == ["Días", "Citas"]


def test_menu_with_children_cannot_be_deleted(api_client):
    root = Menu.objects.create(name="Agenda")
    Menu.objects.create(name="Citas", parent=root, level=2)

    res = api_client.delete(f"/api/admin/menus/{root.id}/")

    assert res.data["error"] == "IN_USE"


def test_plan_price_must_not_be_negative_and_toggle(api_client):
    kind = SubscriptionType.objects.create(code="BASIC", name="Basic")
    body = {"subscription_type": str(kind.id), "name": "Básico", "price": "-1.00"}

    res = api_client.post("/api/admin/subscription-plans/", body, format="json")
    assert res.status_code == 400

    body["price"] = "9900.00"
    res = api_client.post("/api/admin/subscription-plans/", body, format="json")
    assert res.status_code == 201
    assert Decimal(res.data["data"]["price"]) == Decimal("9900.00")

    plan_id = res.data["data"]["id"]
    res = api_client.patch(f"/api/admin/subscription-plans/{plan_id}/toggle-active/")
    assert res.data["message"] == "Plan deactivated"
    assert res.data["data"]["is_active"] is False


def test_variable_key_is_unique_per_environment(api_client):
    kind = VariableType.objects.create(code="FLAGS", name="Flags")
    body = {"variable_type": str(kind.id), "key": "max_daily_entries", "value": 3, "environment": "production"}

    assert api_client.post("/api/admin/variables/", body, format="json").status_code == 201

    res = api_client.post("/api/admin/variables/", body, format="json")
    assert res.status_code == 400
    assert res.data["error"] == "DUPLICATE_KEY"

    body["environment"] = "staging"
    assert api_client.post("/api/admin/variables/", body, format="json").status_code == 201


def test_country_iso_code_is_upper_cased_and_unique(api_client):
    assert api_client.post("/api/admin/countries/", {"name": "Colombia", "iso_code": "co"}, format="json").status_code == 201

    res = api_client.post("/api/admin/countries/", {"name": "Otra", "iso_code": "CO"}, format="json")

    assert res.status_code == 400
    assert res.data["error"] == "DUPLICATE_KEY"
