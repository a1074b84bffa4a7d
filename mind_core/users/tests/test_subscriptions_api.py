from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from mind_core.administrative.models import SubscriptionPlan, SubscriptionType
from mind_core.users.models import SubscriptionStatus, UserSubscription

pytestmark = pytest.mark.django_db

SUBS_URL = "/api/users/subscriptions/"


@pytest.fixture
def plan(db):
    kind = SubscriptionType.objects.create(code="PREMIUM", name="Premium")
    return SubscriptionPlan.objects.create(subscription_type=kind, name="Premium mensual", price=Decimal("29900"))


def subscribe(user, plan, **kwargs):
    data = {"starts_at": timezone.now()}
    data.update(kwargs)
    return UserSubscription.objects.create(user=user, plan=plan, **data)


def test_second_active_subscription_is_a_conflict(api_client, user, plan):
    body = {"user": str(user.id), "plan": str(plan.id), "starts_at": timezone.now().isoformat()}

    first = api_client.post(SUBS_URL, body, format="json")
    second = api_client.post(SUBS_URL, body, format="json")

    assert first.status_code == 201, first.data
    assert first.data["message"] == "UserSubscription created"
    assert second.status_code == 400
    assert second.data["error"] == "CONFLICT"


def test_ends_at_must_follow_starts_at(api_client, user, plan):
    now = timezone.now()
    body = {
        "user": str(user.id),
        "plan": str(plan.id),
        "starts_at": now.isoformat(),
        "ends_at": (now - timedelta(days=1)).isoformat(),
    }

    res = api_client.post(SUBS_URL, body, format="json")

    assert res.status_code == 400
    assert res.data["errors"][0]["field"] == "ends_at"


def test_cancel_then_reactivate(api_client, user, plan):
    sub = subscribe(user, plan)

    res = api_client.patch(f"{SUBS_URL}{sub.id}/cancel/")
    assert res.status_code == 200
    assert res.data["data"]["status"] == SubscriptionStatus.CANCELLED
    assert res.data["data"]["auto_renew"] is False

    res = api_client.patch(f"{SUBS_URL}{sub.id}/cancel/")
    assert res.status_code == 400
    assert res.data["error"] == "INVALID_STATE"

    res = api_client.patch(f"{SUBS_URL}{sub.id}/reactivate/")
    assert res.status_code == 200
    assert res.data["data"]["status"] == SubscriptionStatus.ACTIVE

    res = api_client.patch(f"{SUBS_URL}{sub.id}/reactivate/")
    assert res.data["error"] == "INVALID_STATE"


def test_active_lookup(api_client, user, make_user, plan):
    sub = subscribe(user, plan)

    res = api_client.get(f"{SUBS_URL}active/{user.id}/")
    assert res.status_code == 200
    assert res.data["data"]["id"] == str(sub.id)

    other = make_user()
    res = api_client.get(f"{SUBS_URL}active/{other.id}/")
    assert res.status_code == 404

    res = api_client.get(f"{SUBS_URL}active/not-a-uuid/")
    assert res.status_code == 400
    assert res.data["error"] == "INVALID_ID"


def test_expiring_window(api_client, make_user, plan):
    now = timezone.now()
    soon = subscribe(make_user(), plan, ends_at=now + timedelta(days=3))
    subscribe(make_user(), plan, ends_at=now + timedelta(days=30))
    subscribe(make_user(), plan, ends_at=now + timedelta(days=2), status=SubscriptionStatus.PAUSED)

    res = api_client.get(f"{SUBS_URL}expiring/", {"days": 7})

    assert res.status_code == 200
    assert [s["id"] for s in res.data["data"]] == [str(soon.id)]
    assert res.data["pagination"]["total"] == 1


def test_stats_counts_by_status(api_client, make_user, plan):
    subscribe(make_user(), plan)
    subscribe(make_user(), plan, status=SubscriptionStatus.PAUSED)
    subscribe(make_user(), plan, status=SubscriptionStatus.CANCELLED)

    res = api_client.get(f"{SUBS_URL}stats/")

    assert res.data["data"] == {"active": 1, "paused": 1, "cancelled": 1, "expired": 0, "total": 3}


def test_one_payment_record_per_user(api_client, user):
    body = {"user": str(user.id), "provider": "wompi", "customer_id": "cus_1"}

    first = api_client.post("/api/users/payment-info/", body, format="json")
    second = api_client.post("/api/users/payment-info/", body, format="json")

    assert first.status_code == 201, first.data
    assert second.status_code == 400
    assert second.data["error"] == "CONFLICT"

    res = api_client.get(f"/api/users/payment-info/by-user/{user.id}/")
    assert res.data["data"]["provider"] == "wompi"
