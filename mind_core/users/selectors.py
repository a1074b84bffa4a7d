# mind_core/users/selectors.py
from __future__ import annotations

from datetime import timedelta
from typing import Dict, Optional

from django.db.models import Count, Q, QuerySet
from django.utils import timezone

from mind_core.users.models import Person, SubscriptionStatus, User, UserSubscription


def list_users() -> QuerySet[User]:
    return User.objects.select_related("person", "user_type", "status").order_by("-created_at")


def list_persons() -> QuerySet[Person]:
    return Person.objects.select_related("country", "department", "city").order_by("last_names", "first_names")


def user_stats() -> Dict[str, int]:
    agg = User.objects.aggregate(
        total=Count("id"),
        active=Count("id", filter=Q(is_active=True)),
        inactive=Count("id", filter=Q(is_active=False)),
        locked=Count("id", filter=Q(is_locked=True)),
    )
    return {k: int(v or 0) for k, v in agg.items()}


def list_subscriptions() -> QuerySet[UserSubscription]:
    return UserSubscription.objects.select_related("user", "plan").order_by("-starts_at")


def active_subscription_for(*, user_id) -> Optional[UserSubscription]:
    return (
        list_subscriptions()
        .filter(user_id=user_id, status=SubscriptionStatus.ACTIVE)
        .first()
    )


def expiring_subscriptions(*, days: int) -> QuerySet[UserSubscription]:
    current = timezone.now()
    return (
        list_subscriptions()
        .filter(
            status=SubscriptionStatus.ACTIVE,
            ends_at__isnull=False,
            ends_at__gte=current,
            ends_at__lte=current + timedelta(days=days),
        )
        .order_by("ends_at")
    )


def subscription_stats() -> Dict[str, int]:
    counts = {s.value: 0 for s in SubscriptionStatus}
    for row in UserSubscription.objects.values("status").annotate(n=Count("id")):
        counts[row["status"]] = row["n"]
    counts["total"] = sum(counts.values())
    return counts
