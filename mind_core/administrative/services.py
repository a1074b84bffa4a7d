# mind_core/administrative/services.py
from __future__ import annotations

from django.db import transaction
from django.utils import timezone

from mind_core.administrative.models import Notification, SubscriptionPlan
from mind_core.common.api.errors import InvalidStateError


class NotificationService:
    @staticmethod
    @transaction.atomic
    def mark_sent(*, notification: Notification) -> Notification:
        if notification.sent:
            raise InvalidStateError("Notification was already sent.")
        notification.sent = True
        notification.sent_at = timezone.now()
        notification.save(update_fields=["sent", "sent_at", "updated_at"])
        return notification

    @staticmethod
    def ensure_deletable(*, notification: Notification) -> None:
        if notification.sent:
            raise InvalidStateError("A notification that was already sent cannot be deleted.")


class SubscriptionPlanService:
    @staticmethod
    @transaction.atomic
    def toggle_active(*, plan: SubscriptionPlan) -> SubscriptionPlan:
        plan.is_active = not plan.is_active
        plan.save(update_fields=["is_active", "updated_at"])
        return plan
