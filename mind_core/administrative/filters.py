# mind_core/administrative/filters.py
import django_filters

from mind_core.administrative.models import Notification


class NotificationFilter(django_filters.FilterSet):
    user = django_filters.UUIDFilter(field_name="user_id")
    notification_type = django_filters.UUIDFilter(field_name="notification_type_id")
    scheduled_from = django_filters.IsoDateTimeFilter(field_name="scheduled_at", lookup_expr="gte")
    scheduled_to = django_filters.IsoDateTimeFilter(field_name="scheduled_at", lookup_expr="lte")

    class Meta:
        model = Notification
        fields = ["user", "notification_type", "sent", "scheduled_from", "scheduled_to"]
