# mind_core/users/filters.py
import django_filters
from django.db.models import Q

from mind_core.users.models import Person, User, UserSubscription


class UserFilter(django_filters.FilterSet):
    email = django_filters.CharFilter(field_name="email", lookup_expr="icontains")
    user_type = django_filters.UUIDFilter(field_name="user_type_id")

    class Meta:
        model = User
        fields = ["is_active", "is_locked", "user_type", "email"]


class PersonFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")

    class Meta:
        model = Person
        fields = ["document_type", "document_number"]

    def filter_search(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(Q(first_names__icontains=value) | Q(last_names__icontains=value))


class SubscriptionFilter(django_filters.FilterSet):
    user = django_filters.UUIDFilter(field_name="user_id")
    plan = django_filters.UUIDFilter(field_name="plan_id")

    class Meta:
        model = UserSubscription
        fields = ["user", "plan", "status", "auto_renew"]
