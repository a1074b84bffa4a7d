# mind_core/emotional/filters.py
import django_filters

from mind_core.emotional.models import DiaryEntry


class DiaryFilter(django_filters.FilterSet):
    user = django_filters.UUIDFilter(field_name="user_id")
    date_from = django_filters.IsoDateTimeFilter(field_name="date", lookup_expr="gte")
    date_to = django_filters.IsoDateTimeFilter(field_name="date", lookup_expr="lte")
    min_rating = django_filters.NumberFilter(field_name="rating", lookup_expr="gte")

    class Meta:
        model = DiaryEntry
        fields = ["user", "date_from", "date_to", "min_rating"]
