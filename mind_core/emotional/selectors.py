# mind_core/emotional/selectors.py
from __future__ import annotations

from typing import Any, Dict

from django.db.models import Avg, Count, Max, Min, QuerySet

from mind_core.emotional.models import DiaryEntry


def list_diaries() -> QuerySet[DiaryEntry]:
    return DiaryEntry.objects.select_related("user").order_by("-date")


def diary_detail_queryset() -> QuerySet[DiaryEntry]:
    return list_diaries().prefetch_related(
        "emotions__emotion",
        "sensations__sensation",
        "feelings__feeling",
        "symptoms__symptom",
    )


def diary_stats(*, user_id, date_from=None, date_to=None) -> Dict[str, Any]:
    """
    Rating summary for one user's diary, optionally within [date_from, date_to].
    """
    qs = DiaryEntry.objects.filter(user_id=user_id)
    if date_from is not None:
        qs = qs.filter(date__gte=date_from)
    if date_to is not None:
        qs = qs.filter(date__lte=date_to)

    agg = qs.aggregate(
        total_entries=Count("id"),
        average_rating=Avg("rating"),
        min_rating=Min("rating"),
        max_rating=Max("rating"),
        last_entry_date=Max("date"),
    )
    if not agg["total_entries"]:
        return {
            "total_entries": 0,
            "average_rating": 0,
            "min_rating": 0,
            "max_rating": 0,
            "last_entry_date": None,
        }
    agg["average_rating"] = round(float(agg["average_rating"]), 2)
    return agg
