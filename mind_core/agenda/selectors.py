# mind_core/agenda/selectors.py
from __future__ import annotations

from django.db.models import Q, QuerySet
from django.utils import timezone

from mind_core.agenda.models import Appointment, FollowUp


def list_appointments() -> QuerySet[Appointment]:
    return Appointment.objects.select_related(
        "agenda",
        "specialist__person",
        "patient__person",
    ).order_by("starts_at")


def appointment_detail_queryset() -> QuerySet[Appointment]:
    return list_appointments().select_related("content").prefetch_related(
        "diagnoses__diagnosis_type",
        "records",
    )


def appointments_for_user(*, user_id, role: str | None = None) -> QuerySet[Appointment]:
    """
    role: "specialist", "patient" or None for both sides.
    """
    qs = list_appointments()
    if role == "specialist":
        return qs.filter(specialist_id=user_id)
    if role == "patient":
        return qs.filter(patient_id=user_id)
    return qs.filter(Q(specialist_id=user_id) | Q(patient_id=user_id))


def pending_follow_ups(*, patient_id=None) -> QuerySet[FollowUp]:
    """
    Incomplete follow-ups whose next review is due.
    """
    qs = FollowUp.objects.select_related("appointment", "patient").filter(
        completed=False,
        next_review_at__isnull=False,
        next_review_at__lte=timezone.now(),
    )
    if patient_id is not None:
        qs = qs.filter(patient_id=patient_id)
    return qs.order_by("next_review_at")
