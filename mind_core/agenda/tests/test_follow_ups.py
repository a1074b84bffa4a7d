from datetime import timedelta

import pytest
from django.utils import timezone

from mind_core.agenda.models import Appointment, FollowUp

pytestmark = pytest.mark.django_db


@pytest.fixture
def appointment(agenda, specialist, patient, slot):
    start, end = slot
    return Appointment.objects.create(agenda=agenda, specialist=specialist, patient=patient, starts_at=start, ends_at=end)


def test_pending_lists_due_incomplete_follow_ups(api_client, appointment, patient, make_user):
    now = timezone.now()
    due = FollowUp.objects.create(
        appointment=appointment, patient=patient, instructions="Registrar sueño", next_review_at=now - timedelta(days=1)
    )
    FollowUp.objects.create(
        appointment=appointment, patient=patient, instructions="Más tarde", next_review_at=now + timedelta(days=7)
    )
    FollowUp.objects.create(
        appointment=appointment,
        patient=patient,
        instructions="Hecho",
        next_review_at=now - timedelta(days=2),
        completed=True,
    )
    FollowUp.objects.create(
        appointment=appointment, patient=make_user(), instructions="Otro", next_review_at=now - timedelta(hours=1)
    )

    res = api_client.get("/api/schedule/follow-ups/pending/", {"patient": str(patient.id)})

    assert res.status_code == 200
    assert [f["id"] for f in res.data["data"]] == [str(due.id)]

    res = api_client.get("/api/schedule/follow-ups/pending/")
    assert res.data["pagination"]["total"] == 2
