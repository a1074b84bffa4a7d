from datetime import timedelta

import pytest
from django.utils import timezone

from mind_core.agenda.models import Agenda, AgendaType


@pytest.fixture
def specialist(make_user):
    return make_user()


@pytest.fixture
def patient(make_user):
    return make_user()


@pytest.fixture
def agenda(specialist):
    kind = AgendaType.objects.create(code="THERAPY", name="Therapy")
    return Agenda.objects.create(user=specialist, agenda_type=kind, name="Consultorio")


@pytest.fixture
def slot():
    start = (timezone.now() + timedelta(days=1)).replace(minute=0, second=0, microsecond=0)
    return start, start + timedelta(hours=1)


@pytest.fixture
def book(api_client, agenda, specialist, patient):
    def _book(starts_at, ends_at=None, **extra):
        body = {
            "agenda": str(agenda.id),
            "specialist": str(extra.pop("specialist", specialist).id),
            "patient": str(extra.pop("patient", patient).id),
            "starts_at": starts_at.isoformat(),
            "ends_at": (ends_at or starts_at + timedelta(hours=1)).isoformat(),
            **extra,
        }
        return api_client.post("/api/schedule/appointments/", body, format="json")

    return _book
