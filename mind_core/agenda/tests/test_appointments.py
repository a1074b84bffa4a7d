from datetime import timedelta

import pytest

from mind_core.agenda.models import Appointment, AppointmentRecord, AppointmentStatus, RecordEvent
from mind_core.audit.models import AgendaAudit

pytestmark = pytest.mark.django_db

URL = "/api/schedule/appointments/"


def events(appointment_id):
    return list(
        AppointmentRecord.objects.filter(appointment_id=appointment_id)
        .order_by("occurred_at", "created_at")
        .values_list("event", flat=True)
    )


def test_create_writes_scheduled_record_and_audit(book, slot):
    res = book(*slot)

    assert res.status_code == 201
    assert res.data["message"] == "Appointment created"
    appointment_id = res.data["data"]["id"]
    assert events(appointment_id) == [RecordEvent.SCHEDULED]
    assert AgendaAudit.objects.filter(entity="Appointment", entity_id=appointment_id, action="CREATE").exists()


def test_same_specialist_same_start_is_conflict(book, slot):
    assert book(*slot).status_code == 201

    res = book(*slot)

    assert res.status_code == 400
    assert res.data["error"] == "CONFLICT"
    assert Appointment.objects.count() == 1


def test_overlapping_interval_with_different_start_is_accepted(book, slot):
    start, end = slot
    assert book(start, end).status_code == 201

    res = book(start + timedelta(minutes=30), end + timedelta(minutes=30))

    assert res.status_code == 201


def test_other_specialist_can_take_the_same_start(book, slot, make_user):
    assert book(*slot).status_code == 201
    assert book(*slot, specialist=make_user()).status_code == 201


def test_cancelled_appointment_frees_the_slot(api_client, book, slot):
    first = book(*slot).data["data"]["id"]
    assert api_client.patch(f"{URL}{first}/cancel/", {"reason": "viaje"}, format="json").status_code == 200

    assert book(*slot).status_code == 201


def test_moving_onto_a_taken_start_is_conflict(api_client, book, slot):
    start, _ = slot
    book(start)
    other = book(start + timedelta(hours=2)).data["data"]["id"]

    res = api_client.patch(
        f"{URL}{other}/",
        {"starts_at": start.isoformat(), "ends_at": (start + timedelta(hours=1)).isoformat()},
        format="json",
    )

    assert res.data["error"] == "CONFLICT"


def test_reschedule_appends_record(api_client, book, slot):
    start, _ = slot
    appointment_id = book(start).data["data"]["id"]
    new_start = start + timedelta(days=1)

    res = api_client.patch(
        f"{URL}{appointment_id}/",
        {"starts_at": new_start.isoformat(), "ends_at": (new_start + timedelta(hours=1)).isoformat()},
        format="json",
    )

    assert res.status_code == 200
    assert events(appointment_id) == [RecordEvent.SCHEDULED, RecordEvent.RESCHEDULED]


def test_ends_at_must_follow_starts_at(book, slot):
    start, _ = slot

    res = book(start, start - timedelta(minutes=10))

    assert res.status_code == 400
    assert res.data["error"] == "VALIDATION_ERROR"


def test_cancel_twice_is_invalid_state(api_client, book, slot):
    appointment_id = book(*slot).data["data"]["id"]

    res = api_client.patch(f"{URL}{appointment_id}/cancel/", {}, format="json")
    assert res.data["data"]["status"] == AppointmentStatus.CANCELLED
    assert events(appointment_id) == [RecordEvent.SCHEDULED, RecordEvent.CANCELLED]

    res = api_client.patch(f"{URL}{appointment_id}/cancel/", {}, format="json")
    assert res.status_code == 400
    assert res.data["error"] == "INVALID_STATE"


def test_complete_rules(api_client, book, slot):
    start, _ = slot
    done = book(start).data["data"]["id"]
    cancelled = book(start + timedelta(hours=3)).data["data"]["id"]
    api_client.patch(f"{URL}{cancelled}/cancel/", {}, format="json")

    res = api_client.patch(f"{URL}{done}/complete/")
    assert res.status_code == 200
    assert res.data["data"]["status"] == AppointmentStatus.COMPLETED
    assert events(done)[-1] == RecordEvent.FINISHED

    assert api_client.patch(f"{URL}{done}/complete/").data["error"] == "INVALID_STATE"
    assert api_client.patch(f"{URL}{cancelled}/complete/").data["error"] == "INVALID_STATE"


def test_content_upsert_and_detail(api_client, book, slot):
    appointment_id = book(*slot).data["data"]["id"]

    detail = api_client.get(f"{URL}{appointment_id}/").data["data"]
    assert detail["content"] is None
    assert [r["event"] for r in detail["records"]] == [RecordEvent.SCHEDULED]
    assert detail["diagnoses"] == []

    res = api_client.post(f"{URL}{appointment_id}/content/", {"notes": "Primera sesión"}, format="json")
    assert res.status_code == 201

    res = api_client.post(f"{URL}{appointment_id}/content/", {"notes": "Notas revisadas"}, format="json")
    assert res.status_code == 200

    detail = api_client.get(f"{URL}{appointment_id}/").data["data"]
    assert detail["content"]["notes"] == "Notas revisadas"


def test_by_user_respects_role(api_client, book, slot, specialist, patient):
    book(*slot)

    as_patient = api_client.get(f"{URL}by-user/{patient.id}/", {"role": "patient"})
    as_specialist = api_client.get(f"{URL}by-user/{patient.id}/", {"role": "specialist"})
    either = api_client.get(f"{URL}by-user/{specialist.id}/")

    assert as_patient.data["pagination"]["total"] == 1
    assert as_specialist.data["pagination"]["total"] == 0
    assert either.data["pagination"]["total"] == 1


def test_by_user_rejects_malformed_id(api_client):
    res = api_client.get(f"{URL}by-user/not-a-uuid/")

    assert res.data["error"] == "INVALID_ID"


def test_agenda_with_appointments_cannot_be_deleted(api_client, agenda, book, slot):
    book(*slot)

    res = api_client.delete(f"/api/schedule/agendas/{agenda.id}/")
    assert res.data["error"] == "IN_USE"

    res = api_client.delete(f"/api/schedule/agenda-types/{agenda.agenda_type_id}/")
    assert res.data["error"] == "IN_USE"
