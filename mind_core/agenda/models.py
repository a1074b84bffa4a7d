# mind_core/agenda/models.py
from __future__ import annotations

from django.db import models
from django.utils import timezone

from mind_core.common.models import LookupModel, UUIDModel


class AgendaType(LookupModel):
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "agenda_type"


class DiagnosisType(LookupModel):
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "agenda_diagnosis_type"


class Agenda(UUIDModel):
    user = models.ForeignKey("users.User", on_delete=models.PROTECT, related_name="agendas")
    agenda_type = models.ForeignKey(AgendaType, on_delete=models.PROTECT, related_name="agendas")
    name = models.CharField(max_length=120)
    description = models.CharField(max_length=500, blank=True, default="")
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "agenda_agenda"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class AgendaDay(UUIDModel):
    agenda = models.ForeignKey(Agenda, on_delete=models.CASCADE, related_name="days")
    date = models.DateField()
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "agenda_day"
        ordering = ["date"]
        constraints = [
            models.UniqueConstraint(fields=["agenda", "date"], name="uq_agenda_day"),
        ]


class AppointmentStatus(models.TextChoices):
    SCHEDULED = "scheduled", "Scheduled"
    CONFIRMED = "confirmed", "Confirmed"
    IN_PROGRESS = "in_progress", "In progress"
    COMPLETED = "completed", "Completed"
    CANCELLED = "cancelled", "Cancelled"
    NO_SHOW = "no_show", "No show"


class AppointmentModality(models.TextChoices):
    IN_PERSON = "in_person", "In person"
    VIRTUAL = "virtual", "Virtual"
    PHONE = "phone", "Phone"


class Appointment(UUIDModel):
    """
    A specialist/patient session on an agenda. A specialist cannot hold two
    non-cancelled appointments with the same start.
    """
    agenda = models.ForeignKey(Agenda, on_delete=models.PROTECT, related_name="appointments")
    specialist = models.ForeignKey(
        "users.User", on_delete=models.PROTECT, related_name="specialist_appointments"
    )
    patient = models.ForeignKey("users.User", on_delete=models.PROTECT, related_name="patient_appointments")
    starts_at = models.DateTimeField()
    ends_at = models.DateTimeField()
    status = models.CharField(
        max_length=16,
        choices=AppointmentStatus.choices,
        default=AppointmentStatus.SCHEDULED,
        db_index=True,
    )
    modality = models.CharField(
        max_length=16,
        choices=AppointmentModality.choices,
        default=AppointmentModality.IN_PERSON,
    )
    location = models.CharField(max_length=255, blank=True, default="")
    notes = models.TextField(blank=True, default="")

    class Meta:
        db_table = "agenda_appointment"
        ordering = ["starts_at"]
        indexes = [
            models.Index(fields=["agenda", "starts_at"]),
            models.Index(fields=["specialist", "starts_at"]),
            models.Index(fields=["patient", "starts_at"]),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["specialist", "starts_at"],
                condition=~models.Q(status="cancelled"),
                name="uq_appointment_specialist_start",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.specialist_id} / {self.patient_id} @ {self.starts_at:%Y-%m-%d %H:%M}"


class AppointmentContent(UUIDModel):
    appointment = models.OneToOneField(Appointment, on_delete=models.CASCADE, related_name="content")
    notes = models.TextField()

    class Meta:
        db_table = "agenda_appointment_content"


class AppointmentDiagnosis(UUIDModel):
    appointment = models.ForeignKey(Appointment, on_delete=models.CASCADE, related_name="diagnoses")
    diagnosis_type = models.ForeignKey(
        DiagnosisType, on_delete=models.PROTECT, related_name="appointment_diagnoses"
    )
    description = models.TextField()

    class Meta:
        db_table = "agenda_appointment_diagnosis"
        ordering = ["created_at"]


class RecordEvent(models.TextChoices):
    SCHEDULED = "scheduled", "Scheduled"
    CONFIRMED = "confirmed", "Confirmed"
    STARTED = "started", "Started"
    FINISHED = "finished", "Finished"
    CANCELLED = "cancelled", "Cancelled"
    RESCHEDULED = "rescheduled", "Rescheduled"


class AppointmentRecord(UUIDModel):
    """
    Append-only timeline of an appointment.
    """
    appointment = models.ForeignKey(Appointment, on_delete=models.CASCADE, related_name="records")
    event = models.CharField(max_length=16, choices=RecordEvent.choices, default=RecordEvent.SCHEDULED)
    occurred_at = models.DateTimeField(default=timezone.now)
    notes = models.TextField(blank=True, default="")
    recorded_by = models.ForeignKey(
        "users.User", on_delete=models.SET_NULL, null=True, blank=True, related_name="appointment_records"
    )

    class Meta:
        db_table = "agenda_appointment_record"
        ordering = ["-occurred_at"]
        indexes = [
            models.Index(fields=["appointment", "-occurred_at"]),
        ]


class FollowUp(UUIDModel):
    appointment = models.ForeignKey(Appointment, on_delete=models.CASCADE, related_name="follow_ups")
    patient = models.ForeignKey("users.User", on_delete=models.CASCADE, related_name="patient_follow_ups")
    instructions = models.TextField()
    next_review_at = models.DateTimeField(null=True, blank=True)
    completed = models.BooleanField(default=False)

    class Meta:
        db_table = "agenda_follow_up"
        ordering = ["next_review_at"]
        indexes = [
            models.Index(fields=["patient", "next_review_at"]),
        ]
