# mind_core/agenda/services.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from django.db import transaction

from mind_core.agenda.models import (
    Appointment,
    AppointmentContent,
    AppointmentRecord,
    AppointmentStatus,
    RecordEvent,
)
from mind_core.common.api.errors import ConflictError, InvalidStateError
from mind_core.users.models import User


def _recorder(actor) -> Optional[User]:
    return actor if isinstance(actor, User) else None


class AppointmentService:
    """
    Appointment lifecycle. Every transition appends an AppointmentRecord in the
    same transaction as the change it describes.
    """

    @staticmethod
    def ensure_no_conflict(*, specialist_id, starts_at: datetime, exclude_id=None) -> None:
        # exact start equality only; overlapping intervals with different starts are allowed
        qs = Appointment.objects.filter(specialist_id=specialist_id, starts_at=starts_at).exclude(
            status=AppointmentStatus.CANCELLED
        )
        if exclude_id is not None:
            qs = qs.exclude(pk=exclude_id)
        if qs.exists():
            raise ConflictError("The specialist already has an appointment at that date and time.")

    @staticmethod
    @transaction.atomic
    def create(*, data: Dict[str, Any], actor=None) -> Appointment:
        if data.get("status", AppointmentStatus.SCHEDULED) != AppointmentStatus.CANCELLED:
            AppointmentService.ensure_no_conflict(
                specialist_id=data["specialist"].pk,
                starts_at=data["starts_at"],
            )

        appointment = Appointment.objects.create(**data)
        AppointmentRecord.objects.create(
            appointment=appointment,
            event=RecordEvent.SCHEDULED,
            notes="Appointment created",
            recorded_by=_recorder(actor),
        )
        return appointment

    @staticmethod
    @transaction.atomic
    def update(*, appointment: Appointment, data: Dict[str, Any], actor=None) -> Appointment:
        previous_start = appointment.starts_at
        for k, v in data.items():
            setattr(appointment, k, v)

        slot_changed = any(k in data for k in ("specialist", "starts_at", "status"))
        if slot_changed and appointment.status != AppointmentStatus.CANCELLED:
            AppointmentService.ensure_no_conflict(
                specialist_id=appointment.specialist_id,
                starts_at=appointment.starts_at,
                exclude_id=appointment.pk,
            )

        appointment.save()

        if appointment.starts_at != previous_start:
            AppointmentRecord.objects.create(
                appointment=appointment,
                event=RecordEvent.RESCHEDULED,
                notes=f"Moved from {previous_start.isoformat()}",
                recorded_by=_recorder(actor),
            )
        return appointment

    @staticmethod
    @transaction.atomic
    def cancel(*, appointment: Appointment, reason: str = "", actor=None) -> Appointment:
        if appointment.status == AppointmentStatus.CANCELLED:
            raise InvalidStateError("The appointment is already cancelled.")

        appointment.status = AppointmentStatus.CANCELLED
        appointment.save(update_fields=["status", "updated_at"])
        AppointmentRecord.objects.create(
            appointment=appointment,
            event=RecordEvent.CANCELLED,
            notes=reason or "Appointment cancelled",
            recorded_by=_recorder(actor),
        )
        return appointment

    @staticmethod
    @transaction.atomic
    def complete(*, appointment: Appointment, actor=None) -> Appointment:
        if appointment.status == AppointmentStatus.COMPLETED:
            raise InvalidStateError("The appointment is already completed.")
        if appointment.status == AppointmentStatus.CANCELLED:
            raise InvalidStateError("A cancelled appointment cannot be completed.")

        appointment.status = AppointmentStatus.COMPLETED
        appointment.save(update_fields=["status", "updated_at"])
        AppointmentRecord.objects.create(
            appointment=appointment,
            event=RecordEvent.FINISHED,
            notes="Appointment completed",
            recorded_by=_recorder(actor),
        )
        return appointment

    @staticmethod
    @transaction.atomic
    def save_content(*, appointment: Appointment, notes: str) -> Tuple[AppointmentContent, bool]:
        return AppointmentContent.objects.update_or_create(
            appointment=appointment,
            defaults={"notes": notes},
        )
