# mind_core/agenda/admin.py
from django.contrib import admin

from mind_core.agenda.models import (
    Agenda,
    AgendaDay,
    AgendaType,
    Appointment,
    AppointmentContent,
    AppointmentDiagnosis,
    AppointmentRecord,
    DiagnosisType,
    FollowUp,
)


@admin.register(Agenda)
class AgendaAdmin(admin.ModelAdmin):
    list_display = ("name", "user", "agenda_type", "is_active")
    list_filter = ("agenda_type", "is_active")
    search_fields = ("name",)


@admin.register(AgendaDay)
class AgendaDayAdmin(admin.ModelAdmin):
    list_display = ("agenda", "date", "is_active")
    list_filter = ("is_active",)


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ("starts_at", "ends_at", "specialist", "patient", "status", "modality")
    list_filter = ("status", "modality")
    search_fields = ("specialist__email", "patient__email")
    ordering = ("-starts_at",)


@admin.register(AppointmentRecord)
class AppointmentRecordAdmin(admin.ModelAdmin):
    list_display = ("appointment", "event", "occurred_at", "recorded_by")
    list_filter = ("event",)
    ordering = ("-occurred_at",)


@admin.register(FollowUp)
class FollowUpAdmin(admin.ModelAdmin):
    list_display = ("appointment", "patient", "next_review_at", "completed")
    list_filter = ("completed",)


for model in (AgendaType, DiagnosisType, AppointmentContent, AppointmentDiagnosis):
    admin.site.register(model)
