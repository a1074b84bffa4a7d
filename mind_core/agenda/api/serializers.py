# mind_core/agenda/api/serializers.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema_field
from rest_framework import serializers

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

TIMESTAMPS = ["created_at", "updated_at"]
LOOKUP_FIELDS = ["id", "code", "name", "description", "is_active", *TIMESTAMPS]


class AgendaTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = AgendaType
        fields = LOOKUP_FIELDS
        read_only_fields = ["id", *TIMESTAMPS]


class DiagnosisTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = DiagnosisType
        fields = LOOKUP_FIELDS
        read_only_fields = ["id", *TIMESTAMPS]


class AgendaSerializer(serializers.ModelSerializer):
    class Meta:
        model = Agenda
        fields = ["id", "user", "agenda_type", "name", "description", "is_active", *TIMESTAMPS]
        read_only_fields = ["id", *TIMESTAMPS]


class AgendaDaySerializer(serializers.ModelSerializer):
    class Meta:
        model = AgendaDay
        fields = ["id", "agenda", "date", "is_active", *TIMESTAMPS]
        read_only_fields = ["id", *TIMESTAMPS]


# -------------------------------------------------------------------
# Appointments
# -------------------------------------------------------------------

class AppointmentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Appointment
        fields = [
            "id",
            "agenda",
            "specialist",
            "patient",
            "starts_at",
            "ends_at",
            "status",
            "modality",
            "location",
            "notes",
            *TIMESTAMPS,
        ]
        read_only_fields = ["id", *TIMESTAMPS]
        # slot clashes are reported as CONFLICT by the service
        validators = []

    def validate(self, attrs):
        starts = attrs.get("starts_at", getattr(self.instance, "starts_at", None))
        ends = attrs.get("ends_at", getattr(self.instance, "ends_at", None))
        if starts and ends and ends <= starts:
            raise serializers.ValidationError({"ends_at": "ends_at must be after starts_at."})
        return attrs


class AppointmentContentSerializer(serializers.ModelSerializer):
    class Meta:
        model = AppointmentContent
        fields = ["id", "appointment", "notes", *TIMESTAMPS]
        read_only_fields = ["id", *TIMESTAMPS]


class AppointmentDiagnosisSerializer(serializers.ModelSerializer):
    class Meta:
        model = AppointmentDiagnosis
        fields = ["id", "appointment", "diagnosis_type", "description", *TIMESTAMPS]
        read_only_fields = ["id", *TIMESTAMPS]


class AppointmentRecordSerializer(serializers.ModelSerializer):
    class Meta:
        model = AppointmentRecord
        fields = ["id", "appointment", "event", "occurred_at", "notes", "recorded_by", *TIMESTAMPS]
        read_only_fields = ["id", *TIMESTAMPS]


class AppointmentDetailSerializer(AppointmentSerializer):
    content = serializers.SerializerMethodField()
    diagnoses = AppointmentDiagnosisSerializer(many=True, read_only=True)
    records = AppointmentRecordSerializer(many=True, read_only=True)

    class Meta(AppointmentSerializer.Meta):
        fields = [*AppointmentSerializer.Meta.fields, "content", "diagnoses", "records"]

    @extend_schema_field(AppointmentContentSerializer(allow_null=True))
    def get_content(self, obj):
        # reverse one-to-one raises until content has been written
        content = getattr(obj, "content", None)
        return AppointmentContentSerializer(content).data if content is not None else None


class CancelAppointmentSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default="")


class ContentWriteSerializer(serializers.Serializer):
    notes = serializers.CharField()


class FollowUpSerializer(serializers.ModelSerializer):
    class Meta:
        model = FollowUp
        fields = [
            "id",
            "appointment",
            "patient",
            "instructions",
            "next_review_at",
            "completed",
            *TIMESTAMPS,
        ]
        read_only_fields = ["id", *TIMESTAMPS]
