# mind_core/agenda/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import serializers
from rest_framework.decorators import action

from mind_core.agenda.api.serializers import (
    AgendaDaySerializer,
    AgendaSerializer,
    AgendaTypeSerializer,
    AppointmentContentSerializer,
    AppointmentDetailSerializer,
    AppointmentDiagnosisSerializer,
    AppointmentRecordSerializer,
    AppointmentSerializer,
    CancelAppointmentSerializer,
    ContentWriteSerializer,
    DiagnosisTypeSerializer,
    FollowUpSerializer,
)
from mind_core.agenda.filters import AppointmentFilter
from mind_core.agenda.models import (
    Agenda,
    AgendaDay,
    AgendaType,
    AppointmentContent,
    AppointmentDiagnosis,
    AppointmentRecord,
    DiagnosisType,
    FollowUp,
)
from mind_core.agenda.selectors import (
    appointment_detail_queryset,
    appointments_for_user,
    list_appointments,
    pending_follow_ups,
)
from mind_core.agenda.services import AppointmentService
from mind_core.audit.models import AuditAction, AuditDomain
from mind_core.audit.services import snapshot
from mind_core.common.api.pagination import paginate
from mind_core.common.api.responses import envelope
from mind_core.common.views import AuditedModelViewSet


class AgendaDomainViewSet(AuditedModelViewSet):
    audit_domain = AuditDomain.AGENDA


class ByUserQuerySerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=["specialist", "patient"], required=False)


class PendingFollowUpQuerySerializer(serializers.Serializer):
    patient = serializers.UUIDField(required=False)


# -------------------------------------------------------------------
# Reference data
# -------------------------------------------------------------------

@extend_schema(tags=["Schedule: Types"])
class AgendaTypeViewSet(AgendaDomainViewSet):
    queryset = AgendaType.objects.all().order_by("code")
    serializer_class = AgendaTypeSerializer
    audit_entity = "AgendaType"
    filterset_fields = ["is_active"]
    delete_guards = (("agendas", "The agenda type is used by agendas."),)


@extend_schema(tags=["Schedule: Types"])
class DiagnosisTypeViewSet(AgendaDomainViewSet):
    queryset = DiagnosisType.objects.all().order_by("code")
    serializer_class = DiagnosisTypeSerializer
    audit_entity = "DiagnosisType"
    filterset_fields = ["is_active"]
    delete_guards = (("appointment_diagnoses", "The diagnosis type is used by appointment diagnoses."),)


# -------------------------------------------------------------------
# Agendas
# -------------------------------------------------------------------

@extend_schema(tags=["Schedule: Agendas"])
class AgendaViewSet(AgendaDomainViewSet):
    queryset = Agenda.objects.select_related("user", "agenda_type").order_by("name")
    serializer_class = AgendaSerializer
    audit_entity = "Agenda"
    filterset_fields = ["user", "agenda_type", "is_active"]
    delete_guards = (("appointments", "The agenda has appointments."),)


@extend_schema(tags=["Schedule: Agendas"])
class AgendaDayViewSet(AgendaDomainViewSet):
    queryset = AgendaDay.objects.select_related("agenda").order_by("date")
    serializer_class = AgendaDaySerializer
    audit_entity = "AgendaDay"
    filterset_fields = ["agenda", "date", "is_active"]


# -------------------------------------------------------------------
# Appointments
# -------------------------------------------------------------------

@extend_schema(tags=["Schedule: Appointments"])
class AppointmentViewSet(AgendaDomainViewSet):
    """
    Writes go through AppointmentService so the slot rule and the
    appointment timeline are applied in one transaction.
    """
    serializer_class = AppointmentSerializer
    filterset_class = AppointmentFilter
    audit_entity = "Appointment"

    def get_queryset(self):
        if self.action == "retrieve":
            return appointment_detail_queryset()
        return list_appointments()

    def present(self, instance, *, many: bool = False):
        if self.action == "retrieve":
            return AppointmentDetailSerializer(instance, context=self.get_serializer_context()).data
        return super().present(instance, many=many)

    def perform_create(self, serializer):
        appointment = AppointmentService.create(data=dict(serializer.validated_data), actor=self.request.user)
        self.audit(AuditAction.CREATE, appointment, after=snapshot(appointment))
        return appointment

    def perform_update(self, serializer):
        appointment = serializer.instance
        return self.audited(
            AuditAction.UPDATE,
            appointment,
            lambda: AppointmentService.update(
                appointment=appointment,
                data=dict(serializer.validated_data),
                actor=self.request.user,
            ),
        )

    @extend_schema(request=CancelAppointmentSerializer, responses={200: AppointmentSerializer})
    @action(detail=True, methods=["patch"])
    def cancel(self, request, pk=None):
        appointment = self.get_object()
        ser = CancelAppointmentSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        appointment = self.audited(
            AuditAction.UPDATE,
            appointment,
            lambda: AppointmentService.cancel(
                appointment=appointment,
                reason=ser.validated_data["reason"],
                actor=request.user,
            ),
        )
        return envelope(self.present(appointment), message="Appointment cancelled")

    @extend_schema(request=None, responses={200: AppointmentSerializer})
    @action(detail=True, methods=["patch"])
    def complete(self, request, pk=None):
        appointment = self.get_object()
        appointment = self.audited(
            AuditAction.UPDATE,
            appointment,
            lambda: AppointmentService.complete(appointment=appointment, actor=request.user),
        )
        return envelope(self.present(appointment), message="Appointment completed")

    @extend_schema(request=ContentWriteSerializer, responses={200: AppointmentContentSerializer})
    @action(detail=True, methods=["post"])
    def content(self, request, pk=None):
        appointment = self.get_object()
        ser = ContentWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        content, created = AppointmentService.save_content(
            appointment=appointment,
            notes=ser.validated_data["notes"],
        )
        self.audit(
            AuditAction.CREATE if created else AuditAction.UPDATE,
            content,
            entity="AppointmentContent",
            after=snapshot(content),
        )
        return envelope(
            AppointmentContentSerializer(content).data,
            message="Appointment content saved",
            status=201 if created else 200,
        )

    @extend_schema(
        parameters=[OpenApiParameter("role", OpenApiTypes.STR, OpenApiParameter.QUERY, enum=["specialist", "patient"])],
        responses={200: AppointmentSerializer(many=True)},
    )
    @action(detail=False, methods=["get"], url_path=r"by-user/(?P<user_id>[^/.]+)")
    def by_user(self, request, user_id=None):
        q = ByUserQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        qs = appointments_for_user(user_id=self.validated_uuid(user_id), role=q.validated_data.get("role"))
        return paginate(request, qs, AppointmentSerializer)


# -------------------------------------------------------------------
# Appointment children
# -------------------------------------------------------------------

@extend_schema(tags=["Schedule: Appointments"])
class AppointmentContentViewSet(AgendaDomainViewSet):
    queryset = AppointmentContent.objects.select_related("appointment").order_by("-created_at")
    serializer_class = AppointmentContentSerializer
    audit_entity = "AppointmentContent"
    filterset_fields = ["appointment"]


@extend_schema(tags=["Schedule: Appointments"])
class AppointmentDiagnosisViewSet(AgendaDomainViewSet):
    queryset = AppointmentDiagnosis.objects.select_related("appointment", "diagnosis_type").order_by("created_at")
    serializer_class = AppointmentDiagnosisSerializer
    audit_entity = "AppointmentDiagnosis"
    filterset_fields = ["appointment", "diagnosis_type"]


@extend_schema(tags=["Schedule: Appointments"])
class AppointmentRecordViewSet(AgendaDomainViewSet):
    queryset = AppointmentRecord.objects.select_related("appointment", "recorded_by").order_by("-occurred_at")
    serializer_class = AppointmentRecordSerializer
    audit_entity = "AppointmentRecord"
    filterset_fields = ["appointment", "event"]


@extend_schema(tags=["Schedule: Follow-ups"])
class FollowUpViewSet(AgendaDomainViewSet):
    queryset = FollowUp.objects.select_related("appointment", "patient").order_by("next_review_at")
    serializer_class = FollowUpSerializer
    audit_entity = "FollowUp"
    filterset_fields = ["appointment", "patient", "completed"]

    @extend_schema(
        parameters=[OpenApiParameter("patient", OpenApiTypes.UUID, OpenApiParameter.QUERY)],
        responses={200: FollowUpSerializer(many=True)},
    )
    @action(detail=False, methods=["get"])
    def pending(self, request):
        q = PendingFollowUpQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        return paginate(request, pending_follow_ups(patient_id=q.validated_data.get("patient")), FollowUpSerializer)
