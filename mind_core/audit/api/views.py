# mind_core/audit/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated

from mind_core.audit.api.serializers import (
    AuditCleanupSerializer,
    AuditEntityStatSerializer,
    AuditQuerySerializer,
    AuditRecordSerializer,
)
from mind_core.audit.models import CLEANUP_MAX_DAYS, AuditDomain, audit_model_for
from mind_core.audit.selectors import audit_stats, list_audit_records
from mind_core.audit.services import AuditRetentionService
from mind_core.common.api.errors import InvalidIdError
from mind_core.common.api.pagination import paginate
from mind_core.common.api.responses import envelope

AUDIT_FILTER_PARAMS = [
    OpenApiParameter("entity", OpenApiTypes.STR, OpenApiParameter.QUERY, description="Entity name (e.g. User, Appointment)."),
    OpenApiParameter("entity_id", OpenApiTypes.STR, OpenApiParameter.QUERY, description="Entity id."),
    OpenApiParameter("actor_id", OpenApiTypes.STR, OpenApiParameter.QUERY, description="Acting user id or 'system'."),
    OpenApiParameter("action", OpenApiTypes.STR, OpenApiParameter.QUERY, enum=["CREATE", "UPDATE", "DELETE", "LOGIN", "LOGOUT"]),
    OpenApiParameter("date_from", OpenApiTypes.DATETIME, OpenApiParameter.QUERY),
    OpenApiParameter("date_to", OpenApiTypes.DATETIME, OpenApiParameter.QUERY),
]


class AuditRecordViewSet(viewsets.GenericViewSet):
    """
    Read + retention surface over one domain's audit table.
    Subclasses only pick the domain.
    """
    permission_classes = [IsAuthenticated]
    serializer_class = AuditRecordSerializer
    audit_domain: str = ""

    def get_queryset(self):
        return audit_model_for(self.audit_domain).objects.none()

    def _list(self, request, **filters):
        q = AuditQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        params = {**q.validated_data, **filters}
        qs = list_audit_records(domain=self.audit_domain, **params)
        return paginate(request, qs, AuditRecordSerializer)

    @extend_schema(tags=["Audit"], parameters=AUDIT_FILTER_PARAMS)
    def list(self, request):
        return self._list(request)

    @extend_schema(tags=["Audit"])
    def retrieve(self, request, pk=None):
        try:
            record_id = int(pk)
        except (TypeError, ValueError):
            raise InvalidIdError()

        model = audit_model_for(self.audit_domain)
        try:
            record = model.objects.get(pk=record_id)
        except model.DoesNotExist:
            raise NotFound("Audit record not found.")
        return envelope(AuditRecordSerializer(record).data)

    @extend_schema(tags=["Audit"], parameters=AUDIT_FILTER_PARAMS)
    @action(
        detail=False,
        methods=["get"],
        url_path=r"by-entity/(?P<entity>[^/.]+)/(?P<entity_id>[^/.]+)",
    )
    def by_entity(self, request, entity=None, entity_id=None):
        return self._list(request, entity=entity, entity_id=entity_id)

    @extend_schema(tags=["Audit"], parameters=AUDIT_FILTER_PARAMS)
    @action(detail=False, methods=["get"], url_path=r"by-actor/(?P<actor_id>[^/.]+)")
    def by_actor(self, request, actor_id=None):
        return self._list(request, actor_id=actor_id)

    @extend_schema(tags=["Audit"], responses={200: AuditEntityStatSerializer(many=True)})
    @action(detail=False, methods=["get"])
    def stats(self, request):
        data = AuditEntityStatSerializer(audit_stats(domain=self.audit_domain), many=True).data
        return envelope(data)

    @extend_schema(
        tags=["Audit"],
        parameters=[OpenApiParameter("days", OpenApiTypes.INT, OpenApiParameter.QUERY, description="Delete records older than N days (default 90).")],
    )
    @action(detail=False, methods=["delete"])
    def cleanup(self, request):
        s = AuditCleanupSerializer(data=request.query_params, max_days=CLEANUP_MAX_DAYS[self.audit_domain])
        s.is_valid(raise_exception=True)
        days = s.validated_data["days"]

        deleted = AuditRetentionService.cleanup(domain=self.audit_domain, days=days)
        return envelope(
            {"deleted_count": deleted, "days": days},
            message=f"Deleted {deleted} audit records older than {days} days.",
        )


class UserAuditViewSet(AuditRecordViewSet):
    audit_domain = AuditDomain.USERS


class AgendaAuditViewSet(AuditRecordViewSet):
    audit_domain = AuditDomain.AGENDA


class DiaryAuditViewSet(AuditRecordViewSet):
    audit_domain = AuditDomain.DIARY


class AdministrationAuditViewSet(AuditRecordViewSet):
    audit_domain = AuditDomain.ADMIN
