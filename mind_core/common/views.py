# mind_core/common/views.py
from __future__ import annotations

import logging
import uuid

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.http import JsonResponse
from django.utils.timezone import now
from drf_spectacular.utils import extend_schema
from rest_framework import viewsets
from rest_framework.decorators import api_view, authentication_classes, permission_classes, throttle_classes
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.permissions import AllowAny

from mind_core.audit.mixins import AuditMixin
from mind_core.audit.models import AuditAction
from mind_core.audit.services import snapshot
from mind_core.common.api.errors import DependencyInUse, InvalidIdError
from mind_core.common.api.exceptions import build_error_envelope
from mind_core.common.api.responses import envelope
from mind_core.common.config import get_config

logger = logging.getLogger(__name__)


class StrictLookupMixin:
    """
    Malformed ids are a client error (INVALID_ID), not a 404.
    """

    def get_object(self):
        lookup_url_kwarg = self.lookup_url_kwarg or self.lookup_field
        raw = self.kwargs.get(lookup_url_kwarg)
        model = self.get_queryset().model
        try:
            model._meta.pk.to_python(raw)
        except DjangoValidationError:
            raise InvalidIdError()
        return super().get_object()

    def validated_uuid(self, raw) -> uuid.UUID:
        try:
            return uuid.UUID(str(raw))
        except (TypeError, ValueError):
            raise InvalidIdError()


class AuditedModelViewSet(StrictLookupMixin, AuditMixin, viewsets.ModelViewSet):
    """
    Base CRUD for domain entities:
      - list/retrieve/create/partial_update/destroy, wrapped in the JSON envelope
      - every committed write goes through the audit sink
      - optional delete guards: (reverse accessor, message) pairs that must be empty

    PUT is disabled; updates are partial.
    """

    http_method_names = ["get", "post", "patch", "delete", "head", "options"]
    delete_guards: tuple[tuple[str, str], ...] = ()
    read_serializer_class = None

    def present(self, instance, *, many: bool = False):
        cls = self.read_serializer_class or self.get_serializer_class()
        return cls(instance, many=many, context=self.get_serializer_context()).data

    # ----------------------------
    # Reads
    # ----------------------------
    def list(self, request, *args, **kwargs):
        qs = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(self.present(page, many=True))
        return envelope(self.present(qs, many=True))

    def retrieve(self, request, *args, **kwargs):
        return envelope(self.present(self.get_object()))

    # ----------------------------
    # Writes
    # ----------------------------
    def create(self, request, *args, **kwargs):
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)
        instance = self.perform_create(ser)
        return envelope(
            self.present(instance),
            message=f"{self.audit_entity} created",
            status=201,
        )

    def partial_update(self, request, *args, **kwargs):
        instance = self.get_object()
        if not request.data:
            raise DRFValidationError({"detail": "At least one field is required."})
        ser = self.get_serializer(instance, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        instance = self.perform_update(ser)
        return envelope(self.present(instance), message=f"{self.audit_entity} updated")

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        self.perform_destroy(instance)
        return envelope(message=f"{self.audit_entity} deleted")

    def perform_create(self, serializer):
        with transaction.atomic():
            instance = serializer.save()
        self.audit(AuditAction.CREATE, instance, after=snapshot(instance))
        return instance

    def perform_update(self, serializer):
        before = snapshot(serializer.instance)
        with transaction.atomic():
            instance = serializer.save()
        self.audit(AuditAction.UPDATE, instance, before=before, after=snapshot(instance))
        return instance

    def perform_destroy(self, instance):
        self.check_delete_guards(instance)
        before = snapshot(instance)
        pk = instance.pk
        with transaction.atomic():
            instance.delete()
        self.audit(AuditAction.DELETE, entity_id=pk, before=before)

    def check_delete_guards(self, instance) -> None:
        for accessor, message in self.delete_guards:
            # reverse one-to-one accessors raise AttributeError when unset
            related = getattr(instance, accessor, None)
            if related is None:
                continue
            if not hasattr(related, "exists") or related.exists():
                raise DependencyInUse(message)


@extend_schema(tags=["Health"], auth=[])
@api_view(["GET"])
@authentication_classes([])
@permission_classes([AllowAny])
@throttle_classes([])
def health(request):
    cfg = get_config()
    return envelope(
        message=f"{cfg.service_name} is running",
        timestamp=now().isoformat(),
        service=cfg.service_name,
    )


def not_found(request, exception=None):
    return JsonResponse(
        build_error_envelope(request=request, code="NOT_FOUND", message=f"Route {request.path} not found."),
        status=404,
    )


def server_error(request):
    logger.error("Unhandled server error on %s", request.path)
    return JsonResponse(
        build_error_envelope(request=request, code="INTERNAL_ERROR", message="Unexpected server error."),
        status=500,
    )
