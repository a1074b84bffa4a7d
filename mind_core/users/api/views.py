# mind_core/users/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import serializers
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound

from mind_core.audit.models import AuditAction, AuditDomain
from mind_core.common.api.pagination import paginate
from mind_core.common.api.responses import envelope
from mind_core.common.views import AuditedModelViewSet
from mind_core.users.api.serializers import (
    PaymentInfoSerializer,
    PersonSerializer,
    SubscriptionStatsSerializer,
    UserSerializer,
    UserStatsSerializer,
    UserSubscriptionSerializer,
    UserTypeSerializer,
    UserUpdateSerializer,
)
from mind_core.users.filters import PersonFilter, SubscriptionFilter, UserFilter
from mind_core.users.models import PaymentInfo, SubscriptionStatus, UserType
from mind_core.users.selectors import (
    active_subscription_for,
    expiring_subscriptions,
    list_persons,
    list_subscriptions,
    list_users,
    subscription_stats,
    user_stats,
)
from mind_core.users.services import PaymentInfoService, SubscriptionService, UserService


class UsersDomainViewSet(AuditedModelViewSet):
    audit_domain = AuditDomain.USERS


class ExpiringQuerySerializer(serializers.Serializer):
    days = serializers.IntegerField(required=False, default=7, min_value=1, max_value=365)


# -------------------------------------------------------------------
# Accounts
# -------------------------------------------------------------------

@extend_schema(tags=["Users"])
class UserViewSet(UsersDomainViewSet):
    """
    Accounts are created through /auth/register/ only; delete is a soft
    deactivation.
    """
    http_method_names = ["get", "patch", "delete", "head", "options"]
    serializer_class = UserSerializer
    read_serializer_class = UserSerializer
    filterset_class = UserFilter
    audit_entity = "User"

    def get_queryset(self):
        return list_users()

    def get_serializer_class(self):
        if self.action == "partial_update":
            return UserUpdateSerializer
        return UserSerializer

    @extend_schema(request=UserUpdateSerializer, responses={200: UserSerializer})
    def partial_update(self, request, *args, **kwargs):
        user = self.get_object()
        ser = UserUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        user = self.audited(
            AuditAction.UPDATE,
            user,
            lambda: UserService.update_account(user=user, data=ser.validated_data),
        )
        return envelope(self.present(user), message="User updated")

    def perform_destroy(self, instance):
        self.audited(AuditAction.DELETE, instance, lambda: UserService.deactivate(user=instance))

    def destroy(self, request, *args, **kwargs):
        self.perform_destroy(self.get_object())
        return envelope(message="User deactivated")

    @action(detail=True, methods=["patch"], url_path="toggle-active")
    def toggle_active(self, request, pk=None):
        user = self.get_object()
        user = self.audited(AuditAction.UPDATE, user, lambda: UserService.toggle_active(user=user))
        state = "activated" if user.is_active else "deactivated"
        return envelope(self.present(user), message=f"User {state}")

    @action(detail=True, methods=["patch"])
    def unblock(self, request, pk=None):
        user = self.get_object()
        user = self.audited(AuditAction.UPDATE, user, lambda: UserService.unblock(user=user))
        return envelope(self.present(user), message="User unblocked")

    @extend_schema(responses={200: UserStatsSerializer})
    @action(detail=False, methods=["get"])
    def stats(self, request):
        return envelope(UserStatsSerializer(user_stats()).data)


# -------------------------------------------------------------------
# Persons / user types
# -------------------------------------------------------------------

@extend_schema(tags=["Users: Persons"])
class PersonViewSet(UsersDomainViewSet):
    serializer_class = PersonSerializer
    filterset_class = PersonFilter
    audit_entity = "Person"
    delete_guards = (("user", "The person is linked to a user account."),)

    def get_queryset(self):
        return list_persons()


@extend_schema(tags=["Users: Types"])
class UserTypeViewSet(UsersDomainViewSet):
    queryset = UserType.objects.all().order_by("code")
    serializer_class = UserTypeSerializer
    audit_entity = "UserType"
    filterset_fields = ["is_active"]
    delete_guards = (("users", "The user type is assigned to users."),)


# -------------------------------------------------------------------
# Payment info
# -------------------------------------------------------------------

@extend_schema(tags=["Users: Payment info"])
class PaymentInfoViewSet(UsersDomainViewSet):
    queryset = PaymentInfo.objects.select_related("user").order_by("-created_at")
    serializer_class = PaymentInfoSerializer
    audit_entity = "PaymentInfo"
    filterset_fields = ["user", "provider", "payment_method", "is_active"]

    def perform_create(self, serializer):
        PaymentInfoService.ensure_available(user=serializer.validated_data["user"])
        return super().perform_create(serializer)

    @action(detail=False, methods=["get"], url_path=r"by-user/(?P<user_id>[^/.]+)")
    def by_user(self, request, user_id=None):
        info = self.get_queryset().filter(user_id=self.validated_uuid(user_id)).first()
        if info is None:
            raise NotFound("Payment information not found.")
        return envelope(self.present(info))


# -------------------------------------------------------------------
# Subscriptions
# -------------------------------------------------------------------

@extend_schema(tags=["Users: Subscriptions"])
class UserSubscriptionViewSet(UsersDomainViewSet):
    serializer_class = UserSubscriptionSerializer
    filterset_class = SubscriptionFilter
    audit_entity = "UserSubscription"

    def get_queryset(self):
        return list_subscriptions()

    def perform_create(self, serializer):
        if serializer.validated_data.get("status", SubscriptionStatus.ACTIVE) == SubscriptionStatus.ACTIVE:
            SubscriptionService.ensure_no_active(user=serializer.validated_data["user"])
        return super().perform_create(serializer)

    def perform_update(self, serializer):
        instance = serializer.instance
        activating = serializer.validated_data.get("status") == SubscriptionStatus.ACTIVE
        if activating and instance.status != SubscriptionStatus.ACTIVE:
            SubscriptionService.ensure_no_active(
                user=serializer.validated_data.get("user", instance.user),
                exclude_id=instance.pk,
            )
        return super().perform_update(serializer)

    @action(detail=True, methods=["patch"])
    def cancel(self, request, pk=None):
        sub = self.get_object()
        sub = self.audited(AuditAction.UPDATE, sub, lambda: SubscriptionService.cancel(subscription=sub))
        return envelope(self.present(sub), message="Subscription cancelled")

    @action(detail=True, methods=["patch"])
    def reactivate(self, request, pk=None):
        sub = self.get_object()
        sub = self.audited(AuditAction.UPDATE, sub, lambda: SubscriptionService.reactivate(subscription=sub))
        return envelope(self.present(sub), message="Subscription reactivated")

    @action(detail=False, methods=["get"], url_path=r"active/(?P<user_id>[^/.]+)")
    def active(self, request, user_id=None):
        sub = active_subscription_for(user_id=self.validated_uuid(user_id))
        if sub is None:
            raise NotFound("The user has no active subscription.")
        return envelope(self.present(sub))

    @extend_schema(parameters=[OpenApiParameter("days", OpenApiTypes.INT, OpenApiParameter.QUERY)])
    @action(detail=False, methods=["get"])
    def expiring(self, request):
        q = ExpiringQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        return paginate(request, expiring_subscriptions(days=q.validated_data["days"]), UserSubscriptionSerializer)

    @extend_schema(responses={200: SubscriptionStatsSerializer})
    @action(detail=False, methods=["get"])
    def stats(self, request):
        return envelope(SubscriptionStatsSerializer(subscription_stats()).data)
