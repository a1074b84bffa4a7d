# mind_core/administrative/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework.decorators import action

from mind_core.administrative.api.serializers import (
    AccessSerializer,
    CitySerializer,
    CountrySerializer,
    DepartmentSerializer,
    MenuNodeSerializer,
    MenuSerializer,
    NotificationSerializer,
    NotificationTypeSerializer,
    StatusSerializer,
    SubscriptionPlanSerializer,
    SubscriptionTypeSerializer,
    SystemImageSerializer,
    UserAccessSerializer,
    VariableSerializer,
    VariableTypeSerializer,
)
from mind_core.administrative.filters import NotificationFilter
from mind_core.administrative.models import (
    Access,
    City,
    Country,
    Department,
    Menu,
    Notification,
    NotificationType,
    Status,
    SubscriptionPlan,
    SubscriptionType,
    SystemImage,
    UserAccess,
    Variable,
    VariableType,
)
from mind_core.administrative.selectors import menu_tree, notifications_for_user, pending_notifications
from mind_core.administrative.services import NotificationService, SubscriptionPlanService
from mind_core.audit.models import AuditAction, AuditDomain
from mind_core.common.api.pagination import paginate
from mind_core.common.api.responses import envelope
from mind_core.common.views import AuditedModelViewSet


class AdministrationViewSet(AuditedModelViewSet):
    audit_domain = AuditDomain.ADMIN


# -------------------------------------------------------------------
# Reference data
# -------------------------------------------------------------------

@extend_schema(tags=["Admin: Statuses"])
class StatusViewSet(AdministrationViewSet):
    queryset = Status.objects.all().order_by("code")
    serializer_class = StatusSerializer
    audit_entity = "Status"
    filterset_fields = ["module", "visible"]
    delete_guards = (("users", "The status is assigned to users."),)


@extend_schema(tags=["Admin: Geography"])
class CountryViewSet(AdministrationViewSet):
    queryset = Country.objects.all().order_by("name")
    serializer_class = CountrySerializer
    audit_entity = "Country"
    filterset_fields = ["iso_code"]
    delete_guards = (("departments", "The country has departments."),)


@extend_schema(tags=["Admin: Geography"])
class DepartmentViewSet(AdministrationViewSet):
    queryset = Department.objects.select_related("country").order_by("name")
    serializer_class = DepartmentSerializer
    audit_entity = "Department"
    filterset_fields = ["country", "dane_code"]
    delete_guards = (("cities", "The department has cities."),)


@extend_schema(tags=["Admin: Geography"])
class CityViewSet(AdministrationViewSet):
    queryset = City.objects.select_related("department").order_by("name")
    serializer_class = CitySerializer
    audit_entity = "City"
    filterset_fields = ["department", "dane_code"]


# -------------------------------------------------------------------
# Access control
# -------------------------------------------------------------------

@extend_schema(tags=["Admin: Access"])
class AccessViewSet(AdministrationViewSet):
    queryset = Access.objects.all().order_by("code")
    serializer_class = AccessSerializer
    audit_entity = "Access"
    filterset_fields = ["scope"]
    delete_guards = (("user_accesses", "The access is assigned to users."),)


@extend_schema(tags=["Admin: Access"])
class UserAccessViewSet(AdministrationViewSet):
    queryset = UserAccess.objects.select_related("user", "access").order_by("-assigned_at")
    serializer_class = UserAccessSerializer
    audit_entity = "UserAccess"
    filterset_fields = ["user", "access", "is_active"]


# -------------------------------------------------------------------
# Variables
# -------------------------------------------------------------------

@extend_schema(tags=["Admin: Variables"])
class VariableTypeViewSet(AdministrationViewSet):
    queryset = VariableType.objects.all().order_by("code")
    serializer_class = VariableTypeSerializer
    audit_entity = "VariableType"
    delete_guards = (("variables", "The variable type has variables."),)


@extend_schema(tags=["Admin: Variables"])
class VariableViewSet(AdministrationViewSet):
    queryset = Variable.objects.select_related("variable_type").order_by("key", "environment")
    serializer_class = VariableSerializer
    audit_entity = "Variable"
    filterset_fields = ["variable_type", "environment", "key"]


# -------------------------------------------------------------------
# Subscription plans
# -------------------------------------------------------------------

@extend_schema(tags=["Admin: Subscriptions"])
class SubscriptionTypeViewSet(AdministrationViewSet):
    queryset = SubscriptionType.objects.all().order_by("code")
    serializer_class = SubscriptionTypeSerializer
    audit_entity = "SubscriptionType"
    delete_guards = (("plans", "The subscription type has plans."),)


@extend_schema(tags=["Admin: Subscriptions"])
class SubscriptionPlanViewSet(AdministrationViewSet):
    queryset = SubscriptionPlan.objects.select_related("subscription_type").order_by("name")
    serializer_class = SubscriptionPlanSerializer
    audit_entity = "SubscriptionPlan"
    filterset_fields = ["subscription_type", "periodicity", "is_active"]
    delete_guards = (("user_subscriptions", "The plan has user subscriptions."),)

    @action(detail=True, methods=["patch"], url_path="toggle-active")
    def toggle_active(self, request, pk=None):
        plan = self.get_object()
        plan = self.audited(
            AuditAction.UPDATE,
            plan,
            lambda: SubscriptionPlanService.toggle_active(plan=plan),
        )
        state = "activated" if plan.is_active else "deactivated"
        return envelope(self.present(plan), message=f"Plan {state}")


# -------------------------------------------------------------------
# Navigation & media
# -------------------------------------------------------------------

@extend_schema(tags=["Admin: Menus"])
class MenuViewSet(AdministrationViewSet):
    queryset = Menu.objects.select_related("parent").order_by("level", "order", "name")
    serializer_class = MenuSerializer
    audit_entity = "Menu"
    filterset_fields = ["parent", "level", "is_active"]
    delete_guards = (("children", "The menu has child menus."),)

    @extend_schema(responses={200: MenuNodeSerializer(many=True)})
    @action(detail=False, methods=["get"])
    def tree(self, request):
        return envelope(menu_tree())


@extend_schema(tags=["Admin: Images"])
class SystemImageViewSet(AdministrationViewSet):
    queryset = SystemImage.objects.all().order_by("kind", "name")
    serializer_class = SystemImageSerializer
    audit_entity = "SystemImage"
    filterset_fields = ["kind", "is_active"]


# -------------------------------------------------------------------
# Notifications
# -------------------------------------------------------------------

@extend_schema(tags=["Admin: Notifications"])
class NotificationTypeViewSet(AdministrationViewSet):
    queryset = NotificationType.objects.all().order_by("code")
    serializer_class = NotificationTypeSerializer
    audit_entity = "NotificationType"
    delete_guards = (("notifications", "The notification type has notifications."),)


@extend_schema(tags=["Admin: Notifications"])
class NotificationViewSet(AdministrationViewSet):
    queryset = Notification.objects.select_related("notification_type", "user").order_by("-scheduled_at")
    serializer_class = NotificationSerializer
    audit_entity = "Notification"
    filterset_class = NotificationFilter

    def check_delete_guards(self, instance) -> None:
        NotificationService.ensure_deletable(notification=instance)
        super().check_delete_guards(instance)

    @action(detail=True, methods=["patch"], url_path="mark-sent")
    def mark_sent(self, request, pk=None):
        notification = self.get_object()
        notification = self.audited(
            AuditAction.UPDATE,
            notification,
            lambda: NotificationService.mark_sent(notification=notification),
        )
        return envelope(self.present(notification), message="Notification marked as sent")

    @action(detail=False, methods=["get"])
    def pending(self, request):
        return paginate(request, pending_notifications(), NotificationSerializer)

    @action(detail=False, methods=["get"], url_path=r"by-user/(?P<user_id>[^/.]+)")
    def by_user(self, request, user_id=None):
        return paginate(request, notifications_for_user(user_id=self.validated_uuid(user_id)), NotificationSerializer)
