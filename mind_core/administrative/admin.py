# mind_core/administrative/admin.py
from django.contrib import admin

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


@admin.register(Status)
class StatusAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "module", "color", "visible")
    list_filter = ("module", "visible")
    search_fields = ("code", "name")


@admin.register(Country)
class CountryAdmin(admin.ModelAdmin):
    list_display = ("name", "iso_code")
    search_fields = ("name", "iso_code")


@admin.register(Department)
class DepartmentAdmin(admin.ModelAdmin):
    list_display = ("name", "dane_code", "country")
    list_filter = ("country",)
    search_fields = ("name", "dane_code")


@admin.register(City)
class CityAdmin(admin.ModelAdmin):
    list_display = ("name", "dane_code", "department")
    search_fields = ("name", "dane_code")


@admin.register(Access)
class AccessAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "scope")
    list_filter = ("scope",)


@admin.register(UserAccess)
class UserAccessAdmin(admin.ModelAdmin):
    list_display = ("user", "access", "assigned_at", "is_active")
    list_filter = ("is_active",)


@admin.register(SystemImage)
class SystemImageAdmin(admin.ModelAdmin):
    list_display = ("name", "kind", "url", "is_active")
    list_filter = ("kind", "is_active")


@admin.register(Menu)
class MenuAdmin(admin.ModelAdmin):
    list_display = ("name", "route", "parent", "level", "order", "is_active")
    list_filter = ("level", "is_active")
    ordering = ("level", "order")


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("title", "user", "notification_type", "scheduled_at", "sent", "sent_at")
    list_filter = ("sent", "notification_type")
    readonly_fields = ("sent_at",)


@admin.register(SubscriptionPlan)
class SubscriptionPlanAdmin(admin.ModelAdmin):
    list_display = ("name", "subscription_type", "price", "periodicity", "is_active")
    list_filter = ("periodicity", "is_active")


@admin.register(Variable)
class VariableAdmin(admin.ModelAdmin):
    list_display = ("key", "environment", "variable_type")
    list_filter = ("environment", "variable_type")
    search_fields = ("key",)


for model in (NotificationType, SubscriptionType, VariableType):
    admin.site.register(model)
