# mind_core/administrative/models.py
from __future__ import annotations

from django.core.validators import MinValueValidator
from django.db import models

from mind_core.common.models import LookupModel, UUIDModel


class Status(UUIDModel):
    """
    Display status shared by every module (account states use codes 0002-0005).
    """
    DEFAULT_COLOR = "#6AB9D2"
    DEFAULT_MODULE = "TODOS"

    code = models.CharField(max_length=10, unique=True)
    name = models.CharField(max_length=120)
    color = models.CharField(max_length=7, blank=True, default=DEFAULT_COLOR)
    symbol = models.CharField(max_length=5, blank=True, default="")
    description = models.CharField(max_length=500, blank=True, default="")
    visible = models.BooleanField(default=True)
    module = models.CharField(max_length=40, blank=True, default=DEFAULT_MODULE, db_index=True)

    class Meta:
        db_table = "admin_status"
        ordering = ["code"]

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"


# -------------------------------------------------------------------
# Geography
# -------------------------------------------------------------------

class Country(UUIDModel):
    name = models.CharField(max_length=120)
    iso_code = models.CharField(max_length=3, unique=True)

    class Meta:
        db_table = "admin_country"
        ordering = ["name"]

    def save(self, *args, **kwargs):
        self.iso_code = (self.iso_code or "").strip().upper()
        return super().save(*args, **kwargs)

    def __str__(self) -> str:
        return self.name


class Department(UUIDModel):
    country = models.ForeignKey(Country, on_delete=models.PROTECT, related_name="departments")
    name = models.CharField(max_length=120)
    dane_code = models.CharField(max_length=10, unique=True)

    class Meta:
        db_table = "admin_department"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class City(UUIDModel):
    department = models.ForeignKey(Department, on_delete=models.PROTECT, related_name="cities")
    name = models.CharField(max_length=120)
    dane_code = models.CharField(max_length=10, unique=True)

    class Meta:
        db_table = "admin_city"
        ordering = ["name"]
        verbose_name_plural = "cities"

    def __str__(self) -> str:
        return self.name


# -------------------------------------------------------------------
# Access control
# -------------------------------------------------------------------

class AccessScope(models.TextChoices):
    READ = "READ", "Read"
    WRITE = "WRITE", "Write"
    DELETE = "DELETE", "Delete"
    ADMIN = "ADMIN", "Admin"


class Access(UUIDModel):
    code = models.CharField(max_length=32, unique=True)
    name = models.CharField(max_length=120)
    scope = models.CharField(max_length=8, choices=AccessScope.choices, default=AccessScope.READ)

    class Meta:
        db_table = "admin_access"
        ordering = ["code"]

    def __str__(self) -> str:
        return f"{self.code} [{self.scope}]"


class UserAccess(UUIDModel):
    user = models.ForeignKey("users.User", on_delete=models.CASCADE, related_name="accesses")
    access = models.ForeignKey(Access, on_delete=models.PROTECT, related_name="user_accesses")
    assigned_at = models.DateTimeField(auto_now_add=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "admin_user_access"
        constraints = [
            models.UniqueConstraint(fields=["user", "access"], name="uq_user_access"),
        ]


# -------------------------------------------------------------------
# Media & navigation
# -------------------------------------------------------------------

class ImageKind(models.TextChoices):
    LOGO = "logo", "Logo"
    BANNER = "banner", "Banner"
    ICON = "icon", "Icon"
    BACKGROUND = "background", "Background"
    EMOTION = "emotion", "Emotion"
    OTHER = "other", "Other"


class SystemImage(UUIDModel):
    kind = models.CharField(max_length=16, choices=ImageKind.choices, default=ImageKind.OTHER, db_index=True)
    name = models.CharField(max_length=120)
    url = models.URLField(max_length=500)
    hash = models.CharField(max_length=128, blank=True, default="")
    metadata = models.JSONField(default=dict, blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "admin_system_image"
        ordering = ["kind", "name"]


class Menu(UUIDModel):
    name = models.CharField(max_length=120)
    route = models.CharField(max_length=255, blank=True, default="")
    icon = models.CharField(max_length=80, blank=True, default="")
    order = models.PositiveIntegerField(default=0)
    parent = models.ForeignKey(
        "self", on_delete=models.PROTECT, null=True, blank=True, related_name="children"
    )
    is_active = models.BooleanField(default=True)
    level = models.PositiveSmallIntegerField(default=1)

    class Meta:
        db_table = "admin_menu"
        ordering = ["level", "order", "name"]

    def __str__(self) -> str:
        return self.name


# -------------------------------------------------------------------
# Notifications
# -------------------------------------------------------------------

class NotificationType(LookupModel):
    class Meta:
        db_table = "admin_notification_type"


class Notification(UUIDModel):
    notification_type = models.ForeignKey(
        NotificationType, on_delete=models.PROTECT, related_name="notifications"
    )
    user = models.ForeignKey("users.User", on_delete=models.CASCADE, related_name="notifications")
    title = models.CharField(max_length=200)
    message = models.TextField()
    scheduled_at = models.DateTimeField(db_index=True)
    sent = models.BooleanField(default=False, db_index=True)
    sent_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "admin_notification"
        ordering = ["-scheduled_at"]
        indexes = [
            models.Index(fields=["sent", "scheduled_at"]),
        ]


# -------------------------------------------------------------------
# Subscription plans
# -------------------------------------------------------------------

class SubscriptionType(LookupModel):
    class Meta:
        db_table = "admin_subscription_type"


class Periodicity(models.TextChoices):
    MONTHLY = "monthly", "Monthly"
    QUARTERLY = "quarterly", "Quarterly"
    SEMIANNUAL = "semiannual", "Semiannual"
    ANNUAL = "annual", "Annual"


class SubscriptionPlan(UUIDModel):
    subscription_type = models.ForeignKey(SubscriptionType, on_delete=models.PROTECT, related_name="plans")
    name = models.CharField(max_length=120)
    price = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(0)])
    periodicity = models.CharField(max_length=12, choices=Periodicity.choices, default=Periodicity.MONTHLY)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "admin_subscription_plan"
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(condition=models.Q(price__gte=0), name="ck_plan_price_non_negative"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.periodicity})"


# -------------------------------------------------------------------
# Runtime variables
# -------------------------------------------------------------------

class VariableType(LookupModel):
    class Meta:
        db_table = "admin_variable_type"


class Environment(models.TextChoices):
    DEVELOPMENT = "development", "Development"
    STAGING = "staging", "Staging"
    PRODUCTION = "production", "Production"


class Variable(UUIDModel):
    variable_type = models.ForeignKey(VariableType, on_delete=models.PROTECT, related_name="variables")
    key = models.CharField(max_length=120)
    value = models.JSONField()
    environment = models.CharField(max_length=12, choices=Environment.choices, default=Environment.DEVELOPMENT)
    description = models.CharField(max_length=500, blank=True, default="")

    class Meta:
        db_table = "admin_variable"
        ordering = ["key", "environment"]
        constraints = [
            models.UniqueConstraint(fields=["key", "environment"], name="uq_variable_key_environment"),
        ]

    def __str__(self) -> str:
        return f"{self.key}@{self.environment}"
