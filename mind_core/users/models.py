# mind_core/users/models.py
from __future__ import annotations

from django.core.validators import RegexValidator
from django.db import models

from mind_core.common.models import LookupModel, UUIDModel

phone_validator = RegexValidator(
    regex=r"^\+?[1-9]\d{1,14}$",
    message="Phone number must be in international format (e.g. +573001234567).",
)


class DocumentType(models.TextChoices):
    CC = "CC", "Cédula de ciudadanía"
    TI = "TI", "Tarjeta de identidad"
    CE = "CE", "Cédula de extranjería"
    PP = "PP", "Pasaporte"
    RC = "RC", "Registro civil"


class Person(UUIDModel):
    """
    Identity anchor for exactly one User. Created at registration.
    """
    first_names = models.CharField(max_length=100)
    last_names = models.CharField(max_length=100)
    document_type = models.CharField(max_length=2, choices=DocumentType.choices, default=DocumentType.CC)
    document_number = models.CharField(max_length=20)
    birth_date = models.DateField()

    country = models.ForeignKey(
        "administrative.Country", on_delete=models.SET_NULL, null=True, blank=True, related_name="persons"
    )
    department = models.ForeignKey(
        "administrative.Department", on_delete=models.SET_NULL, null=True, blank=True, related_name="persons"
    )
    city = models.ForeignKey(
        "administrative.City", on_delete=models.SET_NULL, null=True, blank=True, related_name="persons"
    )

    class Meta:
        db_table = "users_person"
        constraints = [
            models.UniqueConstraint(fields=["document_type", "document_number"], name="uq_person_document"),
        ]
        indexes = [
            models.Index(fields=["last_names", "first_names"]),
        ]

    def __str__(self) -> str:
        return f"{self.first_names} {self.last_names} ({self.document_type} {self.document_number})"


class UserType(LookupModel):
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "users_user_type"


class AccountStatus(models.TextChoices):
    """
    Derived lifecycle state; values are the codes of the matching Status rows.
    """
    INACTIVE = "0002", "Inactivo"
    ACTIVE = "0003", "Activo"
    PENDING_VERIFICATION = "0004", "Pendiente de Verificación"
    LOCKED = "0005", "Bloqueado"


class User(UUIDModel):
    """
    Application account. Lifecycle flags (is_active, is_locked, email_verified)
    are the source of truth; `status` always mirrors `account_status` and is
    kept in sync by save().
    """
    person = models.OneToOneField(Person, on_delete=models.PROTECT, related_name="user")
    user_type = models.ForeignKey(UserType, on_delete=models.PROTECT, related_name="users")
    status = models.ForeignKey(
        "administrative.Status", on_delete=models.PROTECT, null=True, blank=True, related_name="users"
    )

    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=16, blank=True, default="", validators=[phone_validator])
    password_hash = models.CharField(max_length=128)

    is_active = models.BooleanField(default=True, db_index=True)
    is_locked = models.BooleanField(default=False, db_index=True)
    failed_attempts = models.PositiveSmallIntegerField(default=0)
    locked_at = models.DateTimeField(null=True, blank=True)
    last_access_at = models.DateTimeField(null=True, blank=True)

    email_verified = models.BooleanField(default=False)
    verification_code = models.CharField(max_length=6, blank=True, default="")
    verification_code_expires_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "users_user"
        indexes = [
            models.Index(fields=["is_active", "is_locked"]),
        ]

    def __str__(self) -> str:
        return self.email

    # DRF treats any object with is_authenticated as a principal
    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def is_anonymous(self) -> bool:
        return False

    @property
    def account_status(self) -> AccountStatus:
        if self.is_locked:
            return AccountStatus.LOCKED
        if not self.is_active:
            return AccountStatus.INACTIVE
        if not self.email_verified:
            return AccountStatus.PENDING_VERIFICATION
        return AccountStatus.ACTIVE

    def save(self, *args, **kwargs):
        self.email = (self.email or "").strip().lower()
        self._sync_status(kwargs)
        return super().save(*args, **kwargs)

    def _sync_status(self, save_kwargs: dict) -> None:
        from mind_core.users.lifecycle import status_row

        wanted = self.account_status
        if self.status_id is not None and self.status.code == wanted:
            return

        self.status = status_row(wanted)
        update_fields = save_kwargs.get("update_fields")
        if update_fields is not None:
            save_kwargs["update_fields"] = {*update_fields, "status"}


class PaymentProvider(models.TextChoices):
    STRIPE = "stripe", "Stripe"
    PAYPAL = "paypal", "PayPal"
    MERCADOPAGO = "mercadopago", "Mercado Pago"
    WOMPI = "wompi", "Wompi"
    PAYU = "payu", "PayU"


class PaymentMethod(models.TextChoices):
    CARD = "card", "Card"
    BANK_TRANSFER = "bank_transfer", "Bank transfer"
    DIGITAL_WALLET = "digital_wallet", "Digital wallet"


class PaymentInfo(UUIDModel):
    """
    Payment-provider reference for a user (one per user). No provider calls.
    """
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="payment_info")
    provider = models.CharField(max_length=20, choices=PaymentProvider.choices)
    customer_id = models.CharField(max_length=120, blank=True, default="")
    payment_method = models.CharField(max_length=20, choices=PaymentMethod.choices, default=PaymentMethod.CARD)
    last_transaction_at = models.DateTimeField(null=True, blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "users_payment_info"

    def __str__(self) -> str:
        return f"{self.user_id} via {self.provider}"


class SubscriptionStatus(models.TextChoices):
    ACTIVE = "active", "Active"
    PAUSED = "paused", "Paused"
    CANCELLED = "cancelled", "Cancelled"
    EXPIRED = "expired", "Expired"


class UserSubscription(UUIDModel):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="subscriptions")
    plan = models.ForeignKey(
        "administrative.SubscriptionPlan", on_delete=models.PROTECT, related_name="user_subscriptions"
    )
    starts_at = models.DateTimeField()
    ends_at = models.DateTimeField(null=True, blank=True)
    status = models.CharField(
        max_length=16,
        choices=SubscriptionStatus.choices,
        default=SubscriptionStatus.ACTIVE,
        db_index=True,
    )
    auto_renew = models.BooleanField(default=True)

    class Meta:
        db_table = "users_user_subscription"
        indexes = [
            models.Index(fields=["user", "status"]),
            models.Index(fields=["status", "ends_at"]),
        ]

    def __str__(self) -> str:
        return f"{self.user_id} -> {self.plan_id} ({self.status})"
