# mind_core/users/services.py
from __future__ import annotations

import hmac
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError as DRFValidationError

from mind_core.common.api.errors import ConflictError, InvalidStateError
from mind_core.common.config import MindConfig, get_config
from mind_core.users.exceptions import (
    AccountInactive,
    AccountLocked,
    DuplicateDocument,
    DuplicateEmail,
    IncorrectPassword,
    InvalidCredentials,
    VerificationCodeExpired,
    VerificationCodeMismatch,
    VerificationCodeMissing,
)
from mind_core.users.lifecycle import default_user_type
from mind_core.users.mailer import send_verification_email
from mind_core.users.models import (
    AccountStatus,
    PaymentInfo,
    Person,
    SubscriptionStatus,
    User,
    UserSubscription,
)
from mind_core.users.passwords import MIN_PASSWORD_LENGTH, hash_password, max_password_bytes, verify_password
from mind_core.users.tokens import issue_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    user: User
    token: str


@dataclass(frozen=True)
class VerificationTicket:
    user: User
    code: str
    expires_at: datetime


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def generate_verification_code() -> str:
    return f"{secrets.randbelow(1_000_000):06d}"


def _error_codes(exc: DjangoValidationError, field: str) -> list:
    errors = getattr(exc, "error_dict", {}).get(field, [])
    return [e.code for e in errors]


def _check_password_length(password: str, field: str = "password", *, config: MindConfig | None = None) -> None:
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise DRFValidationError({field: [f"Password must be at least {MIN_PASSWORD_LENGTH} characters."]})
    limit = max_password_bytes(config=config)
    if len(password.encode("utf-8")) > limit:
        raise DRFValidationError({field: [f"Password must be at most {limit} bytes."]})


def _email_taken(email: str, *, exclude_id=None) -> bool:
    qs = User.objects.filter(email=email)
    if exclude_id is not None:
        qs = qs.exclude(pk=exclude_id)
    return qs.exists()


class AuthService:
    """
    Registration, login/lockout, password change and email verification.
    Audit is written by the calling views after each step commits.
    """

    # ----------------------------
    # Registration
    # ----------------------------
    @staticmethod
    def register(*, person: Dict[str, Any], user: Dict[str, Any], config: MindConfig | None = None) -> AuthResult:
        """
        Person first, then User. There is no transaction spanning both: if the
        User step fails the Person is deleted again, and a failure of that
        cleanup is logged so the original error still reaches the client.
        """
        cfg = config or get_config()
        email = normalize_email(user.get("email"))

        if email and _email_taken(email):
            raise DuplicateEmail()
        if Person.objects.filter(
            document_type=person.get("document_type"),
            document_number=person.get("document_number"),
        ).exists():
            raise DuplicateDocument()

        with transaction.atomic():
            new_person = Person.objects.create(**person)

        try:
            new_user = AuthService._create_user(person=new_person, data={**user, "email": email}, config=cfg)
        except Exception:
            AuthService._discard_person(new_person)
            raise

        return AuthResult(user=new_user, token=issue_token(new_user, config=cfg))

    @staticmethod
    @transaction.atomic
    def _create_user(*, person: Person, data: Dict[str, Any], config: MindConfig) -> User:
        password = data.get("password") or ""
        _check_password_length(password, config=config)

        user = User(
            person=person,
            user_type=default_user_type(config=config),
            email=data["email"],
            phone=data.get("phone") or "",
            password_hash=hash_password(password, config=config),
            is_active=True,
            email_verified=False,
        )
        # the model validators (email format, phone pattern, uniqueness) run here,
        # after the Person already exists
        try:
            user.full_clean(exclude=["status"])
        except DjangoValidationError as exc:
            # a concurrent registration can take the email after the pre-check
            if "unique" in _error_codes(exc, "email"):
                raise DuplicateEmail()
            raise
        user.save()
        return user

    @staticmethod
    def _discard_person(person: Person) -> None:
        try:
            Person.objects.filter(pk=person.pk).delete()
        except Exception:
            logger.exception("Could not remove person %s after failed registration", person.pk)

    # ----------------------------
    # Login
    # ----------------------------
    @staticmethod
    def login(*, email: str, password: str, config: MindConfig | None = None) -> AuthResult:
        cfg = config or get_config()
        user = (
            User.objects.select_related("person", "user_type", "status")
            .filter(email=normalize_email(email))
            .first()
        )

        if user is None:
            raise InvalidCredentials()
        if not user.is_active:
            raise AccountInactive()
        if user.is_locked:
            raise AccountLocked()

        if not verify_password(password, user.password_hash, config=cfg):
            # committed on its own so the counter survives the failed request
            AuthService._record_failed_attempt(user_id=user.pk, config=cfg)
            raise InvalidCredentials()

        with transaction.atomic():
            user.failed_attempts = 0
            user.last_access_at = timezone.now()
            user.save(update_fields=["failed_attempts", "last_access_at", "updated_at"])

        return AuthResult(user=user, token=issue_token(user, config=cfg))

    @staticmethod
    @transaction.atomic
    def _record_failed_attempt(*, user_id, config: MindConfig) -> User:
        user = User.objects.select_for_update().get(pk=user_id)
        user.failed_attempts += 1
        fields = ["failed_attempts", "updated_at"]

        if user.failed_attempts >= config.max_failed_attempts and not user.is_locked:
            user.is_locked = True
            user.locked_at = timezone.now()
            fields += ["is_locked", "locked_at"]
            logger.warning("Account %s locked after %s failed logins", user.pk, user.failed_attempts)

        user.save(update_fields=fields)
        return user

    # ----------------------------
    # Password
    # ----------------------------
    @staticmethod
    @transaction.atomic
    def change_password(
        *,
        user: User,
        current_password: str,
        new_password: str,
        config: MindConfig | None = None,
    ) -> User:
        cfg = config or get_config()
        if not verify_password(current_password, user.password_hash, config=cfg):
            raise IncorrectPassword()
        _check_password_length(new_password, field="new_password", config=cfg)

        user.password_hash = hash_password(new_password, config=cfg)
        user.save(update_fields=["password_hash", "updated_at"])
        return user

    # ----------------------------
    # Email verification
    # ----------------------------
    @staticmethod
    def issue_verification_code(*, user_id, config: MindConfig | None = None) -> VerificationTicket:
        """
        Store a fresh code (overwriting any pending one) and mail it.
        Delivery problems are logged; the code is stored either way.
        """
        cfg = config or get_config()
        code = generate_verification_code()
        expires_at = timezone.now() + cfg.verification_code_ttl

        with transaction.atomic():
            user = User.objects.select_for_update().get(pk=user_id)
            user.verification_code = code
            user.verification_code_expires_at = expires_at
            user.save(update_fields=["verification_code", "verification_code_expires_at", "updated_at"])

        try:
            send_verification_email(email=user.email, code=code, ttl=cfg.verification_code_ttl, config=cfg)
        except Exception:
            logger.exception("Verification email to user %s could not be sent", user.pk)

        return VerificationTicket(user=user, code=code, expires_at=expires_at)

    @staticmethod
    @transaction.atomic
    def verify_code(*, user_id, code: str, config: MindConfig | None = None) -> AuthResult:
        cfg = config or get_config()
        user = User.objects.select_for_update().get(pk=user_id)

        if not user.verification_code or user.verification_code_expires_at is None:
            raise VerificationCodeMissing()
        if timezone.now() > user.verification_code_expires_at:
            raise VerificationCodeExpired()
        if not hmac.compare_digest(user.verification_code, str(code or "")):
            raise VerificationCodeMismatch()

        user.email_verified = True
        user.is_active = True
        user.verification_code = ""
        user.verification_code_expires_at = None
        user.save(
            update_fields=[
                "email_verified",
                "is_active",
                "verification_code",
                "verification_code_expires_at",
                "updated_at",
            ]
        )
        return AuthResult(user=user, token=issue_token(user, config=cfg))

    # ----------------------------
    # Profile
    # ----------------------------
    @staticmethod
    @transaction.atomic
    def update_profile(*, user: User, person_data: Dict[str, Any], user_data: Dict[str, Any]) -> User:
        if "email" in user_data:
            email = normalize_email(user_data["email"])
            if email != user.email and _email_taken(email, exclude_id=user.pk):
                raise DuplicateEmail()
            user_data = {**user_data, "email": email}

        if person_data:
            person = user.person
            for k, v in person_data.items():
                setattr(person, k, v)
            person.save()

        if user_data:
            for k, v in user_data.items():
                setattr(user, k, v)
            user.save()

        return user


class UserService:
    """
    Administrative changes to accounts. Lifecycle changes go through the
    boolean flags; User.save() keeps the Status row in step.
    """

    @staticmethod
    @transaction.atomic
    def update_account(*, user: User, data: Dict[str, Any]) -> User:
        data = dict(data)
        status = data.pop("status", None)

        if "email" in data:
            email = normalize_email(data["email"])
            if email != user.email and _email_taken(email, exclude_id=user.pk):
                raise DuplicateEmail()
            data["email"] = email

        for k, v in data.items():
            setattr(user, k, v)

        if status is not None:
            UserService._apply_status(user, AccountStatus(status))

        user.save()
        return user

    @staticmethod
    def _apply_status(user: User, state: AccountStatus) -> None:
        if state == AccountStatus.LOCKED:
            user.is_locked = True
            user.locked_at = user.locked_at or timezone.now()
            return

        user.is_locked = False
        user.locked_at = None
        user.failed_attempts = 0
        if state == AccountStatus.INACTIVE:
            user.is_active = False
        elif state == AccountStatus.PENDING_VERIFICATION:
            user.is_active = True
            user.email_verified = False
        else:
            user.is_active = True
            user.email_verified = True

    @staticmethod
    @transaction.atomic
    def toggle_active(*, user: User) -> User:
        user.is_active = not user.is_active
        user.save(update_fields=["is_active", "updated_at"])
        return user

    @staticmethod
    @transaction.atomic
    def unblock(*, user: User) -> User:
        if not user.is_locked:
            raise InvalidStateError("User is not locked.")
        user.is_locked = False
        user.failed_attempts = 0
        user.locked_at = None
        user.save(update_fields=["is_locked", "failed_attempts", "locked_at", "updated_at"])
        return user

    @staticmethod
    @transaction.atomic
    def deactivate(*, user: User) -> User:
        # accounts are never physically removed through the API
        user.is_active = False
        user.save(update_fields=["is_active", "updated_at"])
        return user


class PaymentInfoService:
    @staticmethod
    def ensure_available(*, user: User) -> None:
        if PaymentInfo.objects.filter(user=user).exists():
            raise ConflictError("The user already has payment information.")


class SubscriptionService:
    @staticmethod
    def ensure_no_active(*, user: User, exclude_id=None) -> None:
        qs = UserSubscription.objects.filter(user=user, status=SubscriptionStatus.ACTIVE)
        if exclude_id is not None:
            qs = qs.exclude(pk=exclude_id)
        if qs.exists():
            raise ConflictError("The user already has an active subscription.")

    @staticmethod
    @transaction.atomic
    def cancel(*, subscription: UserSubscription, ends_at: Optional[datetime] = None) -> UserSubscription:
        if subscription.status == SubscriptionStatus.CANCELLED:
            raise InvalidStateError("Subscription is already cancelled.")
        subscription.status = SubscriptionStatus.CANCELLED
        subscription.auto_renew = False
        subscription.ends_at = ends_at or subscription.ends_at or timezone.now()
        subscription.save(update_fields=["status", "auto_renew", "ends_at", "updated_at"])
        return subscription

    @staticmethod
    @transaction.atomic
    def reactivate(*, subscription: UserSubscription) -> UserSubscription:
        if subscription.status == SubscriptionStatus.ACTIVE:
            raise InvalidStateError("Subscription is already active.")
        SubscriptionService.ensure_no_active(user=subscription.user, exclude_id=subscription.pk)

        subscription.status = SubscriptionStatus.ACTIVE
        if subscription.ends_at is not None and subscription.ends_at <= timezone.now():
            subscription.ends_at = None
        subscription.save(update_fields=["status", "ends_at", "updated_at"])
        return subscription
