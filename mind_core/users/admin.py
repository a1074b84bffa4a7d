# mind_core/users/admin.py
from django.contrib import admin

from mind_core.users.models import PaymentInfo, Person, User, UserSubscription, UserType


@admin.register(Person)
class PersonAdmin(admin.ModelAdmin):
    list_display = ("first_names", "last_names", "document_type", "document_number", "birth_date")
    list_filter = ("document_type",)
    search_fields = ("first_names", "last_names", "document_number")
    ordering = ("last_names", "first_names")


@admin.register(UserType)
class UserTypeAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "is_active")
    search_fields = ("code", "name")


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ("email", "user_type", "status", "is_active", "is_locked", "email_verified", "last_access_at")
    list_filter = ("is_active", "is_locked", "email_verified", "user_type")
    search_fields = ("email", "phone", "person__document_number")
    # credentials are never edited from the admin
    exclude = ("password_hash", "verification_code", "verification_code_expires_at")
    readonly_fields = ("status", "failed_attempts", "locked_at", "last_access_at", "created_at", "updated_at")
    ordering = ("-created_at",)


@admin.register(PaymentInfo)
class PaymentInfoAdmin(admin.ModelAdmin):
    list_display = ("user", "provider", "payment_method", "is_active", "last_transaction_at")
    list_filter = ("provider", "payment_method", "is_active")


@admin.register(UserSubscription)
class UserSubscriptionAdmin(admin.ModelAdmin):
    list_display = ("user", "plan", "status", "starts_at", "ends_at", "auto_renew")
    list_filter = ("status", "auto_renew")
    ordering = ("-starts_at",)
