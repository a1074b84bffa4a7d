# mind_core/users/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from mind_core.administrative.api.serializers import StatusBriefSerializer
from mind_core.administrative.models import City, Country, Department
from mind_core.users.models import (
    AccountStatus,
    PaymentInfo,
    Person,
    User,
    UserSubscription,
    UserType,
    phone_validator,
)

TIMESTAMPS = ["created_at", "updated_at"]
PERSON_FIELDS = [
    "first_names",
    "last_names",
    "document_type",
    "document_number",
    "birth_date",
    "country",
    "department",
    "city",
]


def _require_any(attrs):
    if not attrs:
        raise serializers.ValidationError("At least one field is required.")
    return attrs


# -------------------------------------------------------------------
# Persons / user types
# -------------------------------------------------------------------

class PersonSerializer(serializers.ModelSerializer):
    class Meta:
        model = Person
        fields = ["id", *PERSON_FIELDS, *TIMESTAMPS]
        read_only_fields = ["id", *TIMESTAMPS]


class UserTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = UserType
        fields = ["id", "code", "name", "description", "is_active", *TIMESTAMPS]
        read_only_fields = ["id", *TIMESTAMPS]

    def validate_code(self, value: str) -> str:
        return value.strip().upper()


class UserTypeBriefSerializer(serializers.ModelSerializer):
    class Meta:
        model = UserType
        fields = ["id", "code", "name"]
        read_only_fields = fields


# -------------------------------------------------------------------
# Users
# -------------------------------------------------------------------

class UserSerializer(serializers.ModelSerializer):
    """
    Read shape. Credentials and verification state never leave the server.
    """
    person = PersonSerializer(read_only=True)
    user_type = UserTypeBriefSerializer(read_only=True)
    status = StatusBriefSerializer(read_only=True)
    account_status = serializers.CharField(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "phone",
            "person",
            "user_type",
            "status",
            "account_status",
            "is_active",
            "is_locked",
            "failed_attempts",
            "locked_at",
            "last_access_at",
            "email_verified",
            *TIMESTAMPS,
        ]
        read_only_fields = fields


class UserUpdateSerializer(serializers.Serializer):
    """
    Partial update contract (PATCH) for administrators.
    `status` takes an account status code and is applied through the lifecycle flags.
    """
    email = serializers.EmailField(required=False)
    phone = serializers.CharField(max_length=16, required=False, allow_blank=True, validators=[phone_validator])
    user_type = serializers.PrimaryKeyRelatedField(queryset=UserType.objects.all(), required=False)
    status = serializers.ChoiceField(choices=AccountStatus.choices, required=False)

    def validate(self, attrs):
        return _require_any(attrs)


# -------------------------------------------------------------------
# Auth payloads
# -------------------------------------------------------------------

class RegisterPersonSerializer(serializers.ModelSerializer):
    class Meta:
        model = Person
        fields = PERSON_FIELDS
        # document uniqueness is reported as DUPLICATE_DOCUMENT by the service
        validators = []


class RegisterUserSerializer(serializers.Serializer):
    # format, phone pattern and password length are enforced once the person exists
    email = serializers.CharField(max_length=254)
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    phone = serializers.CharField(required=False, allow_blank=True, default="")


class RegisterSerializer(serializers.Serializer):
    person = RegisterPersonSerializer()
    user = RegisterUserSerializer()


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField(max_length=254)
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class AuthTokenSerializer(serializers.Serializer):
    user = UserSerializer()
    token = serializers.CharField()


class ChangePasswordSerializer(serializers.Serializer):
    current_password = serializers.CharField(write_only=True, trim_whitespace=False)
    new_password = serializers.CharField(write_only=True, trim_whitespace=False)


class SendVerificationSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()


class VerificationSentSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    email = serializers.EmailField()
    expires_at = serializers.DateTimeField()
    verification_code = serializers.CharField(required=False)


class VerifyCodeSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    code = serializers.CharField(max_length=6)


class ProfileUpdateSerializer(serializers.Serializer):
    """
    Partial update contract (PATCH) for the caller's own profile.
    Document type/number are the identity anchor and cannot change here.
    """
    first_names = serializers.CharField(max_length=100, required=False)
    last_names = serializers.CharField(max_length=100, required=False)
    birth_date = serializers.DateField(required=False)
    country = serializers.PrimaryKeyRelatedField(queryset=Country.objects.all(), required=False, allow_null=True)
    department = serializers.PrimaryKeyRelatedField(queryset=Department.objects.all(), required=False, allow_null=True)
    city = serializers.PrimaryKeyRelatedField(queryset=City.objects.all(), required=False, allow_null=True)
    email = serializers.EmailField(required=False)
    phone = serializers.CharField(max_length=16, required=False, allow_blank=True, validators=[phone_validator])

    USER_FIELDS = ("email", "phone")

    def validate(self, attrs):
        return _require_any(attrs)

    def split(self):
        data = dict(self.validated_data)
        user_data = {k: data.pop(k) for k in self.USER_FIELDS if k in data}
        return data, user_data


# -------------------------------------------------------------------
# Payment info / subscriptions
# -------------------------------------------------------------------

class PaymentInfoSerializer(serializers.ModelSerializer):
    class Meta:
        model = PaymentInfo
        fields = [
            "id",
            "user",
            "provider",
            "customer_id",
            "payment_method",
            "last_transaction_at",
            "is_active",
            *TIMESTAMPS,
        ]
        read_only_fields = ["id", *TIMESTAMPS]
        # one record per user is a business rule (CONFLICT), not a field error
        extra_kwargs = {"user": {"validators": []}}

    def validate_user(self, value):
        if self.instance is not None and value.pk != self.instance.user_id:
            raise serializers.ValidationError("Payment information cannot move to another user.")
        return value


class UserSubscriptionSerializer(serializers.ModelSerializer):
    class Meta:
        model = UserSubscription
        fields = ["id", "user", "plan", "starts_at", "ends_at", "status", "auto_renew", *TIMESTAMPS]
        read_only_fields = ["id", *TIMESTAMPS]

    def validate(self, attrs):
        starts = attrs.get("starts_at", getattr(self.instance, "starts_at", None))
        ends = attrs.get("ends_at", getattr(self.instance, "ends_at", None))
        if starts and ends and ends <= starts:
            raise serializers.ValidationError({"ends_at": "ends_at must be after starts_at."})
        return attrs


class SubscriptionStatsSerializer(serializers.Serializer):
    active = serializers.IntegerField()
    paused = serializers.IntegerField()
    cancelled = serializers.IntegerField()
    expired = serializers.IntegerField()
    total = serializers.IntegerField()


class UserStatsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    active = serializers.IntegerField()
    inactive = serializers.IntegerField()
    locked = serializers.IntegerField()
