# mind_core/administrative/api/serializers.py
from __future__ import annotations

from django.utils import timezone
from rest_framework import serializers

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

TIMESTAMPS = ["created_at", "updated_at"]


class StatusSerializer(serializers.ModelSerializer):
    color = serializers.RegexField(r"^#[0-9A-Fa-f]{6}$", required=False)

    class Meta:
        model = Status
        fields = ["id", "code", "name", "color", "symbol", "description", "visible", "module", *TIMESTAMPS]
        read_only_fields = ["id", *TIMESTAMPS]


class StatusBriefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Status
        fields = ["id", "code", "name", "color"]
        read_only_fields = fields


class CountrySerializer(serializers.ModelSerializer):
    class Meta:
        model = Country
        fields = ["id", "name", "iso_code", *TIMESTAMPS]
        read_only_fields = ["id", *TIMESTAMPS]

    def validate_iso_code(self, value: str) -> str:
        value = value.strip().upper()
        qs = Country.objects.filter(iso_code=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("country with this iso code already exists.", code="unique")
        return value


class DepartmentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Department
        fields = ["id", "country", "name", "dane_code", *TIMESTAMPS]
        read_only_fields = ["id", *TIMESTAMPS]


class CitySerializer(serializers.ModelSerializer):
    class Meta:
        model = City
        fields = ["id", "department", "name", "dane_code", *TIMESTAMPS]
        read_only_fields = ["id", *TIMESTAMPS]


class AccessSerializer(serializers.ModelSerializer):
    class Meta:
        model = Access
        fields = ["id", "code", "name", "scope", *TIMESTAMPS]
        read_only_fields = ["id", *TIMESTAMPS]


class UserAccessSerializer(serializers.ModelSerializer):
    class Meta:
        model = UserAccess
        fields = ["id", "user", "access", "assigned_at", "is_active", *TIMESTAMPS]
        read_only_fields = ["id", "assigned_at", *TIMESTAMPS]


class SystemImageSerializer(serializers.ModelSerializer):
    class Meta:
        model = SystemImage
        fields = ["id", "kind", "name", "url", "hash", "metadata", "is_active", *TIMESTAMPS]
        read_only_fields = ["id", *TIMESTAMPS]


class MenuSerializer(serializers.ModelSerializer):
    class Meta:
        model = Menu
        fields = ["id", "name", "route", "icon", "order", "parent", "is_active", "level", *TIMESTAMPS]
        read_only_fields = ["id", *TIMESTAMPS]

    def validate(self, attrs):
        parent = attrs.get("parent")
        if parent is not None and self.instance is not None and parent.pk == self.instance.pk:
            raise serializers.ValidationError({"parent": "A menu cannot be its own parent."})
        return attrs


class MenuNodeSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    route = serializers.CharField()
    icon = serializers.CharField()
    order = serializers.IntegerField()
    level = serializers.IntegerField()
    children = serializers.ListField(child=serializers.DictField())


class NotificationTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = NotificationType
        fields = ["id", "code", "name", "description", *TIMESTAMPS]
        read_only_fields = ["id", *TIMESTAMPS]


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = [
            "id",
            "notification_type",
            "user",
            "title",
            "message",
            "scheduled_at",
            "sent",
            "sent_at",
            *TIMESTAMPS,
        ]
        # delivery state only moves through mark-sent
        read_only_fields = ["id", "sent", "sent_at", *TIMESTAMPS]
        extra_kwargs = {"scheduled_at": {"required": False}}

    def create(self, validated_data):
        validated_data.setdefault("scheduled_at", timezone.now())
        return super().create(validated_data)


class SubscriptionTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = SubscriptionType
        fields = ["id", "code", "name", "description", *TIMESTAMPS]
        read_only_fields = ["id", *TIMESTAMPS]


class SubscriptionPlanSerializer(serializers.ModelSerializer):
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)

    class Meta:
        model = SubscriptionPlan
        fields = ["id", "subscription_type", "name", "price", "periodicity", "is_active", *TIMESTAMPS]
        read_only_fields = ["id", *TIMESTAMPS]


class VariableTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = VariableType
        fields = ["id", "code", "name", "description", *TIMESTAMPS]
        read_only_fields = ["id", *TIMESTAMPS]


class VariableSerializer(serializers.ModelSerializer):
    class Meta:
        model = Variable
        fields = ["id", "variable_type", "key", "value", "environment", "description", *TIMESTAMPS]
        read_only_fields = ["id", *TIMESTAMPS]
