# mind_core/audit/api/serializers.py
from rest_framework import serializers

from mind_core.audit.models import CLEANUP_DEFAULT_DAYS, AuditAction


class AuditRecordSerializer(serializers.Serializer):
    # the four domain tables share one shape, so a plain Serializer covers all of them
    id = serializers.IntegerField(read_only=True)
    entity = serializers.CharField(read_only=True)
    entity_id = serializers.CharField(read_only=True)
    action = serializers.CharField(read_only=True)
    actor_id = serializers.CharField(read_only=True)
    before = serializers.JSONField(read_only=True)
    after = serializers.JSONField(read_only=True)
    ip = serializers.CharField(read_only=True)
    user_agent = serializers.CharField(read_only=True)
    metadata = serializers.JSONField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)


class AuditQuerySerializer(serializers.Serializer):
    entity = serializers.CharField(required=False)
    entity_id = serializers.CharField(required=False)
    actor_id = serializers.CharField(required=False)
    action = serializers.ChoiceField(choices=AuditAction.choices, required=False)
    date_from = serializers.DateTimeField(required=False)
    date_to = serializers.DateTimeField(required=False)

    def validate(self, attrs):
        start, end = attrs.get("date_from"), attrs.get("date_to")
        if start and end and start > end:
            raise serializers.ValidationError({"date_to": "date_to must be after date_from."})
        return attrs


class AuditCleanupSerializer(serializers.Serializer):
    days = serializers.IntegerField(required=False, default=CLEANUP_DEFAULT_DAYS, min_value=1)

    def __init__(self, *args, max_days: int = 365, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["days"] = serializers.IntegerField(
            required=False,
            default=CLEANUP_DEFAULT_DAYS,
            min_value=1,
            max_value=max_days,
        )


class AuditActionStatSerializer(serializers.Serializer):
    action = serializers.CharField()
    count = serializers.IntegerField()
    last_at = serializers.DateTimeField()


class AuditEntityStatSerializer(serializers.Serializer):
    entity = serializers.CharField()
    total = serializers.IntegerField()
    actions = AuditActionStatSerializer(many=True)
