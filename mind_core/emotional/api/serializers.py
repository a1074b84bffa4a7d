# mind_core/emotional/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from mind_core.emotional.models import (
    DIARY_ITEMS,
    DiaryEmotion,
    DiaryEntry,
    DiaryFeeling,
    DiarySensation,
    DiarySymptom,
    Emotion,
    EmotionType,
    Feeling,
    Sensation,
    Symptom,
)

TIMESTAMPS = ["created_at", "updated_at"]
DESCRIPTOR_FIELDS = ["id", "code", "name", "kind", "description", *TIMESTAMPS]


def _upper_code(value: str) -> str:
    return value.strip().upper()


class EmotionTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = EmotionType
        fields = ["id", "code", "name", "description", *TIMESTAMPS]
        read_only_fields = ["id", *TIMESTAMPS]

    def validate_code(self, value: str) -> str:
        return _upper_code(value)


class EmotionSerializer(serializers.ModelSerializer):
    class Meta:
        model = Emotion
        fields = ["id", "emotion_type", "code", "name", "description", *TIMESTAMPS]
        read_only_fields = ["id", *TIMESTAMPS]


class SensationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Sensation
        fields = DESCRIPTOR_FIELDS
        read_only_fields = ["id", *TIMESTAMPS]


class FeelingSerializer(serializers.ModelSerializer):
    class Meta:
        model = Feeling
        fields = DESCRIPTOR_FIELDS
        read_only_fields = ["id", *TIMESTAMPS]


class SymptomSerializer(serializers.ModelSerializer):
    class Meta:
        model = Symptom
        fields = DESCRIPTOR_FIELDS
        read_only_fields = ["id", *TIMESTAMPS]


# -------------------------------------------------------------------
# Diary items (standalone CRUD)
# -------------------------------------------------------------------

class DiaryEmotionSerializer(serializers.ModelSerializer):
    class Meta:
        model = DiaryEmotion
        fields = ["id", "diary", "emotion", "intensity", *TIMESTAMPS]
        read_only_fields = ["id", *TIMESTAMPS]


class DiarySensationSerializer(serializers.ModelSerializer):
    class Meta:
        model = DiarySensation
        fields = ["id", "diary", "sensation", "intensity", *TIMESTAMPS]
        read_only_fields = ["id", *TIMESTAMPS]


class DiaryFeelingSerializer(serializers.ModelSerializer):
    class Meta:
        model = DiaryFeeling
        fields = ["id", "diary", "feeling", "intensity", *TIMESTAMPS]
        read_only_fields = ["id", *TIMESTAMPS]


class DiarySymptomSerializer(serializers.ModelSerializer):
    class Meta:
        model = DiarySymptom
        fields = ["id", "diary", "symptom", "intensity", *TIMESTAMPS]
        read_only_fields = ["id", *TIMESTAMPS]


# -------------------------------------------------------------------
# Diary entries (items nested, written by DiaryService)
# -------------------------------------------------------------------

def _item_serializer(item_model, target: str):
    class ItemSerializer(serializers.ModelSerializer):
        class Meta:
            model = item_model
            fields = ["id", target, "intensity"]
            read_only_fields = ["id"]
            # the diary is not known yet; duplicates are checked on the list
            validators = []

    ItemSerializer.__name__ = ItemSerializer.__qualname__ = f"{item_model.__name__}ItemSerializer"
    return ItemSerializer


class DiaryItemListField(serializers.ListSerializer):
    def validate(self, attrs):
        target = self.child.Meta.fields[1]
        ids = [item[target].pk for item in attrs]
        if len(ids) != len(set(ids)):
            raise serializers.ValidationError(f"Each {target} may appear only once per diary.")
        return attrs


def _item_field(accessor: str):
    item_model, target = DIARY_ITEMS[accessor]
    child = _item_serializer(item_model, target)()
    return DiaryItemListField(child=child, required=False)


class DiaryEntrySerializer(serializers.ModelSerializer):
    emotions = _item_field("emotions")
    sensations = _item_field("sensations")
    feelings = _item_field("feelings")
    symptoms = _item_field("symptoms")

    ITEM_FIELDS = tuple(DIARY_ITEMS)

    class Meta:
        model = DiaryEntry
        fields = [
            "id",
            "user",
            "date",
            "title",
            "note",
            "rating",
            "emotions",
            "sensations",
            "feelings",
            "symptoms",
            *TIMESTAMPS,
        ]
        read_only_fields = ["id", *TIMESTAMPS]

    def split(self):
        data = dict(self.validated_data)
        items = {k: [dict(i) for i in data.pop(k)] for k in self.ITEM_FIELDS if k in data}
        return data, items


class DiaryStatsSerializer(serializers.Serializer):
    total_entries = serializers.IntegerField()
    average_rating = serializers.FloatField()
    min_rating = serializers.IntegerField()
    max_rating = serializers.IntegerField()
    last_entry_date = serializers.DateTimeField(allow_null=True)


class DiaryStatsQuerySerializer(serializers.Serializer):
    date_from = serializers.DateTimeField(required=False)
    date_to = serializers.DateTimeField(required=False)
