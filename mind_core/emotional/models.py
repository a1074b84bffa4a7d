# mind_core/emotional/models.py
from __future__ import annotations

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from mind_core.common.models import LookupModel, UUIDModel

SCALE = [MinValueValidator(1), MaxValueValidator(10)]


class EmotionType(LookupModel):
    class Meta:
        db_table = "emotional_emotion_type"


class Emotion(UUIDModel):
    emotion_type = models.ForeignKey(EmotionType, on_delete=models.PROTECT, related_name="emotions")
    code = models.CharField(max_length=32, unique=True)
    name = models.CharField(max_length=120)
    description = models.CharField(max_length=500, blank=True, default="")

    class Meta:
        db_table = "emotional_emotion"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class SensationKind(models.TextChoices):
    PHYSICAL = "physical", "Physical"
    MENTAL = "mental", "Mental"
    MIXED = "mixed", "Mixed"


class FeelingKind(models.TextChoices):
    POSITIVE = "positive", "Positive"
    NEGATIVE = "negative", "Negative"
    NEUTRAL = "neutral", "Neutral"


class SymptomKind(models.TextChoices):
    PHYSICAL = "physical", "Physical"
    PSYCHOLOGICAL = "psychological", "Psychological"
    COGNITIVE = "cognitive", "Cognitive"
    BEHAVIORAL = "behavioral", "Behavioral"


class Descriptor(UUIDModel):
    """
    Coded catalogue entry with a kind (sensations, feelings, symptoms).
    """
    code = models.CharField(max_length=32, unique=True)
    name = models.CharField(max_length=120)
    description = models.CharField(max_length=500, blank=True, default="")

    class Meta:
        abstract = True
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Sensation(Descriptor):
    kind = models.CharField(max_length=16, choices=SensationKind.choices, default=SensationKind.PHYSICAL)

    class Meta(Descriptor.Meta):
        db_table = "emotional_sensation"


class Feeling(Descriptor):
    kind = models.CharField(max_length=16, choices=FeelingKind.choices, default=FeelingKind.NEUTRAL)

    class Meta(Descriptor.Meta):
        db_table = "emotional_feeling"


class Symptom(Descriptor):
    kind = models.CharField(max_length=16, choices=SymptomKind.choices, default=SymptomKind.PHYSICAL)

    class Meta(Descriptor.Meta):
        db_table = "emotional_symptom"


# -------------------------------------------------------------------
# Diary
# -------------------------------------------------------------------

class DiaryEntry(UUIDModel):
    user = models.ForeignKey("users.User", on_delete=models.CASCADE, related_name="diary_entries")
    date = models.DateTimeField(default=timezone.now)
    title = models.CharField(max_length=200)
    note = models.TextField()
    rating = models.PositiveSmallIntegerField(validators=SCALE)

    class Meta:
        db_table = "emotional_diary"
        ordering = ["-date"]
        indexes = [
            models.Index(fields=["user", "-date"]),
        ]

    def __str__(self) -> str:
        return self.title


class DiaryItem(UUIDModel):
    intensity = models.PositiveSmallIntegerField(validators=SCALE)

    class Meta:
        abstract = True
        ordering = ["created_at"]


class DiaryEmotion(DiaryItem):
    diary = models.ForeignKey(DiaryEntry, on_delete=models.CASCADE, related_name="emotions")
    emotion = models.ForeignKey(Emotion, on_delete=models.PROTECT, related_name="diary_entries")

    class Meta(DiaryItem.Meta):
        db_table = "emotional_diary_emotion"
        constraints = [
            models.UniqueConstraint(fields=["diary", "emotion"], name="uq_diary_emotion"),
        ]


class DiarySensation(DiaryItem):
    diary = models.ForeignKey(DiaryEntry, on_delete=models.CASCADE, related_name="sensations")
    sensation = models.ForeignKey(Sensation, on_delete=models.PROTECT, related_name="diary_entries")

    class Meta(DiaryItem.Meta):
        db_table = "emotional_diary_sensation"
        constraints = [
            models.UniqueConstraint(fields=["diary", "sensation"], name="uq_diary_sensation"),
        ]


class DiaryFeeling(DiaryItem):
    diary = models.ForeignKey(DiaryEntry, on_delete=models.CASCADE, related_name="feelings")
    feeling = models.ForeignKey(Feeling, on_delete=models.PROTECT, related_name="diary_entries")

    class Meta(DiaryItem.Meta):
        db_table = "emotional_diary_feeling"
        constraints = [
            models.UniqueConstraint(fields=["diary", "feeling"], name="uq_diary_feeling"),
        ]


class DiarySymptom(DiaryItem):
    diary = models.ForeignKey(DiaryEntry, on_delete=models.CASCADE, related_name="symptoms")
    symptom = models.ForeignKey(Symptom, on_delete=models.PROTECT, related_name="diary_entries")

    class Meta(DiaryItem.Meta):
        db_table = "emotional_diary_symptom"
        constraints = [
            models.UniqueConstraint(fields=["diary", "symptom"], name="uq_diary_symptom"),
        ]


# diary accessor -> (item model, target field)
DIARY_ITEMS = {
    "emotions": (DiaryEmotion, "emotion"),
    "sensations": (DiarySensation, "sensation"),
    "feelings": (DiaryFeeling, "feeling"),
    "symptoms": (DiarySymptom, "symptom"),
}
