# mind_core/emotional/admin.py
from django.contrib import admin

from mind_core.emotional.models import (
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


class DiaryEmotionInline(admin.TabularInline):
    model = DiaryEmotion
    extra = 0


class DiarySensationInline(admin.TabularInline):
    model = DiarySensation
    extra = 0


class DiaryFeelingInline(admin.TabularInline):
    model = DiaryFeeling
    extra = 0


class DiarySymptomInline(admin.TabularInline):
    model = DiarySymptom
    extra = 0


@admin.register(DiaryEntry)
class DiaryEntryAdmin(admin.ModelAdmin):
    list_display = ("title", "user", "date", "rating")
    list_filter = ("rating",)
    search_fields = ("title", "user__email")
    ordering = ("-date",)
    inlines = [DiaryEmotionInline, DiarySensationInline, DiaryFeelingInline, DiarySymptomInline]


@admin.register(Emotion)
class EmotionAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "emotion_type")
    list_filter = ("emotion_type",)
    search_fields = ("code", "name")


@admin.register(Sensation, Feeling, Symptom)
class DescriptorAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "kind")
    list_filter = ("kind",)
    search_fields = ("code", "name")


admin.site.register(EmotionType)
