# mind_core/emotional/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.decorators import action

from mind_core.audit.models import AuditAction, AuditDomain
from mind_core.audit.services import snapshot
from mind_core.common.api.responses import envelope
from mind_core.common.views import AuditedModelViewSet
from mind_core.emotional.api.serializers import (
    DiaryEmotionSerializer,
    DiaryEntrySerializer,
    DiaryFeelingSerializer,
    DiarySensationSerializer,
    DiaryStatsQuerySerializer,
    DiaryStatsSerializer,
    DiarySymptomSerializer,
    EmotionSerializer,
    EmotionTypeSerializer,
    FeelingSerializer,
    SensationSerializer,
    SymptomSerializer,
)
from mind_core.emotional.filters import DiaryFilter
from mind_core.emotional.models import (
    DiaryEmotion,
    DiaryFeeling,
    DiarySensation,
    DiarySymptom,
    Emotion,
    EmotionType,
    Feeling,
    Sensation,
    Symptom,
)
from mind_core.emotional.selectors import diary_detail_queryset, diary_stats
from mind_core.emotional.services import DiaryService


class DiaryDomainViewSet(AuditedModelViewSet):
    audit_domain = AuditDomain.DIARY


# -------------------------------------------------------------------
# Catalogues
# -------------------------------------------------------------------

@extend_schema(tags=["Emotional: Catalogues"])
class EmotionTypeViewSet(DiaryDomainViewSet):
    queryset = EmotionType.objects.all().order_by("code")
    serializer_class = EmotionTypeSerializer
    audit_entity = "EmotionType"
    delete_guards = (("emotions", "The emotion type has emotions."),)


@extend_schema(tags=["Emotional: Catalogues"])
class EmotionViewSet(DiaryDomainViewSet):
    queryset = Emotion.objects.select_related("emotion_type").order_by("name")
    serializer_class = EmotionSerializer
    audit_entity = "Emotion"
    filterset_fields = ["emotion_type", "code"]
    delete_guards = (("diary_entries", "The emotion is used in diary entries."),)


@extend_schema(tags=["Emotional: Catalogues"])
class SensationViewSet(DiaryDomainViewSet):
    queryset = Sensation.objects.all().order_by("name")
    serializer_class = SensationSerializer
    audit_entity = "Sensation"
    filterset_fields = ["kind", "code"]
    delete_guards = (("diary_entries", "The sensation is used in diary entries."),)


@extend_schema(tags=["Emotional: Catalogues"])
class FeelingViewSet(DiaryDomainViewSet):
    queryset = Feeling.objects.all().order_by("name")
    serializer_class = FeelingSerializer
    audit_entity = "Feeling"
    filterset_fields = ["kind", "code"]
    delete_guards = (("diary_entries", "The feeling is used in diary entries."),)


@extend_schema(tags=["Emotional: Catalogues"])
class SymptomViewSet(DiaryDomainViewSet):
    queryset = Symptom.objects.all().order_by("name")
    serializer_class = SymptomSerializer
    audit_entity = "Symptom"
    filterset_fields = ["kind", "code"]
    delete_guards = (("diary_entries", "The symptom is used in diary entries."),)


# -------------------------------------------------------------------
# Diaries
# -------------------------------------------------------------------

@extend_schema(tags=["Emotional: Diaries"])
class DiaryEntryViewSet(DiaryDomainViewSet):
    serializer_class = DiaryEntrySerializer
    filterset_class = DiaryFilter
    audit_entity = "Diary"

    def get_queryset(self):
        return diary_detail_queryset()

    def perform_create(self, serializer):
        data, items = serializer.split()
        diary = DiaryService.create(data=data, items=items)
        self.audit(AuditAction.CREATE, diary, after=snapshot(diary), extra={"items": sorted(items)})
        return diary

    def perform_update(self, serializer):
        diary = serializer.instance
        data, items = serializer.split()
        return self.audited(
            AuditAction.UPDATE,
            diary,
            lambda: DiaryService.update(diary=diary, data=data, items=items),
            extra={"items": sorted(items)},
        )

    def present(self, instance, *, many: bool = False):
        if not many:
            # prefetched item lists are stale after a nested write
            instance = diary_detail_queryset().get(pk=instance.pk)
        return super().present(instance, many=many)

    @extend_schema(
        parameters=[
            OpenApiParameter("date_from", OpenApiTypes.DATETIME, OpenApiParameter.QUERY),
            OpenApiParameter("date_to", OpenApiTypes.DATETIME, OpenApiParameter.QUERY),
        ],
        responses={200: DiaryStatsSerializer},
    )
    @action(detail=False, methods=["get"], url_path=r"stats/(?P<user_id>[^/.]+)")
    def stats(self, request, user_id=None):
        q = DiaryStatsQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        data = diary_stats(user_id=self.validated_uuid(user_id), **q.validated_data)
        return envelope(DiaryStatsSerializer(data).data)


# -------------------------------------------------------------------
# Diary items
# -------------------------------------------------------------------

@extend_schema(tags=["Emotional: Diary items"])
class DiaryEmotionViewSet(DiaryDomainViewSet):
    queryset = DiaryEmotion.objects.select_related("diary", "emotion").order_by("created_at")
    serializer_class = DiaryEmotionSerializer
    audit_entity = "DiaryEmotion"
    filterset_fields = ["diary", "emotion"]


@extend_schema(tags=["Emotional: Diary items"])
class DiarySensationViewSet(DiaryDomainViewSet):
    queryset = DiarySensation.objects.select_related("diary", "sensation").order_by("created_at")
    serializer_class = DiarySensationSerializer
    audit_entity = "DiarySensation"
    filterset_fields = ["diary", "sensation"]


@extend_schema(tags=["Emotional: Diary items"])
class DiaryFeelingViewSet(DiaryDomainViewSet):
    queryset = DiaryFeeling.objects.select_related("diary", "feeling").order_by("created_at")
    serializer_class = DiaryFeelingSerializer
    audit_entity = "DiaryFeeling"
    filterset_fields = ["diary", "feeling"]


@extend_schema(tags=["Emotional: Diary items"])
class DiarySymptomViewSet(DiaryDomainViewSet):
    queryset = DiarySymptom.objects.select_related("diary", "symptom").order_by("created_at")
    serializer_class = DiarySymptomSerializer
    audit_entity = "DiarySymptom"
    filterset_fields = ["diary", "symptom"]
