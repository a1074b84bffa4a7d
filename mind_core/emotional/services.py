# mind_core/emotional/services.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from django.db import transaction

from mind_core.emotional.models import DIARY_ITEMS, DiaryEntry

ItemSpec = Dict[str, Any]


class DiaryService:
    """
    A diary entry and its rated items are written together. On update, an item
    list that is present replaces the stored one; an absent list is untouched.
    """

    @staticmethod
    def _replace_items(diary: DiaryEntry, accessor: str, items: List[ItemSpec]) -> None:
        model, target = DIARY_ITEMS[accessor]
        model.objects.filter(diary=diary).delete()
        model.objects.bulk_create(
            [model(diary=diary, intensity=i["intensity"], **{target: i[target]}) for i in items]
        )

    @staticmethod
    @transaction.atomic
    def create(*, data: Dict[str, Any], items: Optional[Dict[str, List[ItemSpec]]] = None) -> DiaryEntry:
        diary = DiaryEntry.objects.create(**data)
        for accessor, specs in (items or {}).items():
            DiaryService._replace_items(diary, accessor, specs)
        return diary

    @staticmethod
    @transaction.atomic
    def update(
        *,
        diary: DiaryEntry,
        data: Dict[str, Any],
        items: Optional[Dict[str, List[ItemSpec]]] = None,
    ) -> DiaryEntry:
        for k, v in data.items():
            setattr(diary, k, v)
        if data:
            diary.save()
        for accessor, specs in (items or {}).items():
            DiaryService._replace_items(diary, accessor, specs)
        return diary
