import pytest

from mind_core.emotional.models import DiaryEmotion, DiaryEntry

pytestmark = pytest.mark.django_db


def test_emotion_type_with_emotions_cannot_be_deleted(api_client, joy):
    res = api_client.delete(f"/api/emotional/emotion-types/{joy.emotion_type_id}/")

    assert res.status_code == 400
    assert res.data["error"] == "IN_USE"


def test_emotion_used_in_a_diary_cannot_be_deleted(api_client, user, joy, fear):
    diary = DiaryEntry.objects.create(user=user, title="t", note="n", rating=5)
    DiaryEmotion.objects.create(diary=diary, emotion=joy, intensity=3)

    assert api_client.delete(f"/api/emotional/emotions/{joy.id}/").data["error"] == "IN_USE"
    assert api_client.delete(f"/api/emotional/emotions/{fear.id}/").status_code == 200


def test_emotion_type_code_is_upper_cased(api_client):
    res = api_client.post("/api/emotional/emotion-types/", {"code": " complex ", "name": "Complex"}, format="json")

    assert res.status_code == 201
    assert res.data["data"]["code"] == "COMPLEX"


def test_sensation_kind_must_be_known(api_client):
    res = api_client.post(
        "/api/emotional/sensations/",
        {"code": "HEAT", "name": "Calor", "kind": "spiritual"},
        format="json",
    )

    assert res.status_code == 400
