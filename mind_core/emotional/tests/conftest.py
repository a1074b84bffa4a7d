import pytest

from mind_core.emotional.models import Emotion, EmotionType, Feeling, Sensation, Symptom


@pytest.fixture
def emotion_type(db):
    return EmotionType.objects.create(code="BASIC", name="Basic")


@pytest.fixture
def joy(emotion_type):
    return Emotion.objects.create(emotion_type=emotion_type, code="JOY", name="Alegría")


@pytest.fixture
def fear(emotion_type):
    return Emotion.objects.create(emotion_type=emotion_type, code="FEAR", name="Miedo")


@pytest.fixture
def tension(db):
    return Sensation.objects.create(code="TENSION", name="Tensión")


@pytest.fixture
def calm(db):
    return Feeling.objects.create(code="CALM", name="Calma")


@pytest.fixture
def headache(db):
    return Symptom.objects.create(code="HEADACHE", name="Dolor de cabeza")
