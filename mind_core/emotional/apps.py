from django.apps import AppConfig


class EmotionalConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "mind_core.emotional"
    label = "emotional"
