from django.apps import AppConfig


class AdministrativeConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "mind_core.administrative"
    label = "administrative"
