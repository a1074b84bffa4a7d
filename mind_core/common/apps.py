from django.apps import AppConfig
from django.core.signals import setting_changed


class CommonConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "mind_core.common"

    def ready(self) -> None:
        from mind_core.common.config import reset_config

        setting_changed.connect(reset_config, dispatch_uid="mind_core.common.reset_config")
