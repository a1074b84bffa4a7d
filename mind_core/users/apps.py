from django.apps import AppConfig


class UsersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "mind_core.users"

    def ready(self) -> None:
        # import here so app loading doesn't break tooling
        from mind_core.users import openapi  # noqa: F401
