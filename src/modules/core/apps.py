from django.apps import AppConfig


class CoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.core"
    label = "core"

    def ready(self) -> None:
        # drf-spectacular picks up extensions when their module is imported
        from modules.core import schema  # noqa: F401
