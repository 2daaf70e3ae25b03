from django.apps import AppConfig


class SupportConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "mainapps.support"

    def ready(self):
        import mainapps.support.signals  # noqa F401
