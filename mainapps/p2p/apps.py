from django.apps import AppConfig


class P2pAppConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "mainapps.p2p"
    verbose_name = "P2P Transfers"
