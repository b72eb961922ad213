from django.apps import AppConfig


class ProfitSharingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "profit_sharing"
