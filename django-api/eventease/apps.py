from django.apps import AppConfig


class EventEaseConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "eventease"
    verbose_name = "EventEase"
