from django.apps import AppConfig


class RequestAppConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.request_app'
    verbose_name = "Teach Requests"
