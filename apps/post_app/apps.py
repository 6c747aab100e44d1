from django.apps import AppConfig


class PostAppConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.post_app'
    verbose_name = "Learning Posts"
