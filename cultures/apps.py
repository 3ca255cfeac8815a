from django.apps import AppConfig


class CulturesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'cultures'
    verbose_name = 'Cultures'
