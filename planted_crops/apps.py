from django.apps import AppConfig


class PlantedCropsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'planted_crops'
    verbose_name = 'Planted Crops'
