from django.contrib import admin

from .models import PlantedCrop


@admin.register(PlantedCrop)
class PlantedCropAdmin(admin.ModelAdmin):
    list_display = ['culture', 'farm', 'planted_area', 'harvest_year', 'created_at']
    list_filter = ['harvest_year', 'culture']
    search_fields = ['farm__farm_name', 'culture__name']
    readonly_fields = ['id', 'created_at', 'updated_at']
    raw_id_fields = ['farm', 'culture']
