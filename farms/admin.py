"""
Farms Django Admin Configuration
"""
from django.contrib import admin

from .models import Farm


@admin.register(Farm)
class FarmAdmin(admin.ModelAdmin):
    list_display = ['farm_name', 'producer', 'city', 'state', 'total_area', 'arable_area', 'vegetation_area']
    list_filter = ['state']
    search_fields = ['farm_name', 'city', 'producer__producer_name']
    readonly_fields = ['id', 'created_at', 'updated_at']
    raw_id_fields = ['producer']
