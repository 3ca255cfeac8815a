"""
Producers Django Admin Configuration
"""
from django.contrib import admin

from .models import Producer


@admin.register(Producer)
class ProducerAdmin(admin.ModelAdmin):
    list_display = ['producer_name', 'document_type', 'document', 'farm_count', 'created_at']
    list_filter = ['document_type']
    search_fields = ['producer_name', 'document']
    readonly_fields = ['id', 'created_at', 'updated_at']

    def farm_count(self, obj):
        """Number of farms owned."""
        return obj.farms.count()
    farm_count.short_description = 'Farms'
