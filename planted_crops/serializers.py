"""
Planted Crop Serializers
"""
from rest_framework import serializers

from .models import MIN_HARVEST_YEAR, PlantedCrop


class PlantedCropSerializer(serializers.ModelSerializer):
    """Read/write representation of a planted crop."""

    farm_id = serializers.UUIDField()
    culture_id = serializers.UUIDField()
    farm_name = serializers.CharField(source='farm.farm_name', read_only=True)
    culture_name = serializers.CharField(source='culture.name', read_only=True)
    planted_area = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, coerce_to_string=False)
    harvest_year = serializers.IntegerField(min_value=MIN_HARVEST_YEAR)

    class Meta:
        model = PlantedCrop
        fields = [
            'id', 'farm_id', 'farm_name', 'culture_id', 'culture_name',
            'planted_area', 'harvest_year', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
