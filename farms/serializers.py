"""
Farm Serializers
"""
from rest_framework import serializers

from core.exceptions import as_validation_error
from producers.models import Producer
from .models import Farm
from .validators import validate_land_use

AREA_FIELDS = ('total_area', 'arable_area', 'vegetation_area')


class FarmProducerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Producer
        fields = ['id', 'producer_name']


class FarmSerializer(serializers.ModelSerializer):
    """Read/write representation of a farm."""

    producer_id = serializers.UUIDField()
    producer = FarmProducerSerializer(read_only=True)
    total_area = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, coerce_to_string=False)
    arable_area = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, coerce_to_string=False)
    vegetation_area = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, coerce_to_string=False)

    class Meta:
        model = Farm
        fields = [
            'id', 'producer_id', 'producer', 'farm_name', 'city', 'state',
            'total_area', 'arable_area', 'vegetation_area',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_state(self, value):
        value = value.strip().upper()
        if len(value) != 2 or not value.isalpha():
            raise serializers.ValidationError('State must be a two-letter code.', code='state_code')
        return value

    def validate(self, attrs):
        if any(field in attrs for field in AREA_FIELDS):
            areas = [attrs.get(field, getattr(self.instance, field, None)) for field in AREA_FIELDS]
            issues = validate_land_use(*areas)
            if issues:
                raise as_validation_error(issues)
        return attrs
