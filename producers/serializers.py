"""
Producer Serializers
"""
from rest_framework import serializers

from core.exceptions import as_validation_error
from .models import Producer
from .validators import normalize_document, validate_document


class ProducerFarmSerializer(serializers.Serializer):
    """Compact farm representation nested in producer details."""
    id = serializers.UUIDField(read_only=True)
    farm_name = serializers.CharField(read_only=True)
    city = serializers.CharField(read_only=True)
    state = serializers.CharField(read_only=True)
    total_area = serializers.DecimalField(max_digits=12, decimal_places=2, coerce_to_string=False, read_only=True)


class ProducerSerializer(serializers.ModelSerializer):
    """List/create/update representation of a producer."""

    document = serializers.CharField(max_length=32)

    class Meta:
        model = Producer
        fields = ['id', 'producer_name', 'document', 'document_type', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_producer_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Producer name must not be empty.', code='blank')
        return value

    def validate(self, attrs):
        document = attrs.get('document', getattr(self.instance, 'document', None))
        document_type = attrs.get('document_type', getattr(self.instance, 'document_type', None))

        if 'document' in attrs or 'document_type' in attrs:
            issues = validate_document(document, document_type)
            if issues:
                raise as_validation_error(issues)
            attrs['document'] = normalize_document(document)

        return attrs


class ProducerDetailSerializer(ProducerSerializer):
    """Producer with the farms it owns."""

    farms = ProducerFarmSerializer(many=True, read_only=True)

    class Meta(ProducerSerializer.Meta):
        fields = ProducerSerializer.Meta.fields + ['farms']
