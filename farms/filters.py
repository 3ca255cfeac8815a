from django import forms
import django_filters

from core.filters import RelatedExistsUUIDFilter
from .models import Farm


class StateCodeField(forms.CharField):
    """State codes are stored upper-cased."""

    def to_python(self, value):
        return super().to_python(value).upper()


class StateCodeFilter(django_filters.CharFilter):
    field_class = StateCodeField


class FarmFilter(django_filters.FilterSet):
    farm_name = django_filters.CharFilter(lookup_expr='icontains')
    city = django_filters.CharFilter(lookup_expr='icontains')
    state = StateCodeFilter(lookup_expr='exact')
    producer_id = django_filters.UUIDFilter(field_name='producer_id')
    min_area = django_filters.NumberFilter(field_name='total_area', lookup_expr='gte')
    max_area = django_filters.NumberFilter(field_name='total_area', lookup_expr='lte')
    # farms with at least one planted crop of this culture
    culture_id = RelatedExistsUUIDFilter(field_name='planted_crops__culture_id')

    class Meta:
        model = Farm
        fields = []
