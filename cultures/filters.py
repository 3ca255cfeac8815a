import django_filters

from core.filters import RelatedExistsNumberFilter
from .models import Culture


class CultureFilter(django_filters.FilterSet):
    name = django_filters.CharFilter(lookup_expr='icontains')
    # cultures with at least one planted crop inside the bound
    min_planted_area = RelatedExistsNumberFilter(field_name='planted_crops__planted_area', lookup_expr='gte')
    max_planted_area = RelatedExistsNumberFilter(field_name='planted_crops__planted_area', lookup_expr='lte')

    class Meta:
        model = Culture
        fields = []
