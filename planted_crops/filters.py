import django_filters

from .models import PlantedCrop


class PlantedCropFilter(django_filters.FilterSet):
    farm_id = django_filters.UUIDFilter(field_name='farm_id')
    culture_id = django_filters.UUIDFilter(field_name='culture_id')
    harvest_year = django_filters.NumberFilter(field_name='harvest_year')
    min_area = django_filters.NumberFilter(field_name='planted_area', lookup_expr='gte')
    max_area = django_filters.NumberFilter(field_name='planted_area', lookup_expr='lte')

    class Meta:
        model = PlantedCrop
        fields = []
