import django_filters

from .models import Producer


class ProducerFilter(django_filters.FilterSet):
    producer_name = django_filters.CharFilter(lookup_expr='icontains')
    document = django_filters.CharFilter(lookup_expr='icontains')
    document_type = django_filters.ChoiceFilter(choices=Producer.DOCUMENT_TYPE_CHOICES)

    class Meta:
        model = Producer
        fields = []
