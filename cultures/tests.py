"""
Tests for the cultures API.
"""
import uuid

import pytest
from rest_framework import status

from planted_crops.models import PlantedCrop
from .models import Culture

pytestmark = pytest.mark.django_db

LIST_URL = '/api/cultures/'


def detail_url(culture_id):
    return f'/api/cultures/{culture_id}/'


class TestCultureCrud:

    def test_create(self, api_client):
        response = api_client.post(LIST_URL, {'name': ' Coffee '})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['name'] == 'Coffee'

    def test_duplicate_name_conflicts(self, api_client, make_culture):
        make_culture('Soy')

        response = api_client.post(LIST_URL, {'name': 'Soy'})

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['message'] == 'Culture named Soy already exists'

    def test_rename_collision_conflicts(self, api_client, make_culture):
        make_culture('Soy')
        corn = make_culture('Corn')

        response = api_client.put(detail_url(corn.pk), {'name': 'Soy'})

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_rename(self, api_client, make_culture):
        corn = make_culture('Corn')

        response = api_client.patch(detail_url(corn.pk), {'name': 'Maize'})

        assert response.status_code == status.HTTP_200_OK
        corn.refresh_from_db()
        assert corn.name == 'Maize'

    def test_blank_name(self, api_client):
        response = api_client.post(LIST_URL, {'name': '   '})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_retrieve_missing(self, api_client):
        response = api_client.get(detail_url(uuid.uuid4()))
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_removes_planted_crops(self, api_client, make_farm, make_culture, make_planted_crop):
        soy = make_culture('Soy')
        corn = make_culture('Corn')
        farm = make_farm()
        make_planted_crop(farm, soy)
        make_planted_crop(farm, corn)

        response = api_client.delete(detail_url(soy.pk))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Culture.objects.filter(pk=soy.pk).exists()
        assert list(PlantedCrop.objects.values_list('culture__name', flat=True)) == ['Corn']


class TestCultureList:

    def test_default_order_is_oldest_first(self, api_client, make_culture):
        from datetime import timedelta
        from django.utils import timezone

        start = timezone.now()
        for offset, name in enumerate(('Soy', 'Corn', 'Coffee')):
            culture = make_culture(name)
            Culture.objects.filter(pk=culture.pk).update(created_at=start + timedelta(minutes=offset))

        response = api_client.get(LIST_URL)

        assert [c['name'] for c in response.data['data']] == ['Soy', 'Corn', 'Coffee']

    def test_name_filter(self, api_client, make_culture):
        for name in ('Soy', 'Sugarcane', 'Corn'):
            make_culture(name)

        response = api_client.get(LIST_URL, {'name': 's', 'sort_by': 'name'})

        assert [c['name'] for c in response.data['data']] == ['Soy', 'Sugarcane']

    def test_planted_area_bound_matches_any_crop(self, api_client, make_farm, make_culture, make_planted_crop):
        farm = make_farm(total_area='10000')
        soy = make_culture('Soy')
        corn = make_culture('Corn')
        make_planted_crop(farm, soy, planted_area='10')
        make_planted_crop(farm, soy, planted_area='250')
        make_planted_crop(farm, corn, planted_area='90')

        response = api_client.get(LIST_URL, {'min_planted_area': '100'})

        assert [c['name'] for c in response.data['data']] == ['Soy']
        assert response.data['meta']['total'] == 1
