"""
Tests for the planted crops API and the farm capacity rule.
"""
import uuid
from decimal import Decimal
from unittest.mock import patch

import pytest
from rest_framework import status

from farms.models import Farm
from .models import PlantedCrop
from .validators import validate_planting_capacity

pytestmark = pytest.mark.django_db

LIST_URL = '/api/planted-crops/'


def detail_url(planted_crop_id):
    return f'/api/planted-crops/{planted_crop_id}/'


@pytest.fixture
def farm(make_farm):
    return make_farm(total_area='100', arable_area='80', vegetation_area='20')


@pytest.fixture
def soy(make_culture):
    return make_culture('Soy')


class TestPlantingCapacity:

    def test_fits(self, farm, soy, make_planted_crop):
        make_planted_crop(farm, soy, planted_area='60')
        assert validate_planting_capacity(farm, Decimal('40')) == []

    def test_overflows(self, farm, soy, make_planted_crop):
        make_planted_crop(farm, soy, planted_area='60')
        issues = validate_planting_capacity(farm, Decimal('40.01'))
        assert [(i.field, i.rule) for i in issues] == [('planted_area', 'farm_capacity')]

    def test_updated_record_is_excluded(self, farm, soy, make_planted_crop):
        crop = make_planted_crop(farm, soy, planted_area='60')
        assert validate_planting_capacity(farm, Decimal('100'), exclude_id=crop.pk) == []


class TestPlantedCropCreate:

    def test_create(self, api_client, farm, soy):
        response = api_client.post(LIST_URL, {
            'farm_id': str(farm.pk),
            'culture_id': str(soy.pk),
            'planted_area': '55.5',
            'harvest_year': 2024,
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['culture_name'] == 'Soy'
        assert response.data['farm_name'] == farm.farm_name
        assert response.data['planted_area'] == Decimal('55.50')

    def test_zero_area_is_allowed(self, api_client, farm, soy):
        response = api_client.post(LIST_URL, {
            'farm_id': str(farm.pk), 'culture_id': str(soy.pk), 'planted_area': '0', 'harvest_year': 2024,
        })
        assert response.status_code == status.HTTP_201_CREATED

    def test_capacity_exceeded(self, api_client, farm, soy, make_planted_crop):
        make_planted_crop(farm, soy, planted_area='70')

        response = api_client.post(LIST_URL, {
            'farm_id': str(farm.pk), 'culture_id': str(soy.pk), 'planted_area': '31', 'harvest_year': 2024,
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['fields'][0]['rule'] == 'farm_capacity'
        assert PlantedCrop.objects.count() == 1

    def test_harvest_year_before_2000(self, api_client, farm, soy):
        response = api_client.post(LIST_URL, {
            'farm_id': str(farm.pk), 'culture_id': str(soy.pk), 'planted_area': '1', 'harvest_year': 1999,
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['fields'][0]['field'] == 'harvest_year'

    def test_unknown_farm(self, api_client, soy):
        response = api_client.post(LIST_URL, {
            'farm_id': str(uuid.uuid4()), 'culture_id': str(soy.pk), 'planted_area': '1', 'harvest_year': 2024,
        })
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_unknown_culture(self, api_client, farm):
        response = api_client.post(LIST_URL, {
            'farm_id': str(farm.pk), 'culture_id': str(uuid.uuid4()), 'planted_area': '1', 'harvest_year': 2024,
        })
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['message'].startswith('Culture with ID')


class TestPlantingLocksFarm:
    """Capacity check and write happen under a row lock on the farm."""

    def test_create_locks_the_farm(self, api_client, farm, soy):
        with patch.object(Farm.objects, 'select_for_update', wraps=Farm.objects.select_for_update) as lock:
            response = api_client.post(LIST_URL, {
                'farm_id': str(farm.pk), 'culture_id': str(soy.pk), 'planted_area': '60', 'harvest_year': 2024,
            })

        assert response.status_code == status.HTTP_201_CREATED
        lock.assert_called_once_with()

    def test_update_locks_the_farm(self, api_client, farm, soy, make_planted_crop):
        crop = make_planted_crop(farm, soy, planted_area='10')

        with patch.object(Farm.objects, 'select_for_update', wraps=Farm.objects.select_for_update) as lock:
            response = api_client.patch(detail_url(crop.pk), {'planted_area': '20'})

        assert response.status_code == status.HTTP_200_OK
        lock.assert_called_once_with()

    def test_second_planting_sees_the_first(self, api_client, make_farm, soy):
        farm = make_farm(total_area='1000', arable_area='600', vegetation_area='300')
        payload = {'farm_id': str(farm.pk), 'culture_id': str(soy.pk), 'planted_area': '600', 'harvest_year': 2024}

        first = api_client.post(LIST_URL, payload)
        second = api_client.post(LIST_URL, payload)

        assert first.status_code == status.HTTP_201_CREATED
        assert second.status_code == status.HTTP_400_BAD_REQUEST
        assert PlantedCrop.objects.filter(farm=farm).count() == 1

    def test_failed_insert_rolls_back(self, farm, soy):
        from django.db import OperationalError
        from .serializers import PlantedCropSerializer
        from .services import PlantedCropService

        payload = {'farm_id': str(farm.pk), 'culture_id': str(soy.pk), 'planted_area': '10', 'harvest_year': 2024}

        with patch.object(PlantedCropSerializer, 'save', side_effect=OperationalError('database is locked')):
            with pytest.raises(OperationalError):
                PlantedCropService().create_planted_crop(payload)

        assert not PlantedCrop.objects.exists()


class TestPlantedCropUpdate:

    def test_growing_own_area_within_capacity(self, api_client, farm, soy, make_planted_crop):
        crop = make_planted_crop(farm, soy, planted_area='60')

        response = api_client.patch(detail_url(crop.pk), {'planted_area': '100'})

        assert response.status_code == status.HTTP_200_OK
        crop.refresh_from_db()
        assert crop.planted_area == Decimal('100')

    def test_growing_past_capacity(self, api_client, farm, soy, make_planted_crop):
        make_planted_crop(farm, soy, planted_area='30')
        crop = make_planted_crop(farm, soy, planted_area='60')

        response = api_client.patch(detail_url(crop.pk), {'planted_area': '71'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestPlantedCropList:

    def test_filters(self, api_client, farm, soy, make_culture, make_planted_crop):
        corn = make_culture('Corn')
        make_planted_crop(farm, soy, planted_area='10', harvest_year=2023)
        make_planted_crop(farm, soy, planted_area='20', harvest_year=2024)
        make_planted_crop(farm, corn, planted_area='30', harvest_year=2024)

        response = api_client.get(LIST_URL, {'culture_id': str(soy.pk), 'harvest_year': '2024'})

        assert response.data['meta']['total'] == 1
        assert response.data['data'][0]['planted_area'] == Decimal('20.00')

    def test_area_range(self, api_client, farm, soy, make_planted_crop):
        for area in ('5', '15', '25'):
            make_planted_crop(farm, soy, planted_area=area)

        response = api_client.get(LIST_URL, {'min_area': '10', 'max_area': '20'})

        assert [row['planted_area'] for row in response.data['data']] == [Decimal('15.00')]

    def test_delete(self, api_client, farm, soy, make_planted_crop):
        crop = make_planted_crop(farm, soy)

        response = api_client.delete(detail_url(crop.pk))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not PlantedCrop.objects.exists()
