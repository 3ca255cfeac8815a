"""
Tests for the farms API: land-use rule, filters and deletes.
"""
import uuid
from decimal import Decimal

import pytest
from rest_framework import status

from planted_crops.models import PlantedCrop
from .models import Farm
from .validators import validate_land_use

pytestmark = pytest.mark.django_db

LIST_URL = '/api/farms/'


def detail_url(farm_id):
    return f'/api/farms/{farm_id}/'


@pytest.fixture
def farm_payload(make_producer):
    producer = make_producer()
    return {
        'producer_id': str(producer.pk),
        'farm_name': 'Fazenda Boa Vista',
        'city': 'Ribeirão Preto',
        'state': 'sp',
        'total_area': '1000.00',
        'arable_area': '700.00',
        'vegetation_area': '300.00',
    }


class TestLandUseRule:

    def test_areas_that_fit(self):
        assert validate_land_use(Decimal('100'), Decimal('60'), Decimal('40')) == []

    def test_areas_that_overflow(self):
        issues = validate_land_use(Decimal('100'), Decimal('60'), Decimal('41'))
        assert [(i.field, i.rule) for i in issues] == [('arable_area', 'land_use')]

    def test_missing_values_count_as_zero(self):
        assert validate_land_use(Decimal('0'), None, None) == []


class TestFarmCreate:

    def test_create(self, api_client, farm_payload):
        response = api_client.post(LIST_URL, farm_payload)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['state'] == 'SP'
        assert response.data['producer']['id'] == farm_payload['producer_id']
        assert Farm.objects.count() == 1

    def test_land_use_overflow_is_rejected(self, api_client, farm_payload):
        farm_payload['vegetation_area'] = '300.01'

        response = api_client.post(LIST_URL, farm_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['fields'][0]['rule'] == 'land_use'
        assert Farm.objects.count() == 0

    def test_negative_area_is_rejected(self, api_client, farm_payload):
        farm_payload['total_area'] = '-1'

        response = api_client.post(LIST_URL, farm_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['fields'][0]['field'] == 'total_area'

    def test_invalid_state(self, api_client, farm_payload):
        farm_payload['state'] = 'São Paulo'

        response = api_client.post(LIST_URL, farm_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['fields'][0]['field'] == 'state'

    def test_unknown_producer(self, api_client, farm_payload):
        farm_payload['producer_id'] = str(uuid.uuid4())

        response = api_client.post(LIST_URL, farm_payload)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['message'].startswith('Producer with ID')


class TestFarmUpdate:

    def test_partial_update_checks_merged_areas(self, api_client, make_farm):
        farm = make_farm(total_area='1000', arable_area='600', vegetation_area='300')

        response = api_client.patch(detail_url(farm.pk), {'vegetation_area': '500'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        farm.refresh_from_db()
        assert farm.vegetation_area == Decimal('300')

    def test_partial_update_within_limits(self, api_client, make_farm):
        farm = make_farm(total_area='1000', arable_area='600', vegetation_area='300')

        response = api_client.patch(detail_url(farm.pk), {'total_area': '2000', 'city': 'Sorriso'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_area'] == Decimal('2000.00')
        assert response.data['city'] == 'Sorriso'

    def test_update_missing_farm(self, api_client):
        response = api_client.patch(detail_url(uuid.uuid4()), {'city': 'Sorriso'})
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_total_area_cannot_drop_below_planted_area(
        self, api_client, make_farm, make_culture, make_planted_crop
    ):
        farm = make_farm(total_area='1000', arable_area='600', vegetation_area='300')
        make_planted_crop(farm, make_culture('Soy'), planted_area='900')

        response = api_client.patch(detail_url(farm.pk), {
            'total_area': '100', 'arable_area': '50', 'vegetation_area': '50',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert [(i['field'], i['rule']) for i in response.data['fields']] == [
            ('total_area', 'farm_capacity'),
        ]
        farm.refresh_from_db()
        assert farm.total_area == Decimal('1000')

    def test_total_area_can_shrink_to_planted_area(
        self, api_client, make_farm, make_culture, make_planted_crop
    ):
        farm = make_farm(total_area='1000', arable_area='600', vegetation_area='300')
        make_planted_crop(farm, make_culture('Soy'), planted_area='900')

        response = api_client.patch(detail_url(farm.pk), {'total_area': '900'})

        assert response.status_code == status.HTTP_200_OK
        farm.refresh_from_db()
        assert farm.total_area == Decimal('900')


class TestFarmList:

    def test_area_range(self, api_client, make_farm):
        for total in ('50', '100', '500', '2000'):
            make_farm(total_area=total, arable_area='0', vegetation_area='0')

        response = api_client.get(LIST_URL, {'min_area': '100', 'max_area': '1000', 'sort_by': 'total_area',
                                             'sort_order': 'ASC'})

        assert response.status_code == status.HTTP_200_OK
        assert [row['total_area'] for row in response.data['data']] == [Decimal('100.00'), Decimal('500.00')]
        assert response.data['meta']['total'] == 2

    def test_state_and_producer_filters(self, api_client, make_producer, make_farm):
        producer = make_producer()
        make_farm(producer=producer, state='MT')
        make_farm(producer=producer, state='GO')
        make_farm(state='MT')

        response = api_client.get(LIST_URL, {'state': 'MT', 'producer_id': str(producer.pk)})

        assert response.data['meta']['total'] == 1

    def test_culture_filter(self, api_client, make_farm, make_culture, make_planted_crop):
        with_soy = make_farm(farm_name='With Soy')
        make_farm(farm_name='Empty')
        soy = make_culture('Soy')
        make_planted_crop(with_soy, soy, harvest_year=2023)
        make_planted_crop(with_soy, soy, harvest_year=2024)

        response = api_client.get(LIST_URL, {'culture_id': str(soy.pk)})

        assert [row['farm_name'] for row in response.data['data']] == ['With Soy']

    def test_malformed_filter(self, api_client):
        response = api_client.get(LIST_URL, {'min_area': 'abc'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['fields'][0]['field'] == 'min_area'

    def test_state_filter_ignores_case(self, api_client, make_farm):
        make_farm(state='SP')
        make_farm(state='MG')

        response = api_client.get(LIST_URL, {'state': 'sp'})

        assert response.status_code == status.HTTP_200_OK
        assert [row['state'] for row in response.data['data']] == ['SP']


class TestFarmDelete:

    def test_delete_removes_planted_crops(self, api_client, make_farm, make_culture, make_planted_crop):
        farm = make_farm()
        make_planted_crop(farm, make_culture('Corn'))

        response = api_client.delete(detail_url(farm.pk))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Farm.objects.filter(pk=farm.pk).exists()
        assert PlantedCrop.objects.count() == 0
