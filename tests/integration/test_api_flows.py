"""
API Flow Integration Tests

Exercises the HTTP surface end to end:
- Registering producers, farms, cultures and planted crops
- Paginating and filtering lists
- Reading the dashboard and its chart data
- Error payloads for missing entities and infrastructure failures

SCENARIO:
=========
Two producers register three farms:
- Fazenda Santa Rita, SP, 100 ha (70 arable, 30 vegetation)
- Fazenda Boa Esperança, RJ, 200 ha (150 arable, 50 vegetation)
- Sítio Pequeno, SP, 20 ha (10 arable, 5 vegetation)

Soy and corn are planted; coffee is registered but never planted.
"""

from unittest.mock import patch

import pytest
from django.db import OperationalError
from rest_framework import status

from dashboards.services import DashboardAggregationService

pytestmark = pytest.mark.django_db


# =============================================================================
# HELPERS
# =============================================================================

def create_producer(client, name, document, document_type='CPF'):
    response = client.post('/api/producers/', {
        'producer_name': name,
        'document': document,
        'document_type': document_type,
    })
    assert response.status_code == status.HTTP_201_CREATED, response.data
    return response.data


def create_farm(client, producer, name, state, total, arable, vegetation, city='Campinas'):
    response = client.post('/api/farms/', {
        'producer_id': producer['id'],
        'farm_name': name,
        'city': city,
        'state': state,
        'total_area': total,
        'arable_area': arable,
        'vegetation_area': vegetation,
    })
    assert response.status_code == status.HTTP_201_CREATED, response.data
    return response.data


def create_culture(client, name):
    response = client.post('/api/cultures/', {'name': name})
    assert response.status_code == status.HTTP_201_CREATED, response.data
    return response.data


def plant(client, farm, culture, area, year=2024):
    return client.post('/api/planted-crops/', {
        'farm_id': farm['id'],
        'culture_id': culture['id'],
        'planted_area': area,
        'harvest_year': year,
    })


@pytest.fixture
def registered_farms(api_client):
    joao = create_producer(api_client, 'João Silva', '123.456.789-09')
    agro = create_producer(api_client, 'Agro Rio Ltda', '12.345.678/0001-95', 'CNPJ')

    santa_rita = create_farm(api_client, joao, 'Fazenda Santa Rita', 'SP', '100', '70', '30')
    boa_esperanca = create_farm(api_client, agro, 'Fazenda Boa Esperança', 'RJ', '200', '150', '50')
    pequeno = create_farm(api_client, joao, 'Sítio Pequeno', 'SP', '20', '10', '5')

    soy = create_culture(api_client, 'Soy')
    corn = create_culture(api_client, 'Corn')
    create_culture(api_client, 'Coffee')

    assert plant(api_client, santa_rita, soy, '60').status_code == status.HTTP_201_CREATED
    assert plant(api_client, boa_esperanca, soy, '100').status_code == status.HTTP_201_CREATED
    assert plant(api_client, boa_esperanca, corn, '50').status_code == status.HTTP_201_CREATED

    return {
        'producers': [joao, agro],
        'farms': [santa_rita, boa_esperanca, pequeno],
        'cultures': {'soy': soy, 'corn': corn},
    }


# =============================================================================
# DASHBOARD
# =============================================================================

class TestDashboardFlow:

    def test_dashboard_totals(self, api_client, registered_farms):
        response = api_client.get('/api/dashboard/')

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data['totalFarms'] == 3
        assert data['totalArea'] == 320
        assert data['byLandUse'] == {'arableArea': 230, 'vegetationArea': 85}
        assert sorted(data['byState'], key=lambda row: row['name']) == [
            {'name': 'RJ', 'value': 1},
            {'name': 'SP', 'value': 2},
        ]
        assert data['byCulture'] == [
            {'name': 'Corn', 'value': 50},
            {'name': 'Soy', 'value': 160},
        ]

    def test_empty_dashboard(self, api_client):
        response = api_client.get('/api/dashboard/')

        assert response.json() == {
            'totalFarms': 0,
            'totalArea': 0,
            'byState': [],
            'byCulture': [],
            'byLandUse': {'arableArea': 0, 'vegetationArea': 0},
        }

    def test_chart_data(self, api_client, registered_farms):
        response = api_client.get('/api/dashboard/charts/')

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data['byState']['mode'] == 'pie'
        percentages = {item['name']: item['percentage'] for item in data['byState']['items']}
        assert percentages == {'RJ': 33.3, 'SP': 66.7}
        assert data['byLandUse']['total'] == 315
        assert data['byCulture']['items'][0]['tooltip'] == '50 (23.8%)'

    def test_chart_data_without_farms(self, api_client):
        response = api_client.get('/api/dashboard/charts/')

        data = response.json()
        assert data['byState']['mode'] == 'empty'
        assert data['byLandUse']['mode'] == 'list'

    def test_database_failure_returns_500(self, api_client, registered_farms):
        with patch.object(
            DashboardAggregationService, 'sum_total_area',
            side_effect=OperationalError('server closed the connection unexpectedly'),
        ):
            response = api_client.get('/api/dashboard/')

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        body = response.json()
        assert body['statusCode'] == 500
        assert body['error'] == 'Internal Server Error'
        assert body['path'] == '/api/dashboard/'
        assert 'server closed' not in body['message']


# =============================================================================
# LISTS
# =============================================================================

class TestListFlow:

    def test_culture_pages(self, api_client):
        for name in ('Soy', 'Corn', 'Coffee', 'Cotton', 'Rice', 'Beans', 'Wheat'):
            create_culture(api_client, name)

        response = api_client.get('/api/cultures/', {'page': 1, 'limit': 3})

        assert len(response.data['data']) == 3
        assert response.json()['meta'] == {
            'page': 1, 'limit': 3, 'total': 7, 'totalPages': 3, 'hasNext': True, 'hasPrev': False,
        }

    def test_farm_area_range(self, api_client):
        producer = create_producer(api_client, 'Range Producer', '98765432100')
        for total in ('50', '100', '500', '2000'):
            create_farm(api_client, producer, f'Farm {total}', 'MT', total, '0', '0')

        response = api_client.get('/api/farms/', {'min_area': '100', 'max_area': '1000'})

        names = sorted(row['farm_name'] for row in response.data['data'])
        assert names == ['Farm 100', 'Farm 500']

    def test_filters_combine_with_and(self, api_client, registered_farms):
        all_farms = api_client.get('/api/farms/').json()['meta']['total']
        in_sp = api_client.get('/api/farms/', {'state': 'SP'}).json()['data']
        large = api_client.get('/api/farms/', {'min_area': '50'}).json()['data']
        both = api_client.get('/api/farms/', {'state': 'SP', 'min_area': '50'}).json()['data']

        assert all_farms == 3
        expected = {row['id'] for row in in_sp} & {row['id'] for row in large}
        assert {row['id'] for row in both} == expected

    def test_over_capacity_planting_is_rejected(self, api_client, registered_farms):
        santa_rita = registered_farms['farms'][0]
        corn = registered_farms['cultures']['corn']

        response = plant(api_client, santa_rita, corn, '41')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['fields'][0]['rule'] == 'farm_capacity'


# =============================================================================
# DELETES
# =============================================================================

class TestDeleteFlow:

    def test_deleting_a_producer_updates_the_dashboard(self, api_client, registered_farms):
        agro = registered_farms['producers'][1]

        response = api_client.delete(f"/api/producers/{agro['id']}/")
        assert response.status_code == status.HTTP_204_NO_CONTENT

        data = api_client.get('/api/dashboard/').json()
        assert data['totalFarms'] == 2
        assert data['byState'] == [{'name': 'SP', 'value': 2}]
        assert data['byCulture'] == [{'name': 'Soy', 'value': 60}]

    def test_missing_entity_payload(self, api_client):
        response = api_client.get('/api/farms/00000000-0000-0000-0000-000000000000/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        body = response.json()
        assert body['message'] == 'Farm with ID 00000000-0000-0000-0000-000000000000 not found'
        assert body['path'] == '/api/farms/00000000-0000-0000-0000-000000000000/'
