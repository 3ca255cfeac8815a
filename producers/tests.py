"""
Tests for the producers API: CRUD, document rules and cascading deletes.
"""
import uuid

import pytest
from django.test import override_settings
from rest_framework import status

from farms.models import Farm
from planted_crops.models import PlantedCrop
from .models import Producer
from .validators import normalize_document, validate_document

pytestmark = pytest.mark.django_db

LIST_URL = '/api/producers/'


def detail_url(producer_id):
    return f'/api/producers/{producer_id}/'


def reject_all_checksums(document, document_type):
    return False


class TestDocumentValidation:

    def test_normalize_strips_punctuation(self):
        assert normalize_document('123.456.789-09') == '12345678909'
        assert normalize_document('12.345.678/0001-95') == '12345678000195'

    def test_valid_lengths(self):
        assert validate_document('123.456.789-09', Producer.CPF) == []
        assert validate_document('12.345.678/0001-95', Producer.CNPJ) == []

    def test_wrong_length(self):
        issues = validate_document('1234', Producer.CPF)
        assert [(i.field, i.rule) for i in issues] == [('document', 'length')]

    def test_cnpj_length_under_cpf_type(self):
        issues = validate_document('12345678000195', Producer.CPF)
        assert issues[0].rule == 'length'

    def test_empty_document(self):
        assert validate_document('..-', Producer.CPF)[0].rule == 'required'

    @override_settings(DOCUMENT_CHECKSUM_VALIDATOR='producers.tests.reject_all_checksums')
    def test_configured_checksum_validator_is_used(self):
        issues = validate_document('12345678909', Producer.CPF)
        assert [(i.field, i.rule) for i in issues] == [('document', 'checksum')]


class TestProducerCreate:

    def test_create_normalizes_document(self, api_client):
        response = api_client.post(LIST_URL, {
            'producer_name': 'João Silva',
            'document': '123.456.789-09',
            'document_type': 'CPF',
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['document'] == '12345678909'
        assert Producer.objects.filter(document='12345678909').exists()

    def test_duplicate_document_conflicts(self, api_client, make_producer):
        make_producer(document='12345678909')

        response = api_client.post(LIST_URL, {
            'producer_name': 'Someone Else',
            'document': '123.456.789-09',
            'document_type': 'CPF',
        })

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['error'] == 'Conflict'

    def test_wrong_document_length_is_rejected(self, api_client):
        response = api_client.post(LIST_URL, {
            'producer_name': 'Agro Ltda',
            'document': '12345678909',
            'document_type': 'CNPJ',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['fields'] == [{
            'field': 'document',
            'rule': 'length',
            'message': 'A CNPJ must have 14 digits, got 11.',
        }]

    def test_missing_fields_are_reported(self, api_client):
        response = api_client.post(LIST_URL, {})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        fields = {issue['field'] for issue in response.data['fields']}
        assert fields == {'producer_name', 'document', 'document_type'}

    def test_blank_name_is_rejected(self, api_client):
        response = api_client.post(LIST_URL, {
            'producer_name': '   ',
            'document': '12345678909',
            'document_type': 'CPF',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['fields'][0]['field'] == 'producer_name'


class TestProducerList:

    def test_paginated_shape(self, api_client, make_producer):
        for index in range(3):
            make_producer(producer_name=f'Producer {index}')

        response = api_client.get(LIST_URL, {'limit': 2})

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['data']) == 2
        assert response.data['meta'] == {
            'page': 1, 'limit': 2, 'total': 3, 'totalPages': 2, 'hasNext': True, 'hasPrev': False,
        }

    def test_filters(self, api_client, make_producer):
        make_producer(producer_name='Fazendas Reunidas', document_type=Producer.CNPJ)
        make_producer(producer_name='Maria Souza')
        make_producer(producer_name='Mario Reunidas')

        response = api_client.get(LIST_URL, {'producer_name': 'reunidas', 'document_type': 'CPF'})

        assert response.status_code == status.HTTP_200_OK
        assert [p['producer_name'] for p in response.data['data']] == ['Mario Reunidas']

    def test_sorting(self, api_client, make_producer):
        for name in ('Bruno', 'Ana', 'Carla'):
            make_producer(producer_name=name)

        response = api_client.get(LIST_URL, {'sort_by': 'producer_name', 'sort_order': 'ASC'})
        assert [p['producer_name'] for p in response.data['data']] == ['Ana', 'Bruno', 'Carla']

    def test_invalid_sort_field(self, api_client):
        response = api_client.get(LIST_URL, {'sort_by': 'secret'})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['fields'][0]['field'] == 'sort_by'


class TestProducerDetail:

    def test_retrieve_includes_farms(self, api_client, make_producer, make_farm):
        producer = make_producer()
        make_farm(producer=producer, farm_name='Santa Rita')

        response = api_client.get(detail_url(producer.pk))

        assert response.status_code == status.HTTP_200_OK
        assert [f['farm_name'] for f in response.data['farms']] == ['Santa Rita']

    def test_missing_producer(self, api_client):
        missing = uuid.uuid4()
        response = api_client.get(detail_url(missing))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['message'] == f'Producer with ID {missing} not found'

    def test_partial_update(self, api_client, make_producer):
        producer = make_producer(producer_name='Old Name')

        response = api_client.patch(detail_url(producer.pk), {'producer_name': 'New Name'})

        assert response.status_code == status.HTTP_200_OK
        producer.refresh_from_db()
        assert producer.producer_name == 'New Name'

    def test_update_to_taken_document_conflicts(self, api_client, make_producer):
        make_producer(document='11111111111')
        producer = make_producer(document='22222222222')

        response = api_client.patch(detail_url(producer.pk), {'document': '111.111.111-11'})

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_update_keeping_own_document(self, api_client, make_producer):
        producer = make_producer(document='22222222222')

        response = api_client.put(detail_url(producer.pk), {
            'producer_name': 'Renamed',
            'document': '222.222.222-22',
            'document_type': 'CPF',
        })

        assert response.status_code == status.HTTP_200_OK


class TestProducerDelete:

    def test_delete_removes_farms_and_planted_crops(
        self, api_client, make_producer, make_farm, make_culture, make_planted_crop
    ):
        producer = make_producer()
        farm = make_farm(producer=producer)
        kept_farm = make_farm()
        soy = make_culture('Soy')
        make_planted_crop(farm, soy)
        make_planted_crop(kept_farm, soy)

        response = api_client.delete(detail_url(producer.pk))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Producer.objects.filter(pk=producer.pk).exists()
        assert not Farm.objects.filter(pk=farm.pk).exists()
        assert PlantedCrop.objects.count() == 1
        assert Farm.objects.filter(pk=kept_farm.pk).exists()

    def test_failed_delete_rolls_back(self, make_producer, make_farm, make_culture, make_planted_crop):
        from unittest.mock import patch
        from django.db import OperationalError
        from .services import ProducerService

        producer = make_producer()
        farm = make_farm(producer=producer)
        make_planted_crop(farm, make_culture('Soy'))

        with patch.object(Producer, 'delete', side_effect=OperationalError('disk I/O error')):
            with pytest.raises(OperationalError):
                ProducerService().delete_producer(producer.pk)

        assert Farm.objects.filter(pk=farm.pk).exists()
        assert PlantedCrop.objects.filter(farm=farm).count() == 1

    def test_delete_missing_producer(self, api_client):
        response = api_client.delete(detail_url(uuid.uuid4()))
        assert response.status_code == status.HTTP_404_NOT_FOUND
