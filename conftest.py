"""
Shared pytest fixtures for API tests.
"""
import itertools
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

_documents = itertools.count(10000000000)


@pytest.fixture
def api_client():
    """API client for making requests."""
    return APIClient()


@pytest.fixture
def make_producer(db):
    """Create producers with unique CPF documents."""
    from producers.models import Producer

    def _make_producer(producer_name='Test Producer', document=None, document_type=Producer.CPF):
        if document is None:
            document = str(next(_documents))
            if document_type == Producer.CNPJ:
                document = document + '000'
        return Producer.objects.create(
            producer_name=producer_name,
            document=document,
            document_type=document_type,
        )

    return _make_producer


@pytest.fixture
def make_farm(db, make_producer):
    """Create farms; a producer is created when none is given."""
    from farms.models import Farm

    def _make_farm(producer=None, farm_name='Test Farm', city='Campinas', state='SP',
                   total_area='1000', arable_area='600', vegetation_area='300'):
        return Farm.objects.create(
            producer=producer or make_producer(),
            farm_name=farm_name,
            city=city,
            state=state,
            total_area=Decimal(total_area),
            arable_area=Decimal(arable_area),
            vegetation_area=Decimal(vegetation_area),
        )

    return _make_farm


@pytest.fixture
def make_culture(db):
    from cultures.models import Culture

    def _make_culture(name='Soy'):
        return Culture.objects.create(name=name)

    return _make_culture


@pytest.fixture
def make_planted_crop(db):
    from planted_crops.models import PlantedCrop

    def _make_planted_crop(farm, culture, planted_area='100', harvest_year=2024):
        return PlantedCrop.objects.create(
            farm=farm,
            culture=culture,
            planted_area=Decimal(planted_area),
            harvest_year=harvest_year,
        )

    return _make_planted_crop
