"""
Tests for the dashboard aggregation service.
Covers empty sources, grouping rules, failure propagation and concurrency.
"""
import asyncio
from decimal import Decimal

import pytest
from asgiref.sync import async_to_sync
from django.db import OperationalError

from farms.models import Farm
from dashboards.services import ChartPoint, DashboardAggregationService, LandUse
from dashboards.services.aggregation import as_number


@pytest.mark.django_db
class TestDashboardAggregation:

    def test_empty_sources(self):
        dashboard = DashboardAggregationService().get_dashboard()

        assert dashboard.total_farms == 0
        assert dashboard.total_area == 0
        assert dashboard.by_state == []
        assert dashboard.by_culture == []
        assert dashboard.by_land_use.arable_area == 0
        assert dashboard.by_land_use.vegetation_area == 0

    def test_two_farms(self, make_farm):
        make_farm(state='SP', total_area='100', arable_area='70', vegetation_area='30')
        make_farm(state='RJ', total_area='200', arable_area='150', vegetation_area='50')

        dashboard = DashboardAggregationService().get_dashboard()

        assert dashboard.total_farms == 2
        assert dashboard.total_area == 300
        assert dashboard.by_land_use.arable_area == 220
        assert dashboard.by_land_use.vegetation_area == 80
        assert sorted(dashboard.by_state, key=lambda p: p.name) == [ChartPoint('RJ', 1), ChartPoint('SP', 1)]

    def test_group_by_state_has_no_zero_entries(self, make_farm):
        make_farm(state='SP')
        make_farm(state='SP')
        make_farm(state='RJ')

        dashboard = DashboardAggregationService().get_dashboard()

        assert {p.name: p.value for p in dashboard.by_state} == {'SP': 2, 'RJ': 1}

    def test_culture_needs_at_least_one_planted_crop(self, make_farm, make_culture, make_planted_crop):
        farm = make_farm(total_area='1000')
        soy = make_culture('Soy')
        fallow = make_culture('Fallow')
        make_culture('Coffee')
        make_planted_crop(farm, soy, planted_area='120.5')
        make_planted_crop(farm, soy, planted_area='79.5')
        make_planted_crop(farm, fallow, planted_area='0')

        dashboard = DashboardAggregationService().get_dashboard()

        assert dashboard.by_culture == [ChartPoint('Fallow', 0), ChartPoint('Soy', 200)]

    def test_values_are_plain_numbers(self, make_farm):
        make_farm(total_area='10.25', arable_area='5', vegetation_area='5')

        dashboard = DashboardAggregationService().get_dashboard()

        assert isinstance(dashboard.total_farms, int)
        assert isinstance(dashboard.total_area, float)
        assert dashboard.total_area == 10.25

    def test_injected_source_scopes_every_aggregate(self, make_farm):
        make_farm(state='SP', total_area='100', arable_area='10', vegetation_area='10')
        make_farm(state='MG', total_area='300', arable_area='10', vegetation_area='10')

        service = DashboardAggregationService(farms=Farm.objects.filter(state='MG'))
        dashboard = service.get_dashboard()

        assert dashboard.total_farms == 1
        assert dashboard.total_area == 300
        assert dashboard.by_state == [ChartPoint('MG', 1)]

    def test_land_use_never_exceeds_total(self, make_farm):
        make_farm(total_area='100', arable_area='60', vegetation_area='40')
        make_farm(total_area='50', arable_area='10', vegetation_area='0')

        dashboard = DashboardAggregationService().get_dashboard()
        land_use = dashboard.by_land_use

        assert land_use.arable_area + land_use.vegetation_area <= dashboard.total_area


class StubAggregationService(DashboardAggregationService):
    """Aggregation service with canned results and no database access."""

    def __init__(self):
        self.events = []

    async def _step(self, name, result):
        self.events.append(f'start:{name}')
        await asyncio.sleep(0.01)
        self.events.append(f'end:{name}')
        return result

    async def count_farms(self):
        return await self._step('count', 3)

    async def sum_total_area(self):
        return await self._step('area', 42.0)

    async def farms_by_state(self):
        return await self._step('state', [ChartPoint('SP', 3)])

    async def planted_area_by_culture(self):
        return await self._step('culture', [])

    async def land_use_totals(self):
        return await self._step('land_use', LandUse(20.0, 10.0))


class FailingAggregationService(StubAggregationService):

    async def sum_total_area(self):
        raise OperationalError('could not connect to server')


class TestAggregationConcurrency:

    def test_sub_computations_run_together(self):
        service = StubAggregationService()

        dashboard = async_to_sync(service.compute_dashboard)()

        assert all(event.startswith('start:') for event in service.events[:5])
        assert dashboard.total_farms == 3
        assert dashboard.total_area == 42.0
        assert dashboard.by_state == [ChartPoint('SP', 3)]

    def test_one_failure_fails_the_dashboard(self):
        service = FailingAggregationService()

        with pytest.raises(OperationalError):
            async_to_sync(service.compute_dashboard)()


class TestAsNumber:

    @pytest.mark.parametrize('raw, expected', [
        (None, 0),
        ('', 0),
        (Decimal('12.50'), 12.5),
        ('7.25', 7.25),
        (5, 5),
        (float('nan'), 0),
    ])
    def test_coercion(self, raw, expected):
        assert as_number(raw) == expected

    def test_ints_stay_ints(self):
        assert isinstance(as_number(4), int)
