"""
Dashboard Aggregation Service

Computes the cross-entity statistics shown on the dashboard:
- Total number of farms
- Total farm area
- Farms per state
- Planted area per culture
- Arable vs vegetation land use

The five aggregates are independent reads. They are issued together on the
event loop and joined before the response is built; if any of them fails the
whole dashboard fails.
"""

import asyncio
import logging
import math
from decimal import Decimal

from asgiref.sync import async_to_sync
from django.db.models import Count, DecimalField, Sum, Value
from django.db.models.functions import Coalesce

from cultures.models import Culture
from farms.models import Farm

logger = logging.getLogger(__name__)

AREA_OUTPUT_FIELD = DecimalField(max_digits=14, decimal_places=2)


def as_number(value, default=0):
    """
    Coerce an aggregate value to int or float.

    Drivers may hand back Decimal or text for numeric aggregates, and SUM over
    no rows is NULL. None and NaN become ``default``; integers stay integers.
    """
    if value is None or value == '':
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    number = float(value)
    if math.isnan(number):
        return default
    return number


def _area_sum(field):
    return Coalesce(Sum(field), Value(Decimal('0')), output_field=AREA_OUTPUT_FIELD)


class ChartPoint:
    """A ``{name, value}`` pair for charts."""

    __slots__ = ('name', 'value')

    def __init__(self, name, value):
        self.name = name
        self.value = value

    def as_dict(self):
        return {'name': self.name, 'value': self.value}

    def __eq__(self, other):
        if not isinstance(other, ChartPoint):
            return NotImplemented
        return (self.name, self.value) == (other.name, other.value)

    def __hash__(self):
        return hash((self.name, self.value))

    def __repr__(self):
        return f"ChartPoint({self.name!r}, {self.value!r})"


class LandUse:
    """Arable and vegetation area summed over all farms."""

    def __init__(self, arable_area=0, vegetation_area=0):
        self.arable_area = arable_area
        self.vegetation_area = vegetation_area

    def as_points(self):
        return [
            ChartPoint('Arable area', self.arable_area),
            ChartPoint('Vegetation area', self.vegetation_area),
        ]


class DashboardAggregate:
    """Merged result of the five dashboard aggregates."""

    def __init__(self, total_farms, total_area, by_state, by_culture, by_land_use):
        self.total_farms = total_farms
        self.total_area = total_area
        self.by_state = by_state
        self.by_culture = by_culture
        self.by_land_use = by_land_use


class DashboardAggregationService:
    """
    Service for dashboard data aggregation.

    Farm and culture record sources are injected so callers (and tests) can
    scope or replace them; they default to every row in the database.
    """

    def __init__(self, farms=None, cultures=None):
        self.farms = farms if farms is not None else Farm.objects.all()
        self.cultures = cultures if cultures is not None else Culture.objects.all()

    def get_dashboard(self):
        """Synchronous entry point for views and management code."""
        return async_to_sync(self.compute_dashboard)()

    async def compute_dashboard(self):
        """
        Run all five aggregates concurrently and merge them.

        Returns:
            DashboardAggregate
        """
        logger.info("Computing dashboard aggregates")

        try:
            total_farms, total_area, by_state, by_culture, by_land_use = await asyncio.gather(
                self.count_farms(),
                self.sum_total_area(),
                self.farms_by_state(),
                self.planted_area_by_culture(),
                self.land_use_totals(),
            )
        except Exception:
            logger.error("Failed to compute dashboard aggregates", exc_info=True)
            raise

        logger.info(
            f"Dashboard computed: {total_farms} farms, {total_area} ha, "
            f"{len(by_state)} states, {len(by_culture)} cultures"
        )
        return DashboardAggregate(
            total_farms=total_farms,
            total_area=total_area,
            by_state=by_state,
            by_culture=by_culture,
            by_land_use=by_land_use,
        )

    async def count_farms(self):
        return as_number(await self.farms.acount())

    async def sum_total_area(self):
        result = await self.farms.aaggregate(total=_area_sum('total_area'))
        return as_number(result['total'])

    async def farms_by_state(self):
        """Farm count per state. States without farms are not listed."""
        rows = (
            self.farms.order_by()
            .values('state')
            .annotate(value=Count('pk'))
            .order_by('state')
        )
        return [ChartPoint(row['state'], as_number(row['value'])) async for row in rows]

    async def planted_area_by_culture(self):
        """
        Planted area per culture name.

        Only cultures with at least one planted crop are listed, even when
        their planted area adds up to zero.
        """
        rows = (
            self.cultures.order_by()
            .values('name')
            .annotate(
                crop_count=Count('planted_crops'),
                value=_area_sum('planted_crops__planted_area'),
            )
            .filter(crop_count__gt=0)
            .order_by('name')
        )
        return [ChartPoint(row['name'], as_number(row['value'])) async for row in rows]

    async def land_use_totals(self):
        result = await self.farms.aaggregate(
            arable=_area_sum('arable_area'),
            vegetation=_area_sum('vegetation_area'),
        )
        return LandUse(
            arable_area=as_number(result['arable']),
            vegetation_area=as_number(result['vegetation']),
        )
