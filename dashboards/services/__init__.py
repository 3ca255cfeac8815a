"""
Dashboard services module
"""

from .aggregation import ChartPoint, DashboardAggregate, DashboardAggregationService, LandUse

__all__ = [
    'ChartPoint',
    'DashboardAggregate',
    'DashboardAggregationService',
    'LandUse',
]
