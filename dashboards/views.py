"""
Dashboard API Views

Provides REST API endpoints for dashboard data consumption.
Frontend applications call these endpoints to render dashboard widgets.
"""

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from .charts import build_chart
from .serializers import ChartSerializer, DashboardSerializer
from .services import DashboardAggregationService


class DashboardView(APIView):
    """
    Dashboard API Endpoint

    GET /api/dashboard/

    Returns:
    - totalFarms, totalArea
    - byState: farms per state
    - byCulture: planted area per culture
    - byLandUse: arable and vegetation area
    """

    def get(self, request):
        dashboard = DashboardAggregationService().get_dashboard()
        return Response(DashboardSerializer(dashboard).data, status=status.HTTP_200_OK)


class DashboardChartsView(APIView):
    """
    Dashboard Charts Data

    GET /api/dashboard/charts/

    Same aggregates, formatted for the pie charts (percentages, legend
    labels, tooltips and render mode).
    """

    def get(self, request):
        dashboard = DashboardAggregationService().get_dashboard()

        data = {
            'byState': build_chart('Farms by state', dashboard.by_state),
            'byCulture': build_chart('Planted area by culture', dashboard.by_culture),
            'byLandUse': build_chart('Land use', dashboard.by_land_use.as_points()),
        }

        return Response(
            {key: ChartSerializer(chart).data for key, chart in data.items()},
            status=status.HTTP_200_OK
        )
