"""
Dashboard Serializers

Wire shape of the dashboard payload (camelCase, as consumed by the frontend).
"""
from rest_framework import serializers


class ChartPointSerializer(serializers.Serializer):
    name = serializers.CharField()
    value = serializers.FloatField()


class LandUseSerializer(serializers.Serializer):
    arableArea = serializers.FloatField(source='arable_area')
    vegetationArea = serializers.FloatField(source='vegetation_area')


class DashboardSerializer(serializers.Serializer):
    totalFarms = serializers.IntegerField(source='total_farms')
    totalArea = serializers.FloatField(source='total_area')
    byState = ChartPointSerializer(source='by_state', many=True)
    byCulture = ChartPointSerializer(source='by_culture', many=True)
    byLandUse = LandUseSerializer(source='by_land_use')


class ChartItemSerializer(serializers.Serializer):
    name = serializers.CharField()
    label = serializers.CharField()
    value = serializers.FloatField()
    percentage = serializers.FloatField()
    tooltip = serializers.CharField()


class ChartSerializer(serializers.Serializer):
    title = serializers.CharField()
    mode = serializers.CharField()
    total = serializers.FloatField()
    items = ChartItemSerializer(many=True)
