"""
Dashboard URL Configuration
"""

from django.urls import path
from .views import DashboardChartsView, DashboardView

app_name = 'dashboards'

urlpatterns = [
    path('', DashboardView.as_view(), name='dashboard'),
    path('charts/', DashboardChartsView.as_view(), name='charts'),
]
