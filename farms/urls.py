"""
Farm URL Configuration
"""
from django.urls import path

from .views import FarmDetailView, FarmListView

app_name = 'farms'

urlpatterns = [
    path('', FarmListView.as_view(), name='list'),
    path('<uuid:farm_id>/', FarmDetailView.as_view(), name='detail'),
]
