"""
Producer URL Configuration
"""
from django.urls import path

from .views import ProducerDetailView, ProducerListView

app_name = 'producers'

urlpatterns = [
    path('', ProducerListView.as_view(), name='list'),
    path('<uuid:producer_id>/', ProducerDetailView.as_view(), name='detail'),
]
