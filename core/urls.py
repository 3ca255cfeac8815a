"""
URL configuration for core project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""
from django.contrib import admin
from django.urls import path, include
from django.views.generic import RedirectView

urlpatterns = [
    path('', RedirectView.as_view(url='/admin/', permanent=False)),
    path('admin/', admin.site.urls),
    path('api/producers/', include('producers.urls')),
    path('api/farms/', include('farms.urls')),
    path('api/cultures/', include('cultures.urls')),
    path('api/planted-crops/', include('planted_crops.urls')),
    path('api/dashboard/', include('dashboards.urls')),
]
