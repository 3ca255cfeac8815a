from django.urls import path

from .views import PlantedCropDetailView, PlantedCropListView

app_name = 'planted_crops'

urlpatterns = [
    path('', PlantedCropListView.as_view(), name='list'),
    path('<uuid:planted_crop_id>/', PlantedCropDetailView.as_view(), name='detail'),
]
