from django.urls import path

from .views import CultureDetailView, CultureListView

app_name = 'cultures'

urlpatterns = [
    path('', CultureListView.as_view(), name='list'),
    path('<uuid:culture_id>/', CultureDetailView.as_view(), name='detail'),
]
