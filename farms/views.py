"""
Farm API Views

GET    /api/farms/          paginated, filterable list
POST   /api/farms/          create
GET    /api/farms/{id}/     detail
PUT    /api/farms/{id}/     full update
PATCH  /api/farms/{id}/     partial update
DELETE /api/farms/{id}/     delete with planted crops
"""
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import FarmSerializer
from .services import FarmService


class FarmListView(APIView):

    def get(self, request):
        page = FarmService().list_farms(request.query_params)
        return Response(page.render(FarmSerializer))

    def post(self, request):
        farm = FarmService().create_farm(request.data)
        return Response(FarmSerializer(farm).data, status=status.HTTP_201_CREATED)


class FarmDetailView(APIView):

    def get(self, request, farm_id):
        farm = FarmService().get_farm(farm_id)
        return Response(FarmSerializer(farm).data)

    def put(self, request, farm_id):
        farm = FarmService().update_farm(farm_id, request.data)
        return Response(FarmSerializer(farm).data)

    def patch(self, request, farm_id):
        farm = FarmService().update_farm(farm_id, request.data, partial=True)
        return Response(FarmSerializer(farm).data)

    def delete(self, request, farm_id):
        FarmService().delete_farm(farm_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
