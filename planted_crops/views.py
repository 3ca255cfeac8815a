"""
Planted Crop API Views

GET    /api/planted-crops/          paginated, filterable list
POST   /api/planted-crops/          create
GET    /api/planted-crops/{id}/     detail
PUT    /api/planted-crops/{id}/     full update
PATCH  /api/planted-crops/{id}/     partial update
DELETE /api/planted-crops/{id}/     delete
"""
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import PlantedCropSerializer
from .services import PlantedCropService


class PlantedCropListView(APIView):

    def get(self, request):
        page = PlantedCropService().list_planted_crops(request.query_params)
        return Response(page.render(PlantedCropSerializer))

    def post(self, request):
        planted_crop = PlantedCropService().create_planted_crop(request.data)
        return Response(PlantedCropSerializer(planted_crop).data, status=status.HTTP_201_CREATED)


class PlantedCropDetailView(APIView):

    def get(self, request, planted_crop_id):
        planted_crop = PlantedCropService().get_planted_crop(planted_crop_id)
        return Response(PlantedCropSerializer(planted_crop).data)

    def put(self, request, planted_crop_id):
        planted_crop = PlantedCropService().update_planted_crop(planted_crop_id, request.data)
        return Response(PlantedCropSerializer(planted_crop).data)

    def patch(self, request, planted_crop_id):
        planted_crop = PlantedCropService().update_planted_crop(planted_crop_id, request.data, partial=True)
        return Response(PlantedCropSerializer(planted_crop).data)

    def delete(self, request, planted_crop_id):
        PlantedCropService().delete_planted_crop(planted_crop_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
