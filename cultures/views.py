"""
Culture API Views

GET    /api/cultures/          paginated, filterable list
POST   /api/cultures/          create
GET    /api/cultures/{id}/     detail
PUT    /api/cultures/{id}/     full update
PATCH  /api/cultures/{id}/     partial update
DELETE /api/cultures/{id}/     delete with planted crops
"""
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import CultureSerializer
from .services import CultureService


class CultureListView(APIView):

    def get(self, request):
        page = CultureService().list_cultures(request.query_params)
        return Response(page.render(CultureSerializer))

    def post(self, request):
        culture = CultureService().create_culture(request.data)
        return Response(CultureSerializer(culture).data, status=status.HTTP_201_CREATED)


class CultureDetailView(APIView):

    def get(self, request, culture_id):
        culture = CultureService().get_culture(culture_id)
        return Response(CultureSerializer(culture).data)

    def put(self, request, culture_id):
        culture = CultureService().update_culture(culture_id, request.data)
        return Response(CultureSerializer(culture).data)

    def patch(self, request, culture_id):
        culture = CultureService().update_culture(culture_id, request.data, partial=True)
        return Response(CultureSerializer(culture).data)

    def delete(self, request, culture_id):
        CultureService().delete_culture(culture_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
