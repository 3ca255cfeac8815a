"""
Producer API Views

GET    /api/producers/          paginated, filterable list
POST   /api/producers/          create
GET    /api/producers/{id}/     detail with farms
PUT    /api/producers/{id}/     full update
PATCH  /api/producers/{id}/     partial update
DELETE /api/producers/{id}/     delete with farms and planted crops
"""
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import ProducerDetailSerializer, ProducerSerializer
from .services import ProducerService


class ProducerListView(APIView):

    def get(self, request):
        page = ProducerService().list_producers(request.query_params)
        return Response(page.render(ProducerSerializer))

    def post(self, request):
        producer = ProducerService().create_producer(request.data)
        return Response(ProducerSerializer(producer).data, status=status.HTTP_201_CREATED)


class ProducerDetailView(APIView):

    def get(self, request, producer_id):
        producer = ProducerService().get_producer(producer_id)
        return Response(ProducerDetailSerializer(producer).data)

    def put(self, request, producer_id):
        producer = ProducerService().update_producer(producer_id, request.data)
        return Response(ProducerSerializer(producer).data)

    def patch(self, request, producer_id):
        producer = ProducerService().update_producer(producer_id, request.data, partial=True)
        return Response(ProducerSerializer(producer).data)

    def delete(self, request, producer_id):
        ProducerService().delete_producer(producer_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
