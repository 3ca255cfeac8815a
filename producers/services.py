"""
Producer Services

CRUD operations for rural producers. Views stay thin and delegate here;
every operation logs its outcome and raises the shared API errors.
"""
import logging

from django.db import IntegrityError, transaction

from core.exceptions import Conflict, EntityNotFound, ensure_valid
from core.filters import FilterCompiler
from core.pagination import PaginationSpec, SORT_DESC, execute_paged_query
from planted_crops.models import PlantedCrop
from farms.models import Farm
from .filters import ProducerFilter
from .models import Producer
from .serializers import ProducerSerializer

logger = logging.getLogger(__name__)

SORT_FIELDS = ('created_at', 'updated_at', 'producer_name', 'document_type')


class ProducerService:
    """Service for producer management."""

    def __init__(self, producers=None):
        self.producers = producers if producers is not None else Producer.objects.all()
        self.filters = FilterCompiler(ProducerFilter)

    def list_producers(self, params):
        logger.info("Listing producers with pagination and filters")

        predicates = self.filters.compile(params)
        pagination = PaginationSpec.from_query_params(params, SORT_FIELDS, default_sort_order=SORT_DESC)
        result = execute_paged_query(self.producers, predicates, pagination)

        logger.info(
            f"Found {result.total} producers, returning page {result.page} with {len(result.data)} rows"
        )
        return result

    def get_producer(self, producer_id):
        try:
            return self.producers.prefetch_related('farms').get(pk=producer_id)
        except Producer.DoesNotExist:
            logger.warning(f"Producer {producer_id} not found")
            raise EntityNotFound('Producer', producer_id)

    def create_producer(self, data):
        logger.info("Creating producer")

        serializer = ProducerSerializer(data=data)
        validated = ensure_valid(serializer)
        self._ensure_document_is_free(validated['document'])

        producer = self._save(serializer)
        logger.info(f"Producer {producer.producer_name} (ID: {producer.id}) created")
        return producer

    def update_producer(self, producer_id, data, partial=False):
        logger.info(f"Updating producer {producer_id}")

        producer = self.get_producer(producer_id)
        serializer = ProducerSerializer(producer, data=data, partial=partial)
        validated = ensure_valid(serializer)
        if 'document' in validated:
            self._ensure_document_is_free(validated['document'], exclude_id=producer.pk)

        producer = self._save(serializer)
        logger.info(f"Producer {producer.producer_name} (ID: {producer.id}) updated")
        return producer

    def delete_producer(self, producer_id):
        """
        Delete a producer together with its farms and their planted crops.

        Children are removed explicitly, leaf-first, in one transaction.
        """
        logger.info(f"Deleting producer {producer_id}")

        producer = self.get_producer(producer_id)
        try:
            with transaction.atomic():
                crops_deleted, _ = PlantedCrop.objects.filter(farm__producer=producer).delete()
                farms_deleted, _ = Farm.objects.filter(producer=producer).delete()
                producer.delete()
        except Exception:
            logger.error(f"Failed to delete producer {producer_id}", exc_info=True)
            raise

        logger.info(
            f"Producer {producer_id} deleted with {farms_deleted} farms and {crops_deleted} planted crops"
        )

    def _ensure_document_is_free(self, document, exclude_id=None):
        existing = Producer.objects.filter(document=document)
        if exclude_id is not None:
            existing = existing.exclude(pk=exclude_id)
        if existing.exists():
            logger.warning(f"Producer with document {document} already exists")
            raise Conflict(f"Producer with document {document} already exists")

    def _save(self, serializer):
        try:
            with transaction.atomic():
                return serializer.save()
        except IntegrityError:
            document = serializer.validated_data.get('document')
            logger.warning(f"Integrity error saving producer with document {document}", exc_info=True)
            raise Conflict(f"Producer with document {document} already exists")
