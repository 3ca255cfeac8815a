"""
Farm Services

CRUD operations for farms, including the land-use rule and the explicit
removal of planted crops when a farm is deleted.
"""
import logging

from django.db import transaction

from core.exceptions import EntityNotFound, ValidationFailure, ensure_valid
from core.filters import FilterCompiler
from core.pagination import PaginationSpec, SORT_DESC, execute_paged_query
from planted_crops.models import PlantedCrop
from planted_crops.validators import planted_area_of
from producers.models import Producer
from .filters import FarmFilter
from .models import Farm
from .serializers import FarmSerializer
from .validators import validate_total_covers_planting

logger = logging.getLogger(__name__)

SORT_FIELDS = (
    'created_at', 'updated_at', 'farm_name', 'city', 'state',
    'total_area', 'arable_area', 'vegetation_area',
)


class FarmService:
    """Service for farm management."""

    def __init__(self, farms=None):
        self.farms = farms if farms is not None else Farm.objects.select_related('producer')
        self.filters = FilterCompiler(FarmFilter)

    def list_farms(self, params):
        logger.info("Listing farms with pagination and filters")

        predicates = self.filters.compile(params)
        pagination = PaginationSpec.from_query_params(params, SORT_FIELDS, default_sort_order=SORT_DESC)
        result = execute_paged_query(self.farms, predicates, pagination)

        logger.info(f"Found {result.total} farms, returning page {result.page} with {len(result.data)} rows")
        return result

    def get_farm(self, farm_id):
        try:
            return self.farms.get(pk=farm_id)
        except Farm.DoesNotExist:
            logger.warning(f"Farm {farm_id} not found")
            raise EntityNotFound('Farm', farm_id)

    def create_farm(self, data):
        logger.info("Creating farm")

        serializer = FarmSerializer(data=data)
        validated = ensure_valid(serializer)
        producer = self._get_producer(validated['producer_id'])

        farm = serializer.save()
        logger.info(f"Farm {farm.farm_name} (ID: {farm.id}) created for producer {producer.producer_name}")
        return self.get_farm(farm.pk)

    def update_farm(self, farm_id, data, partial=False):
        """
        Update a farm.

        The farm row is locked for the duration so planted crops cannot be
        added while a smaller total area is being checked.
        """
        logger.info(f"Updating farm {farm_id}")

        with transaction.atomic():
            farm = self._lock_farm(farm_id)
            serializer = FarmSerializer(farm, data=data, partial=partial)
            validated = ensure_valid(serializer)
            if 'producer_id' in validated:
                self._get_producer(validated['producer_id'])
            if 'total_area' in validated:
                self._check_planted_area(farm, validated['total_area'])

            farm = serializer.save()

        logger.info(f"Farm {farm.farm_name} (ID: {farm_id}) updated")
        return self.get_farm(farm.pk)

    def delete_farm(self, farm_id):
        logger.info(f"Deleting farm {farm_id}")

        farm = self.get_farm(farm_id)
        try:
            with transaction.atomic():
                crops_deleted, _ = PlantedCrop.objects.filter(farm=farm).delete()
                farm.delete()
        except Exception:
            logger.error(f"Failed to delete farm {farm_id}", exc_info=True)
            raise

        logger.info(f"Farm {farm_id} deleted with {crops_deleted} planted crops")

    def _get_producer(self, producer_id):
        try:
            return Producer.objects.get(pk=producer_id)
        except Producer.DoesNotExist:
            logger.warning(f"Producer {producer_id} not found for farm")
            raise EntityNotFound('Producer', producer_id)

    def _lock_farm(self, farm_id):
        try:
            return Farm.objects.select_for_update().get(pk=farm_id)
        except Farm.DoesNotExist:
            logger.warning(f"Farm {farm_id} not found")
            raise EntityNotFound('Farm', farm_id)

    def _check_planted_area(self, farm, total_area):
        issues = validate_total_covers_planting(total_area, planted_area_of(farm))
        if issues:
            logger.warning(f"Total area {total_area} ha of farm {farm.farm_name} is below its planted area")
            raise ValidationFailure(issues)
