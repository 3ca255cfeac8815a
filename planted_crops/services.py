"""
Planted Crop Services

CRUD operations for planted crops. A farm's planted area is capped by its
total area; the cap is checked against the other crops already on the farm.
"""
import logging

from django.db import transaction

from core.exceptions import EntityNotFound, ValidationFailure, ensure_valid
from core.filters import FilterCompiler
from core.pagination import PaginationSpec, SORT_DESC, execute_paged_query
from cultures.models import Culture
from farms.models import Farm
from .filters import PlantedCropFilter
from .models import PlantedCrop
from .serializers import PlantedCropSerializer
from .validators import validate_planting_capacity

logger = logging.getLogger(__name__)

SORT_FIELDS = ('created_at', 'updated_at', 'planted_area', 'harvest_year')


class PlantedCropService:
    """Service for planted crop management."""

    def __init__(self, planted_crops=None):
        self.planted_crops = (
            planted_crops if planted_crops is not None
            else PlantedCrop.objects.select_related('farm', 'culture')
        )
        self.filters = FilterCompiler(PlantedCropFilter)

    def list_planted_crops(self, params):
        logger.info("Listing planted crops with pagination and filters")

        predicates = self.filters.compile(params)
        pagination = PaginationSpec.from_query_params(params, SORT_FIELDS, default_sort_order=SORT_DESC)
        result = execute_paged_query(self.planted_crops, predicates, pagination)

        logger.info(
            f"Found {result.total} planted crops, returning page {result.page} with {len(result.data)} rows"
        )
        return result

    def get_planted_crop(self, planted_crop_id):
        try:
            return self.planted_crops.get(pk=planted_crop_id)
        except PlantedCrop.DoesNotExist:
            logger.warning(f"Planted crop {planted_crop_id} not found")
            raise EntityNotFound('PlantedCrop', planted_crop_id)

    def create_planted_crop(self, data):
        """
        Create a planted crop.

        The farm row is locked while its capacity is checked and the crop is
        inserted, so concurrent plantings on one farm are serialized.
        """
        logger.info("Creating planted crop")

        serializer = PlantedCropSerializer(data=data)
        validated = ensure_valid(serializer)

        with transaction.atomic():
            farm = self._lock_farm(validated['farm_id'])
            culture = self._get_culture(validated['culture_id'])
            self._check_capacity(farm, validated['planted_area'])

            planted_crop = serializer.save()

        logger.info(
            f"Planted crop of {culture.name} ({planted_crop.planted_area} ha) created "
            f"on farm {farm.farm_name} (ID: {planted_crop.id})"
        )
        return self.get_planted_crop(planted_crop.pk)

    def update_planted_crop(self, planted_crop_id, data, partial=False):
        logger.info(f"Updating planted crop {planted_crop_id}")

        planted_crop = self.get_planted_crop(planted_crop_id)
        serializer = PlantedCropSerializer(planted_crop, data=data, partial=partial)
        validated = ensure_valid(serializer)

        with transaction.atomic():
            farm = self._lock_farm(validated.get('farm_id', planted_crop.farm_id))
            if 'culture_id' in validated:
                self._get_culture(validated['culture_id'])
            planted_area = validated.get('planted_area', planted_crop.planted_area)
            self._check_capacity(farm, planted_area, exclude_id=planted_crop.pk)

            planted_crop = serializer.save()

        logger.info(f"Planted crop {planted_crop_id} updated")
        return self.get_planted_crop(planted_crop.pk)

    def delete_planted_crop(self, planted_crop_id):
        logger.info(f"Deleting planted crop {planted_crop_id}")

        planted_crop = self.get_planted_crop(planted_crop_id)
        planted_crop.delete()

        logger.info(f"Planted crop {planted_crop_id} deleted")

    def _check_capacity(self, farm, planted_area, exclude_id=None):
        issues = validate_planting_capacity(farm, planted_area, exclude_id=exclude_id)
        if issues:
            logger.warning(f"Planted area {planted_area} ha does not fit on farm {farm.farm_name}")
            raise ValidationFailure(issues)

    def _lock_farm(self, farm_id):
        try:
            return Farm.objects.select_for_update().get(pk=farm_id)
        except Farm.DoesNotExist:
            logger.warning(f"Farm {farm_id} not found for planted crop")
            raise EntityNotFound('Farm', farm_id)

    def _get_culture(self, culture_id):
        try:
            return Culture.objects.get(pk=culture_id)
        except Culture.DoesNotExist:
            logger.warning(f"Culture {culture_id} not found for planted crop")
            raise EntityNotFound('Culture', culture_id)
