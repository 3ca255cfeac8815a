"""
Culture Services
"""
import logging

from django.db import IntegrityError, transaction

from core.exceptions import Conflict, EntityNotFound, ensure_valid
from core.filters import FilterCompiler
from core.pagination import PaginationSpec, SORT_ASC, execute_paged_query
from planted_crops.models import PlantedCrop
from .filters import CultureFilter
from .models import Culture
from .serializers import CultureSerializer

logger = logging.getLogger(__name__)

SORT_FIELDS = ('created_at', 'updated_at', 'name')


class CultureService:
    """Service for culture management."""

    def __init__(self, cultures=None):
        self.cultures = cultures if cultures is not None else Culture.objects.all()
        self.filters = FilterCompiler(CultureFilter)

    def list_cultures(self, params):
        logger.info("Listing cultures with pagination and filters")

        predicates = self.filters.compile(params)
        pagination = PaginationSpec.from_query_params(params, SORT_FIELDS, default_sort_order=SORT_ASC)
        result = execute_paged_query(self.cultures, predicates, pagination)

        logger.info(f"Found {result.total} cultures, returning page {result.page} with {len(result.data)} rows")
        return result

    def get_culture(self, culture_id):
        try:
            return self.cultures.get(pk=culture_id)
        except Culture.DoesNotExist:
            logger.warning(f"Culture {culture_id} not found")
            raise EntityNotFound('Culture', culture_id)

    def create_culture(self, data):
        serializer = CultureSerializer(data=data)
        validated = ensure_valid(serializer)
        logger.info(f"Creating culture {validated['name']}")

        self._ensure_name_is_free(validated['name'])
        culture = self._save(serializer)

        logger.info(f"Culture {culture.name} (ID: {culture.id}) created")
        return culture

    def update_culture(self, culture_id, data, partial=False):
        logger.info(f"Updating culture {culture_id}")

        culture = self.get_culture(culture_id)
        serializer = CultureSerializer(culture, data=data, partial=partial)
        validated = ensure_valid(serializer)
        if 'name' in validated:
            self._ensure_name_is_free(validated['name'], exclude_id=culture.pk)

        culture = self._save(serializer)
        logger.info(f"Culture {culture.name} (ID: {culture_id}) updated")
        return culture

    def delete_culture(self, culture_id):
        logger.info(f"Deleting culture {culture_id}")

        culture = self.get_culture(culture_id)
        try:
            with transaction.atomic():
                crops_deleted, _ = PlantedCrop.objects.filter(culture=culture).delete()
                culture.delete()
        except Exception:
            logger.error(f"Failed to delete culture {culture_id}", exc_info=True)
            raise

        logger.info(f"Culture {culture.name} (ID: {culture_id}) deleted with {crops_deleted} planted crops")

    def _ensure_name_is_free(self, name, exclude_id=None):
        existing = Culture.objects.filter(name=name)
        if exclude_id is not None:
            existing = existing.exclude(pk=exclude_id)
        if existing.exists():
            logger.warning(f"Culture named {name} already exists")
            raise Conflict(f"Culture named {name} already exists")

    def _save(self, serializer):
        try:
            with transaction.atomic():
                return serializer.save()
        except IntegrityError:
            name = serializer.validated_data.get('name')
            logger.warning(f"Integrity error saving culture {name}", exc_info=True)
            raise Conflict(f"Culture named {name} already exists")
