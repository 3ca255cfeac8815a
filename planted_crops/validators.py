from decimal import Decimal

from django.db.models import DecimalField, Sum
from django.db.models.functions import Coalesce

from core.exceptions import FieldIssue


def planted_area_of(farm, exclude_id=None):
    """Total area planted on ``farm``, leaving out ``exclude_id`` when given."""
    crops = farm.planted_crops.all()
    if exclude_id is not None:
        crops = crops.exclude(pk=exclude_id)

    return crops.aggregate(
        total=Coalesce(Sum('planted_area'), Decimal('0'), output_field=DecimalField(max_digits=14, decimal_places=2))
    )['total']


def validate_planting_capacity(farm, planted_area, exclude_id=None):
    """
    A farm cannot have more area planted than its total area.

    Sums the farm's other planted crops (leaving out ``exclude_id`` when an
    existing record is being updated) and adds the new area.
    """
    already_planted = planted_area_of(farm, exclude_id=exclude_id)
    requested = Decimal(planted_area or 0)

    if already_planted + requested > farm.total_area:
        return [FieldIssue(
            'planted_area', 'farm_capacity',
            f"Planted area ({requested} ha) plus area already planted ({already_planted} ha) "
            f"exceeds the farm's total area ({farm.total_area} ha)."
        )]
    return []
