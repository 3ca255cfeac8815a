"""
Planted Crop Models

One row per culture planted on a farm for a given harvest year.
"""
import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from cultures.models import Culture
from farms.models import Farm

MIN_HARVEST_YEAR = 2000


class PlantedCrop(models.Model):
    """Area of a farm planted with one culture in one harvest year."""

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )

    farm = models.ForeignKey(
        Farm,
        on_delete=models.PROTECT,
        related_name='planted_crops'
    )

    culture = models.ForeignKey(
        Culture,
        on_delete=models.PROTECT,
        related_name='planted_crops'
    )

    planted_area = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0'))],
        help_text="Planted area in hectares"
    )

    harvest_year = models.PositiveIntegerField(
        validators=[MinValueValidator(MIN_HARVEST_YEAR)]
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'planted_crops'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['harvest_year'], name='planted_crops_year_idx'),
        ]

    def __str__(self):
        return f"{self.culture.name} on {self.farm.farm_name} ({self.harvest_year})"
