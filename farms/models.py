"""
Farm Models

A farm belongs to one producer and splits its total area into arable land,
native vegetation and (implicitly) everything else:

    arable_area + vegetation_area <= total_area
"""
import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from producers.models import Producer


class Farm(models.Model):
    """A rural property owned by a producer."""

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )

    producer = models.ForeignKey(
        Producer,
        on_delete=models.PROTECT,
        related_name='farms',
        help_text="Owner of the farm"
    )

    farm_name = models.CharField(max_length=255)
    city = models.CharField(max_length=255)
    state = models.CharField(
        max_length=2,
        db_index=True,
        help_text="Two-letter state code (UF), e.g. SP"
    )

    # Areas in hectares
    total_area = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0'))]
    )
    arable_area = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0'))]
    )
    vegetation_area = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0'))]
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'farms'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.farm_name} - {self.city}/{self.state}"
