"""
Rural Producer Models

A producer is identified by a Brazilian tax document: CPF for individuals,
CNPJ for companies. Documents are stored as digits only.
"""
import uuid
from django.db import models


class Producer(models.Model):
    """A rural producer that owns one or more farms."""

    CPF = 'CPF'
    CNPJ = 'CNPJ'
    DOCUMENT_TYPE_CHOICES = [
        (CPF, 'CPF'),
        (CNPJ, 'CNPJ'),
    ]

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )

    producer_name = models.CharField(
        max_length=255,
        help_text="Display name of the producer"
    )

    document = models.CharField(
        max_length=14,
        unique=True,
        help_text="CPF (11 digits) or CNPJ (14 digits), digits only"
    )

    document_type = models.CharField(
        max_length=4,
        choices=DOCUMENT_TYPE_CHOICES,
        help_text="Which kind of document 'document' holds"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'producers'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['document_type'], name='producers_doc_type_idx'),
        ]

    def __str__(self):
        return f"{self.producer_name} ({self.document_type} {self.document})"
