import uuid
from django.db import models


class Culture(models.Model):
    """A crop type that can be planted on farms (soy, corn, coffee...)."""

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )

    name = models.CharField(max_length=255, unique=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'cultures'
        ordering = ['name']

    def __str__(self):
        return self.name
