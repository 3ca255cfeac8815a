from decimal import Decimal
from django.db import migrations, models
import django.core.validators
import django.db.models.deletion
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('cultures', '0001_initial'),
        ('farms', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='PlantedCrop',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('planted_area', models.DecimalField(decimal_places=2, help_text='Planted area in hectares', max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('harvest_year', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(2000)])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('culture', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='planted_crops', to='cultures.culture')),
                ('farm', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='planted_crops', to='farms.farm')),
            ],
            options={
                'db_table': 'planted_crops',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['harvest_year'], name='planted_crops_year_idx')],
            },
        ),
    ]
