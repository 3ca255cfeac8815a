from django.db import migrations, models
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Producer',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('producer_name', models.CharField(help_text='Display name of the producer', max_length=255)),
                ('document', models.CharField(help_text='CPF (11 digits) or CNPJ (14 digits), digits only', max_length=14, unique=True)),
                ('document_type', models.CharField(choices=[('CPF', 'CPF'), ('CNPJ', 'CNPJ')], help_text="Which kind of document 'document' holds", max_length=4)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'producers',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['document_type'], name='producers_doc_type_idx')],
            },
        ),
    ]
