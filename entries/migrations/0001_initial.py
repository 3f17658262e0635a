# Generated manually for Response / FlowerResponse models

import uuid

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('tokens', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Response',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('contest_type', models.CharField(default='papaya', max_length=20)),
                ('full_name', models.CharField(max_length=200)),
                ('contact_number', models.CharField(max_length=50)),
                ('papaya_seed_guess', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(2147483647)])),
                ('submitted_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('token', models.OneToOneField(on_delete=django.db.models.deletion.PROTECT, related_name='response', to='tokens.token')),
            ],
            options={
                'db_table': 'Response',
                'ordering': ['-submitted_at'],
                'indexes': [
                    models.Index(fields=['contest_type'], name='Response_contest_type_idx'),
                    models.Index(fields=['-submitted_at'], name='Response_submitted_at_idx'),
                    models.Index(fields=['contest_type', '-submitted_at'], name='Response_type_submitted_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='FlowerResponse',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('contest_type', models.CharField(default='flower', max_length=20)),
                ('full_name', models.CharField(max_length=200)),
                ('contact_number', models.CharField(max_length=50)),
                ('secret_flower_name', models.CharField(max_length=200)),
                ('submitted_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('token', models.OneToOneField(on_delete=django.db.models.deletion.PROTECT, related_name='flower_response', to='tokens.token')),
            ],
            options={
                'db_table': 'FlowerResponse',
                'ordering': ['-submitted_at'],
                'indexes': [
                    models.Index(fields=['contest_type'], name='FlowerResp_contest_type_idx'),
                ],
            },
        ),
    ]
