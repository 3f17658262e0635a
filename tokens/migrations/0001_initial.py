# Generated manually for Token model

import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Token',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('token_code', models.CharField(max_length=64, unique=True, verbose_name='Token 代碼')),
                ('is_valid', models.BooleanField(default=True, verbose_name='是否有效')),
                ('is_used', models.BooleanField(default=False, verbose_name='是否已使用')),
                ('used_at', models.DateTimeField(blank=True, null=True, verbose_name='使用時間')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Token',
                'verbose_name_plural': 'Tokens',
                'db_table': 'Token',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['is_used'], name='Token_is_used_idx'),
                    models.Index(fields=['is_valid', 'is_used'], name='Token_is_valid_is_used_idx'),
                    models.Index(fields=['token_code', 'is_used', 'is_valid'], name='Token_code_used_valid_idx'),
                ],
            },
        ),
    ]
