import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('cafes', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Drink',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('drink_type', models.CharField(db_index=True, max_length=100)),
                ('rating', models.DecimalField(blank=True, decimal_places=1, max_digits=2, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0.0')), django.core.validators.MaxValueValidator(Decimal('5.0'))])),
                ('notes', models.TextField(blank=True)),
                ('price', models.DecimalField(blank=True, decimal_places=2, max_digits=8, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('flavor_tags', models.JSONField(blank=True, default=list)),
                ('photo_url', models.URLField(blank=True, max_length=500)),
                ('quality_tier', models.CharField(blank=True, choices=[('good', 'Good'), ('mid', 'Mid'), ('bad', 'Bad')], max_length=10, null=True)),
                ('logged_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('cafe', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='drinks', to='cafes.cafe')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='drinks', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'drinks',
                'ordering': ['-logged_at'],
                'indexes': [
                    models.Index(fields=['user', 'logged_at'], name='drinks_user_logged_idx'),
                    models.Index(fields=['user', 'drink_type'], name='drinks_user_type_idx'),
                ],
            },
        ),
    ]
