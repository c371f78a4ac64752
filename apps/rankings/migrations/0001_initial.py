import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('drinks', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='DrinkRanking',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('quality_tier', models.CharField(choices=[('good', 'Good'), ('mid', 'Mid'), ('bad', 'Bad')], max_length=10)),
                ('tier_rank', models.IntegerField()),
                ('score', models.DecimalField(decimal_places=1, max_digits=3)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('drink', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='ranking', to='drinks.drink')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='drink_rankings', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'drink_rankings',
                'ordering': ['-score', '-created_at'],
                'indexes': [
                    models.Index(fields=['user', '-score'], name='rankings_user_score_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('user', 'quality_tier', 'tier_rank'), name='unique_tier_rank_per_user'),
                ],
            },
        ),
        migrations.CreateModel(
            name='RankingTier',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('tier', models.CharField(choices=[('good', 'Good'), ('mid', 'Mid'), ('bad', 'Bad')], max_length=10)),
                ('version', models.PositiveIntegerField(default=0)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='ranking_tiers', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'ranking_tiers',
                'unique_together': {('user', 'tier')},
            },
        ),
    ]
