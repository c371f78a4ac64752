from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
from django.utils import timezone
from decimal import Decimal
import uuid

from apps.rankings.models import QualityTier


class Drink(models.Model):
    """A drink a user logged at a cafe."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='drinks')
    cafe = models.ForeignKey('cafes.Cafe', on_delete=models.CASCADE, related_name='drinks')
    drink_type = models.CharField(max_length=100, db_index=True)
    rating = models.DecimalField(
        max_digits=2,
        decimal_places=1,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.0')), MaxValueValidator(Decimal('5.0'))],
    )
    notes = models.TextField(blank=True)
    price = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))],
    )
    flavor_tags = models.JSONField(default=list, blank=True)
    photo_url = models.URLField(max_length=500, blank=True)

    # Mirrors DrinkRanking.quality_tier while ranked; placement hint otherwise
    quality_tier = models.CharField(max_length=10, choices=QualityTier.choices, null=True, blank=True)

    logged_at = models.DateTimeField(default=timezone.now, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'drinks'
        indexes = [
            models.Index(fields=['user', 'logged_at'], name='drinks_user_logged_idx'),
            models.Index(fields=['user', 'drink_type'], name='drinks_user_type_idx'),
        ]
        ordering = ['-logged_at']

    def __str__(self):
        return f"{self.drink_type} @ {self.cafe.name}"
