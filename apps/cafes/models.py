from django.db import models
import uuid


class Cafe(models.Model):
    """A place drinks are logged at. Shared across users."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200, db_index=True)
    address = models.CharField(max_length=300, blank=True)
    city = models.CharField(max_length=100, blank=True, db_index=True)

    # Google Places reference, when the cafe was picked from a map search
    place_id = models.CharField(max_length=255, null=True, blank=True, unique=True)
    photo_reference = models.CharField(max_length=500, blank=True)
    lat = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    lng = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'cafes'
        ordering = ['name']

    def __str__(self):
        if self.city:
            return f"{self.name} ({self.city})"
        return self.name
