from rest_framework import serializers
from apps.rankings.models import QualityTier
from .models import Drink


class DrinkSerializer(serializers.ModelSerializer):
    """Logged drink with flattened cafe details."""

    cafe_id = serializers.UUIDField(source='cafe.id', read_only=True)
    cafe_name = serializers.CharField(source='cafe.name', read_only=True)
    cafe_address = serializers.CharField(source='cafe.address', read_only=True)
    cafe_city = serializers.CharField(source='cafe.city', read_only=True)

    class Meta:
        model = Drink
        fields = [
            'id',
            'cafe_id',
            'cafe_name',
            'cafe_address',
            'cafe_city',
            'drink_type',
            'rating',
            'quality_tier',
            'notes',
            'price',
            'flavor_tags',
            'photo_url',
            'logged_at',
            'created_at',
        ]
        read_only_fields = fields


class DrinkCreateSerializer(serializers.Serializer):
    """Input serializer for logging a drink."""

    cafe_id = serializers.UUIDField()
    drink_type = serializers.CharField(max_length=100)
    quality_tier = serializers.ChoiceField(choices=QualityTier.choices, required=False, allow_null=True)
    rating = serializers.DecimalField(max_digits=2, decimal_places=1, required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True)
    price = serializers.DecimalField(max_digits=8, decimal_places=2, required=False, allow_null=True)
    flavor_tags = serializers.ListField(
        child=serializers.CharField(max_length=50),
        required=False,
    )
    photo_url = serializers.URLField(max_length=500, required=False, allow_blank=True)
    logged_at = serializers.DateTimeField(required=False)


class DrinkListQuerySerializer(serializers.Serializer):
    """Query parameters for listing drinks."""

    cafe_id = serializers.UUIDField(required=False)
    sort = serializers.ChoiceField(
        choices=['logged_at', 'rating', 'drink_type', 'price'],
        default='logged_at',
    )
    order = serializers.ChoiceField(choices=['asc', 'desc'], default='desc')
