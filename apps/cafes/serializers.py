from rest_framework import serializers
from .models import Cafe


class CafeSerializer(serializers.ModelSerializer):
    """Cafe with the requesting user's visit data (when annotated)."""

    drink_count = serializers.IntegerField(read_only=True, required=False)
    last_visit = serializers.DateTimeField(read_only=True, required=False, allow_null=True)

    class Meta:
        model = Cafe
        fields = [
            'id',
            'name',
            'address',
            'city',
            'place_id',
            'photo_reference',
            'lat',
            'lng',
            'drink_count',
            'last_visit',
            'created_at',
        ]
        read_only_fields = ['id', 'created_at']


class CafeCreateSerializer(serializers.Serializer):
    """Input serializer for cafe creation."""

    name = serializers.CharField(max_length=200)
    address = serializers.CharField(max_length=300, required=False, allow_blank=True)
    city = serializers.CharField(max_length=100, required=False, allow_blank=True)
    place_id = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    photo_reference = serializers.CharField(max_length=500, required=False, allow_blank=True)
    lat = serializers.DecimalField(max_digits=9, decimal_places=6, required=False, allow_null=True)
    lng = serializers.DecimalField(max_digits=9, decimal_places=6, required=False, allow_null=True)
