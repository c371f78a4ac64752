from rest_framework import serializers
from apps.drinks.models import Drink
from .models import DrinkRanking, QualityTier


class RankedDrinkSerializer(serializers.ModelSerializer):
    """Ranking joined with its drink and cafe."""

    ranking_id = serializers.UUIDField(source='id', read_only=True)
    ranked_at = serializers.DateTimeField(source='created_at', read_only=True)
    drink_id = serializers.UUIDField(source='drink.id', read_only=True)
    drink_type = serializers.CharField(source='drink.drink_type', read_only=True)
    logged_at = serializers.DateTimeField(source='drink.logged_at', read_only=True)
    notes = serializers.CharField(source='drink.notes', read_only=True)
    cafe_id = serializers.UUIDField(source='drink.cafe.id', read_only=True)
    cafe_name = serializers.CharField(source='drink.cafe.name', read_only=True)
    cafe_city = serializers.CharField(source='drink.cafe.city', read_only=True)
    cafe_photo = serializers.CharField(source='drink.cafe.photo_reference', read_only=True)

    class Meta:
        model = DrinkRanking
        fields = [
            'ranking_id',
            'quality_tier',
            'tier_rank',
            'score',
            'ranked_at',
            'drink_id',
            'drink_type',
            'logged_at',
            'notes',
            'cafe_id',
            'cafe_name',
            'cafe_city',
            'cafe_photo',
        ]
        read_only_fields = fields


class UnrankedDrinkSerializer(serializers.ModelSerializer):
    """Drink waiting to be ranked; quality_tier falls back to good."""

    drink_id = serializers.UUIDField(source='id', read_only=True)
    quality_tier = serializers.CharField(source='suggested_tier', read_only=True)
    cafe_id = serializers.UUIDField(source='cafe.id', read_only=True)
    cafe_name = serializers.CharField(source='cafe.name', read_only=True)
    cafe_city = serializers.CharField(source='cafe.city', read_only=True)
    cafe_photo = serializers.CharField(source='cafe.photo_reference', read_only=True)

    class Meta:
        model = Drink
        fields = [
            'drink_id',
            'drink_type',
            'quality_tier',
            'logged_at',
            'notes',
            'cafe_id',
            'cafe_name',
            'cafe_city',
            'cafe_photo',
        ]
        read_only_fields = fields


class TierCountsSerializer(serializers.Serializer):
    good = serializers.IntegerField()
    mid = serializers.IntegerField()
    bad = serializers.IntegerField()


class RankingCheckSerializer(serializers.Serializer):
    is_ranked = serializers.BooleanField()
    rank = serializers.IntegerField(allow_null=True)
    tier = serializers.CharField(allow_null=True)
    score = serializers.DecimalField(max_digits=3, decimal_places=1, allow_null=True)


class RankingCreateSerializer(serializers.Serializer):
    """Input serializer for ranking a drink at a known position."""

    drink_id = serializers.UUIDField()
    tier = serializers.ChoiceField(choices=QualityTier.choices)
    rank = serializers.IntegerField(min_value=1)
    snapshot_version = serializers.IntegerField(min_value=0, required=False, allow_null=True)


class ReorderEntrySerializer(serializers.Serializer):
    drink_id = serializers.UUIDField()
    rank = serializers.IntegerField(min_value=1)


class ReorderRequestSerializer(serializers.Serializer):
    tier = serializers.ChoiceField(choices=QualityTier.choices)
    rankings = ReorderEntrySerializer(many=True, allow_empty=False)


class PlacementRequestSerializer(serializers.Serializer):
    """
    Placement replay request.

    `choices` holds every answer so far, oldest first: true when the new
    drink was better than the drink it was compared with. With `confirm`
    set, a complete placement is committed.
    """

    drink_id = serializers.UUIDField()
    tier = serializers.ChoiceField(choices=QualityTier.choices, required=False, allow_null=True)
    choices = serializers.ListField(child=serializers.BooleanField(), required=False, default=list)
    snapshot_version = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    confirm = serializers.BooleanField(required=False, default=False)

    def validate(self, attrs):
        if (attrs['choices'] or attrs['confirm']) and attrs.get('snapshot_version') is None:
            raise serializers.ValidationError({
                'snapshot_version': 'Required once answers are sent or the placement is confirmed.',
            })
        return attrs


class PlacementStateSerializer(serializers.Serializer):
    """State of a placement session after replaying the client's answers."""

    drink_id = serializers.UUIDField()
    tier = serializers.CharField()
    snapshot_version = serializers.IntegerField()
    total = serializers.IntegerField()
    comparisons_made = serializers.IntegerField()
    estimated_comparisons = serializers.IntegerField()
    is_complete = serializers.BooleanField()
    final_rank = serializers.IntegerField(allow_null=True)
    comparison = RankedDrinkSerializer(allow_null=True)


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()
    code = serializers.CharField()
