from django.contrib import admin, messages
from apps.accounts.models import User
from .models import DrinkRanking, RankingTier
from .services import recalculate_tier_scores, RankingsServiceError


@admin.register(DrinkRanking)
class DrinkRankingAdmin(admin.ModelAdmin):
    """Admin interface for Drink Rankings."""

    list_display = ['get_drink', 'user', 'quality_tier', 'tier_rank', 'score', 'created_at']
    list_filter = ['quality_tier', 'created_at']
    search_fields = ['user__email', 'drink__drink_type', 'drink__cafe__name']
    readonly_fields = ['id', 'created_at', 'updated_at']
    ordering = ['user', 'quality_tier', 'tier_rank']
    list_select_related = ['user', 'drink', 'drink__cafe']
    actions = ['recalculate_scores']

    def get_drink(self, obj):
        return f"{obj.drink.drink_type} @ {obj.drink.cafe.name}"
    get_drink.short_description = 'Drink'

    @admin.action(description='Recalculate scores of the selected tiers')
    def recalculate_scores(self, request, queryset):
        tiers = set(queryset.values_list('user', 'quality_tier'))
        for user_id, tier in tiers:
            user = User.objects.get(pk=user_id)
            try:
                recalculate_tier_scores(user=user, tier=tier)
            except RankingsServiceError as e:
                self.message_user(request, f"{tier} tier of {user}: {e}", messages.ERROR)
        self.message_user(request, f"Recalculated {len(tiers)} tier(s).")


@admin.register(RankingTier)
class RankingTierAdmin(admin.ModelAdmin):
    """Admin interface for tier lock rows."""

    list_display = ['user', 'tier', 'version', 'updated_at']
    list_filter = ['tier']
    search_fields = ['user__email']
    readonly_fields = ['version', 'updated_at']
