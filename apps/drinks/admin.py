from django.contrib import admin
from .models import Drink


@admin.register(Drink)
class DrinkAdmin(admin.ModelAdmin):
    list_display = ['drink_type', 'cafe', 'user', 'rating', 'quality_tier', 'is_ranked', 'logged_at']
    list_filter = ['quality_tier', 'logged_at']
    search_fields = ['drink_type', 'cafe__name', 'user__email', 'notes']
    list_select_related = ['cafe', 'user', 'ranking']
    readonly_fields = ['id', 'created_at']
    date_hierarchy = 'logged_at'

    @admin.display(boolean=True, description='Ranked')
    def is_ranked(self, obj):
        return hasattr(obj, 'ranking')
