from django.contrib import admin
from django.db.models import Count
from .models import Cafe


@admin.register(Cafe)
class CafeAdmin(admin.ModelAdmin):
    list_display = ['name', 'city', 'drink_count', 'place_id', 'created_at']
    list_filter = ['city']
    search_fields = ['name', 'address', 'city']
    readonly_fields = ['id', 'created_at']

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(_drink_count=Count('drinks'))

    @admin.display(description='Drinks', ordering='_drink_count')
    def drink_count(self, obj):
        return obj._drink_count
