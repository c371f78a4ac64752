from django.urls import path
from . import views

app_name = 'rankings'

urlpatterns = [
    # GET    /api/rankings/                   - All rankings, best first
    # POST   /api/rankings/                   - Rank a drink at a position
    path('', views.ranking_list, name='ranking-list'),

    # GET    /api/rankings/tier/{tier}/       - One tier in rank order
    path('tier/<str:tier>/', views.tier_rankings, name='tier-rankings'),

    # GET    /api/rankings/unranked/          - Drinks waiting to be ranked
    path('unranked/', views.unranked_drinks, name='unranked-drinks'),

    # GET    /api/rankings/counts/            - Drinks per tier
    path('counts/', views.tier_counts, name='tier-counts'),

    # GET    /api/rankings/check/{drink_id}/  - Is this drink ranked?
    path('check/<uuid:drink_id>/', views.check_ranking, name='check-ranking'),

    # PUT    /api/rankings/reorder/           - Reassign ranks in a tier
    path('reorder/', views.reorder_rankings, name='reorder-rankings'),

    # POST   /api/rankings/placement/         - Place a drink by comparison
    path('placement/', views.placement, name='placement'),

    # DELETE /api/rankings/{drink_id}/        - Remove a drink from its tier
    path('<uuid:drink_id>/', views.ranking_detail, name='ranking-detail'),
]
