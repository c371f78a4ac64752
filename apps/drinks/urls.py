from django.urls import path
from . import views

app_name = 'drinks'

urlpatterns = [
    # GET    /api/drinks/         - List your drinks (cafe_id, sort, order)
    # POST   /api/drinks/         - Log a drink
    path('', views.drink_list, name='drink-list'),

    # GET    /api/drinks/types/   - Distinct drink types
    path('types/', views.drink_types, name='drink-types'),

    # GET    /api/drinks/last/    - Most recent drink
    path('last/', views.last_drink, name='drink-last'),

    # GET    /api/drinks/{id}/    - Get drink
    # DELETE /api/drinks/{id}/    - Delete drink (and its ranking)
    path('<uuid:drink_id>/', views.drink_detail, name='drink-detail'),
]
