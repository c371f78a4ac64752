from django.urls import path
from . import views

app_name = 'cafes'

urlpatterns = [
    # GET  /api/cafes/       - List cafes (with your visit counts)
    # POST /api/cafes/       - Create cafe
    path('', views.cafe_list, name='cafe-list'),

    # GET  /api/cafes/{id}/  - Get cafe
    path('<uuid:cafe_id>/', views.cafe_detail, name='cafe-detail'),
]
