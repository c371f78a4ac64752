from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # POST      /api/auth/register/  - Create account, returns JWT pair
    path('register/', views.register, name='register'),

    # POST      /api/auth/login/     - Sign in, returns JWT pair
    path('login/', views.login, name='login'),

    # GET/PATCH /api/auth/user/      - Your profile
    path('user/', views.current_user, name='current-user'),
]
