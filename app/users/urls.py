"""
URLs de la app Users
Incluye: Login 2FA, recuperación de contraseña, CRUD de usuarios
"""
from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # Autenticación
    path('auth/login/', views.login_view, name='login'),
    path('auth/verify-otp/', views.verify_otp_view, name='verify_otp'),
    path('auth/logout/', views.logout_view, name='logout'),
    path('auth/password-reset/', views.password_reset_request, name='password_reset_request'),
    path('auth/password-reset/<str:token>/', views.password_reset_confirm, name='password_reset_confirm'),
    path('auth/me/', views.me_view, name='me'),

    # Usuarios
    path('usuarios/', views.user_list, name='user_list'),
    path('usuarios/<int:pk>/', views.user_detail, name='user_detail'),
]
