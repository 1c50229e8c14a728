"""
URL configuration for config project - Ventas Inmobiliarias
"""
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    # Admin
    path('admin/', admin.site.urls),

    # API REST (JSON)
    path('api/', include('users.urls')),              # Auth 2FA, usuarios
    path('api/ubicaciones/', include('locations.urls')),  # Estados, ciudades, colonias
    path('api/lotes/', include('inventory.urls')),    # Lotes
    path('api/clientes/', include('clients.urls')),   # Clientes
    path('api/', include('sales.urls')),              # Contratos y pagos
]
