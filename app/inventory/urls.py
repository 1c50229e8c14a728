"""
URLs de la app Inventory
Incluye: CRUD de lotes
"""
from django.urls import path
from . import views

app_name = 'inventory'

urlpatterns = [
    path('', views.lote_list, name='lote_list'),
    path('<int:pk>/', views.lote_detail, name='lote_detail'),
]
