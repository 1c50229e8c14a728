from django.urls import path

from . import views

app_name = "locations"

urlpatterns = [
    path("estados/", views.estado_list, name="estado_list"),
    path("estados/<int:estado_id>/ciudades/", views.ciudad_list, name="ciudad_list"),
    path("ciudades/<int:ciudad_id>/colonias/", views.colonia_list, name="colonia_list"),
    path("cp/<str:codigo_postal>/", views.ciudad_por_codigo_postal, name="ciudad_por_codigo_postal"),
]
