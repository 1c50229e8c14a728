from django.contrib import admin

from .models import Ciudad, Colonia, Estado


@admin.register(Estado)
class EstadoAdmin(admin.ModelAdmin):
    search_fields = ("nombre_estado",)


@admin.register(Ciudad)
class CiudadAdmin(admin.ModelAdmin):
    list_display = ("nombre_ciudad", "estado")
    list_filter = ("estado",)
    search_fields = ("nombre_ciudad",)


@admin.register(Colonia)
class ColoniaAdmin(admin.ModelAdmin):
    list_display = ("nombre_colonia", "codigo_postal", "ciudad")
    search_fields = ("nombre_colonia", "codigo_postal")
