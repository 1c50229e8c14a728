from django.contrib import admin

from .models import Lote


@admin.register(Lote)
class LoteAdmin(admin.ModelAdmin):
    list_display = ("num_lote", "manzana", "tipo", "colonia", "precio", "estado_propiedad")
    list_filter = ("estado_propiedad", "tipo")
    search_fields = ("num_lote", "manzana", "direccion")
    ordering = ("id",)
