from django.contrib import admin

from .models import ContratoVenta, Pago


class PagoInline(admin.TabularInline):
    model = Pago
    extra = 0
    fields = ("numero_pago", "monto", "fecha_pago", "metodo_pago", "estado_pago", "fecha_pagado")
    ordering = ("numero_pago",)


@admin.register(ContratoVenta)
class ContratoVentaAdmin(admin.ModelAdmin):
    list_display = ("id", "lote", "cliente", "precio_total", "enganche", "plazo_meses", "estado_contrato", "fecha_contrato")
    list_filter = ("estado_contrato",)
    search_fields = ("id", "cliente__correo", "lote__num_lote")
    ordering = ("-fecha_contrato",)
    inlines = [PagoInline]


@admin.register(Pago)
class PagoAdmin(admin.ModelAdmin):
    list_display = ("contrato", "numero_pago", "monto", "fecha_pago", "estado_pago")
    list_filter = ("estado_pago",)
    search_fields = ("contrato__id",)
