from django.contrib import admin

from .models import Cliente


@admin.register(Cliente)
class ClienteAdmin(admin.ModelAdmin):
    list_display = ("nombre", "apellido_paterno", "apellido_materno", "correo", "telefono", "curp")
    search_fields = ("nombre", "apellido_paterno", "correo", "curp")
    ordering = ("id",)
