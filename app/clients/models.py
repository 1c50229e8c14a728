from django.db import models

from core.storages import PrivateMediaStorage


class Cliente(models.Model):
    """
    Comprador. Los clientes creados desde el flujo de contratos solo traen
    nombre, apellidos y correo; la CURP se completa después.
    """
    nombre = models.CharField("Nombre", max_length=100)
    apellido_paterno = models.CharField("Apellido paterno", max_length=50)
    apellido_materno = models.CharField("Apellido materno", max_length=50, blank=True, null=True)
    correo = models.EmailField("Correo", unique=True)
    telefono = models.CharField("Teléfono", max_length=20, unique=True, blank=True, null=True)
    curp = models.CharField("CURP", max_length=18, unique=True, blank=True, null=True)
    clave_elector = models.CharField("Clave de elector", max_length=20, unique=True, blank=True, null=True)
    doc_identificacion = models.FileField(
        "Identificación (PDF)",
        upload_to="clientes/identificaciones/",
        storage=PrivateMediaStorage(),
        blank=True,
        null=True,
    )
    doc_curp = models.FileField(
        "CURP (PDF)",
        upload_to="clientes/curp/",
        storage=PrivateMediaStorage(),
        blank=True,
        null=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return self.full_name

    @property
    def full_name(self):
        parts = [self.nombre, self.apellido_paterno, self.apellido_materno]
        return " ".join(part for part in parts if part)
