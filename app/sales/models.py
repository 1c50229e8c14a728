from django.db import models


class ContratoVenta(models.Model):
    class Estado(models.TextChoices):
        ACTIVO = "activo", "Activo"
        CANCELADO = "cancelado", "Cancelado"
        PAGADO = "pagado", "Pagado"

    lote = models.ForeignKey("inventory.Lote", on_delete=models.PROTECT, related_name="contratos")
    cliente = models.ForeignKey("clients.Cliente", on_delete=models.PROTECT, related_name="contratos")
    precio_total = models.DecimalField("Precio total", max_digits=14, decimal_places=2)
    enganche = models.DecimalField("Enganche", max_digits=14, decimal_places=2)
    plazo_meses = models.PositiveIntegerField("Plazo (meses)")
    estado_contrato = models.CharField(max_length=20, choices=Estado.choices, default=Estado.ACTIVO)
    fecha_contrato = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-fecha_contrato", "-id"]

    def __str__(self):
        return f"Contrato {self.id}"


class Pago(models.Model):
    METODO_PENDIENTE = "pendiente"
    METODO_DEFAULT = "efectivo"

    class Estado(models.TextChoices):
        PENDIENTE = "pendiente", "Pendiente"
        PAGADO = "pagado", "Pagado"
        ATRASADO = "atrasado", "Atrasado"

    contrato = models.ForeignKey(ContratoVenta, on_delete=models.CASCADE, related_name="pagos")
    numero_pago = models.PositiveIntegerField("Número de pago")
    monto = models.DecimalField("Monto", max_digits=14, decimal_places=2)
    fecha_pago = models.DateField("Fecha de vencimiento")
    metodo_pago = models.CharField("Método de pago", max_length=50, default=METODO_PENDIENTE)
    estado_pago = models.CharField(max_length=20, choices=Estado.choices, default=Estado.PENDIENTE)
    fecha_pagado = models.DateField("Fecha en que se pagó", blank=True, null=True)

    class Meta:
        ordering = ["numero_pago"]
        unique_together = ("contrato", "numero_pago")

    def __str__(self):
        return f"Pago {self.numero_pago} del contrato {self.contrato_id}"

    @property
    def is_paid(self):
        return self.estado_pago == self.Estado.PAGADO
