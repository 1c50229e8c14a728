from django.db import models


class Estado(models.Model):
    nombre_estado = models.CharField("Estado", max_length=100, unique=True)

    class Meta:
        ordering = ["nombre_estado"]

    def __str__(self):
        return self.nombre_estado


class Ciudad(models.Model):
    estado = models.ForeignKey(Estado, on_delete=models.PROTECT, related_name="ciudades")
    nombre_ciudad = models.CharField("Ciudad", max_length=100)

    class Meta:
        verbose_name_plural = "Ciudades"
        ordering = ["nombre_ciudad"]
        unique_together = ("estado", "nombre_ciudad")

    def __str__(self):
        return f"{self.nombre_ciudad}, {self.estado.nombre_estado}"


class Colonia(models.Model):
    ciudad = models.ForeignKey(Ciudad, on_delete=models.PROTECT, related_name="colonias")
    nombre_colonia = models.CharField("Colonia", max_length=150)
    codigo_postal = models.CharField("Código Postal", max_length=5, blank=True, db_index=True)

    class Meta:
        ordering = ["nombre_colonia"]

    def __str__(self):
        return self.nombre_colonia
