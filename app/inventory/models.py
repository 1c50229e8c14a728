from django.db import models
from core.storages import PublicMediaStorage


class Lote(models.Model):
    """
    Propiedad vendible (casa, departamento, terreno, local).
    """
    class Tipo(models.TextChoices):
        CASA = 'casa', 'Casa'
        DEPARTAMENTO = 'departamento', 'Departamento'
        TERRENO = 'terreno', 'Terreno'
        LOCAL = 'local', 'Local comercial'
        OTRO = 'otro', 'Otro'

    class Estado(models.TextChoices):
        DISPONIBLE = 'disponible', 'Disponible'
        EN_PROCESO = 'en proceso', 'En proceso'
        RENTADA = 'rentada', 'Rentada'
        VENDIDA = 'vendida', 'Vendida'

    tipo = models.CharField("Tipo", max_length=20, choices=Tipo.choices)
    num_lote = models.CharField("Número de lote", max_length=20)
    manzana = models.CharField("Manzana", max_length=20, blank=True, null=True)
    direccion = models.CharField("Dirección", max_length=255, blank=True)
    colonia = models.ForeignKey(
        'locations.Colonia',
        on_delete=models.PROTECT,
        related_name='lotes',
        blank=True,
        null=True,
    )
    superficie_m2 = models.DecimalField("Superficie (m2)", max_digits=10, decimal_places=2)
    precio = models.DecimalField("Precio", max_digits=14, decimal_places=2)
    estado_propiedad = models.CharField(
        "Estado de la propiedad",
        max_length=20,
        choices=Estado.choices,
        default=Estado.DISPONIBLE,
    )
    imagen = models.ImageField(
        "Foto",
        upload_to='lotes/',
        storage=PublicMediaStorage(),
        blank=True,
        null=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['id']

    def __str__(self):
        if self.manzana:
            return f"Lote {self.num_lote} Mz {self.manzana}"
        return f"Lote {self.num_lote}"

    @property
    def is_available(self):
        return self.estado_propiedad == self.Estado.DISPONIBLE
