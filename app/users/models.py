from django.contrib.auth.models import AbstractUser
from django.db import models


class RoleCode(models.TextChoices):
    ADMIN = "ADMIN", "Administrador"
    ENCARGADO = "ENCARGADO", "Encargado"
    SECRETARIA = "SECRETARIA", "Secretaria"
    VENDEDOR = "VENDEDOR", "Vendedor"


class User(AbstractUser):
    """
    Usuario del sistema. El inicio de sesión es por correo más un código OTP.
    """
    Role = RoleCode

    email = models.EmailField("Correo", unique=True)
    role = models.CharField(max_length=20, choices=RoleCode.choices, default=RoleCode.VENDEDOR)
    phone = models.CharField("Teléfono", max_length=10, blank=True)

    def __str__(self):
        return f"{self.username} ({self.role})"


class RolePermission(models.Model):
    role_code = models.CharField("Rol", max_length=20, choices=RoleCode.choices)
    permission_key = models.CharField("Permiso", max_length=200)
    allowed = models.BooleanField(default=True)
    label = models.CharField("Etiqueta", max_length=200, blank=True)
    path = models.CharField("Ruta", max_length=200, blank=True)

    class Meta:
        unique_together = ("role_code", "permission_key")

    def __str__(self):
        return f"{self.get_role_code_display()} -> {self.permission_key}"
