from datetime import date
from decimal import Decimal
from itertools import count

from clients.models import Cliente
from inventory.models import Lote
from locations.models import Ciudad, Colonia, Estado
from sales.models import ContratoVenta, Pago
from sales.schedule import build_schedule, monthly_installment
from users.models import RoleCode, User


class Factory:
    _seq = count(1)

    @classmethod
    def _n(cls):
        return next(cls._seq)

    @classmethod
    def user(cls, *, role=RoleCode.ADMIN, password="pass1234", **kwargs):
        n = cls._n()
        defaults = {
            "username": f"user{n}",
            "email": f"user{n}@example.com",
            "is_active": True,
            "role": role,
        }
        defaults.update(kwargs)
        return User.objects.create_user(password=password, **defaults)

    @classmethod
    def estado(cls, **kwargs):
        n = cls._n()
        defaults = {"nombre_estado": f"Estado {n}"}
        defaults.update(kwargs)
        return Estado.objects.create(**defaults)

    @classmethod
    def ciudad(cls, *, estado=None, **kwargs):
        n = cls._n()
        defaults = {"estado": estado or cls.estado(), "nombre_ciudad": f"Ciudad {n}"}
        defaults.update(kwargs)
        return Ciudad.objects.create(**defaults)

    @classmethod
    def colonia(cls, *, ciudad=None, **kwargs):
        n = cls._n()
        defaults = {
            "ciudad": ciudad or cls.ciudad(),
            "nombre_colonia": f"Colonia {n}",
            "codigo_postal": f"{10000 + n}"[-5:],
        }
        defaults.update(kwargs)
        return Colonia.objects.create(**defaults)

    @classmethod
    def lote(cls, **kwargs):
        n = cls._n()
        defaults = {
            "tipo": Lote.Tipo.TERRENO,
            "num_lote": f"L-{n}",
            "manzana": "A",
            "direccion": f"Calle {n}",
            "superficie_m2": Decimal("160.00"),
            "precio": Decimal("120000.00"),
        }
        defaults.update(kwargs)
        return Lote.objects.create(**defaults)

    @classmethod
    def cliente(cls, **kwargs):
        n = cls._n()
        defaults = {
            "nombre": "Ana",
            "apellido_paterno": "López",
            "apellido_materno": "Ruiz",
            "correo": f"cliente{n}@example.com",
            "curp": f"LORA900101MDFPZN{n:02d}"[-18:],
        }
        defaults.update(kwargs)
        return Cliente.objects.create(**defaults)

    @classmethod
    def contrato(
        cls,
        *,
        lote=None,
        cliente=None,
        precio_total="120000.00",
        enganche="20000.00",
        plazo_meses=3,
        fecha_inicio=None,
        **kwargs,
    ):
        lote = lote or cls.lote(estado_propiedad=Lote.Estado.EN_PROCESO)
        contrato = ContratoVenta.objects.create(
            lote=lote,
            cliente=cliente or cls.cliente(),
            precio_total=Decimal(str(precio_total)),
            enganche=Decimal(str(enganche)),
            plazo_meses=plazo_meses,
            **kwargs,
        )
        mensualidad = monthly_installment(contrato.precio_total, contrato.enganche, plazo_meses)
        Pago.objects.bulk_create(
            build_schedule(contrato.pk, fecha_inicio or date(2026, 1, 15), plazo_meses, mensualidad)
        )
        return contrato
