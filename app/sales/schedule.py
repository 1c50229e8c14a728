"""
Calendario de mensualidades de un contrato.

Funciones puras: no tocan la base de datos, solo construyen filas ``Pago``
sin guardar para que el servicio las inserte dentro de su transacción.
"""
from decimal import ROUND_HALF_UP, Decimal

from dateutil.relativedelta import relativedelta

from .models import Pago

CENTS = Decimal("0.01")


def add_months_preserve_day(value, months):
    """
    Avanza ``months`` meses conservando el día; si el mes destino es más
    corto se usa su último día (31-ene + 1 mes -> 29-feb en año bisiesto).
    """
    return value + relativedelta(months=months)


def monthly_installment(precio_total, enganche, plazo_meses):
    if plazo_meses < 1:
        raise ValueError("plazo_meses debe ser al menos 1")
    financiado = Decimal(precio_total) - Decimal(enganche)
    return (financiado / Decimal(plazo_meses)).quantize(CENTS, rounding=ROUND_HALF_UP)


def build_schedule(contrato_id, fecha_inicio, plazo_meses, mensualidad):
    # Cada vencimiento se calcula desde la fecha de inicio, no desde el anterior,
    # para que un recorte a fin de mes no se arrastre a los meses siguientes.
    return [
        Pago(
            contrato_id=contrato_id,
            numero_pago=numero,
            monto=mensualidad,
            fecha_pago=add_months_preserve_day(fecha_inicio, numero),
            metodo_pago=Pago.METODO_PENDIENTE,
            estado_pago=Pago.Estado.PENDIENTE,
        )
        for numero in range(1, plazo_meses + 1)
    ]
