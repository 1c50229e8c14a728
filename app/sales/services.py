import logging
from dataclasses import dataclass
from decimal import Decimal
from smtplib import SMTPException
from typing import List

from django.conf import settings
from django.core.mail import send_mail
from django.db import DatabaseError, transaction
from django.template.loader import render_to_string
from django.utils import timezone

from clients import services as clients
from clients.models import Cliente
from core.exceptions import (
    BusinessRuleError,
    DeliveryError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from core.normalization import normalize_email, normalize_phone
from inventory import services as inventory
from inventory.models import Lote

from .models import ContratoVenta, Pago
from .schedule import CENTS, build_schedule, monthly_installment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContratoCreado:
    contrato: ContratoVenta
    mensualidad: Decimal
    pagos: List[Pago]


def reserve_lot(id_lote) -> Lote:
    """Bloquea la fila del lote hasta el commit; solo acepta lotes disponibles."""
    lote = inventory.get_for_update(id_lote)
    if not lote.is_available:
        raise BusinessRuleError(
            f"Lote no disponible (estado actual: {lote.estado_propiedad})",
            code="lote_no_disponible",
        )
    return lote


def resolve_customer(data) -> Cliente:
    """
    Cliente que paga el contrato: por id, por correo, o creado con los datos
    del payload cuando el correo no corresponde a nadie.
    """
    id_cliente = data.get("id_cliente")
    if id_cliente:
        cliente = clients.get_by_id(id_cliente)
        if cliente is None:
            raise NotFoundError("Cliente indicado no existe", code="cliente_no_encontrado")
        return cliente

    correo = normalize_email(data.get("correo_cliente"))
    if not correo:
        raise ValidationError("Debe proporcionar id_cliente o correo_cliente con datos para crear cliente")

    cliente = clients.get_by_email(correo)
    if cliente is not None:
        return cliente

    nombre = (data.get("nombre") or "").strip()
    apellido_paterno = (data.get("apellido_paterno") or "").strip()
    if not nombre or not apellido_paterno:
        missing = [field for field, value in (("nombre", nombre), ("apellido_paterno", apellido_paterno)) if not value]
        raise ValidationError(
            "No existe cliente y faltan datos para crearlo (nombre/apellido_paterno)",
            errors={field: ["Este campo es obligatorio para crear el cliente."] for field in missing},
        )
    return clients.insert(
        nombre=nombre,
        apellido_paterno=apellido_paterno,
        apellido_materno=(data.get("apellido_materno") or "").strip() or None,
        correo=correo,
        telefono=normalize_phone(data.get("telefono")),
    )


def mark_lot_in_process(lote):
    return inventory.set_state(lote, Lote.Estado.EN_PROCESO)


def create_contract(data) -> ContratoCreado:
    """
    Alta de contrato en una sola transacción: reserva del lote, cliente,
    contrato, calendario de pagos y cambio de estado del lote. Cualquier
    error deshace todo.
    """
    precio_total = data["precio_total"]
    enganche = data["enganche"]
    plazo_meses = data["plazo_meses"]
    if enganche >= precio_total:
        raise BusinessRuleError("El enganche debe ser menor que el precio total", code="enganche_invalido")

    try:
        with transaction.atomic():
            lote = reserve_lot(data["id_lote"])
            cliente = resolve_customer(data)
            contrato = ContratoVenta.objects.create(
                lote=lote,
                cliente=cliente,
                precio_total=precio_total,
                enganche=enganche,
                plazo_meses=plazo_meses,
                estado_contrato=data.get("estado_contrato") or ContratoVenta.Estado.ACTIVO,
            )
            mensualidad = monthly_installment(precio_total, enganche, plazo_meses)
            if mensualidad < CENTS:
                raise BusinessRuleError(
                    "La mensualidad resultante debe ser de al menos 0.01",
                    code="mensualidad_invalida",
                )
            fecha_inicio = timezone.localtime(contrato.fecha_contrato).date()
            Pago.objects.bulk_create(build_schedule(contrato.pk, fecha_inicio, plazo_meses, mensualidad))
            mark_lot_in_process(lote)
    except DatabaseError as exc:
        logger.error("Error al crear contrato para el lote %s", data.get("id_lote"), exc_info=exc)
        raise PersistenceError("Error al crear contrato") from exc

    pagos = list(contrato.pagos.order_by("numero_pago"))
    logger.info(
        "Contrato %s creado: lote=%s cliente=%s mensualidad=%s pagos=%s",
        contrato.pk, lote.pk, cliente.pk, mensualidad, len(pagos),
    )
    return ContratoCreado(contrato=contrato, mensualidad=mensualidad, pagos=pagos)


def get_contrato(contrato_id):
    contrato = (
        ContratoVenta.objects.select_related("cliente", "lote__colonia__ciudad")
        .prefetch_related("pagos")
        .filter(pk=contrato_id)
        .first()
    )
    if contrato is None:
        raise NotFoundError("Contrato no encontrado")
    return contrato


def get_pago(pago_id):
    pago = Pago.objects.select_related("contrato__cliente", "contrato__lote").filter(pk=pago_id).first()
    if pago is None:
        raise NotFoundError("Pago no encontrado")
    return pago


@transaction.atomic
def register_payment(pago_id, metodo_pago=None):
    pago = Pago.objects.select_for_update().filter(pk=pago_id).first()
    if pago is None:
        raise NotFoundError("Pago no encontrado")
    if pago.is_paid:
        raise BusinessRuleError("El pago ya fue registrado", code="pago_ya_registrado")

    pago.estado_pago = Pago.Estado.PAGADO
    pago.metodo_pago = metodo_pago or Pago.METODO_DEFAULT
    pago.fecha_pagado = timezone.localdate()
    pago.save(update_fields=["estado_pago", "metodo_pago", "fecha_pagado"])

    contrato = pago.contrato
    if not contrato.pagos.exclude(estado_pago=Pago.Estado.PAGADO).exists():
        contrato.estado_contrato = ContratoVenta.Estado.PAGADO
        contrato.save(update_fields=["estado_contrato"])
        logger.info("Contrato %s liquidado", contrato.pk)
    return pago


def payment_summary(contrato):
    """Resumen de cobranza de un contrato (usa los pagos precargados si los hay)."""
    pagos = sorted(contrato.pagos.all(), key=lambda pago: pago.numero_pago)
    pagados = [pago for pago in pagos if pago.estado_pago == Pago.Estado.PAGADO]
    atrasados = [pago for pago in pagos if pago.estado_pago == Pago.Estado.ATRASADO]
    total_pagado = sum((pago.monto for pago in pagados), Decimal("0"))
    total_pendiente = sum((pago.monto for pago in pagos if not pago.is_paid), Decimal("0"))
    siguiente = next((pago for pago in pagos if not pago.is_paid), None)
    return {
        "total_pagos": len(pagos),
        "pagos_realizados": len(pagados),
        "pagos_pendientes": len(pagos) - len(pagados),
        "pagos_atrasados": len(atrasados),
        "monto_pagado": total_pagado,
        "monto_pendiente": total_pendiente,
        "siguiente_pago": siguiente,
    }


def mark_overdue(today=None):
    today = today or timezone.localdate()
    return Pago.objects.filter(estado_pago=Pago.Estado.PENDIENTE, fecha_pago__lt=today).update(
        estado_pago=Pago.Estado.ATRASADO
    )


def notify_payment(pago_id):
    """Envía al cliente el recordatorio de una mensualidad no cubierta."""
    pago = get_pago(pago_id)
    if pago.is_paid:
        raise BusinessRuleError("El pago ya fue cubierto", code="pago_ya_registrado")

    cliente = pago.contrato.cliente
    context = {"pago": pago, "cliente": cliente, "lote": pago.contrato.lote}
    subject = f"Recordatorio de pago {pago.numero_pago} - contrato {pago.contrato_id}"
    body = render_to_string("sales/email/recordatorio_pago.txt", context)
    try:
        send_mail(subject, body, settings.DEFAULT_FROM_EMAIL, [cliente.correo])
    except (SMTPException, OSError) as exc:
        logger.error("No se pudo enviar el recordatorio del pago %s a %s", pago.pk, cliente.correo, exc_info=exc)
        raise DeliveryError("No se pudo enviar la notificación") from exc
    logger.info("Recordatorio del pago %s enviado a %s", pago.pk, cliente.correo)
    return pago
