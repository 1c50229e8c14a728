import logging

from django.db.models import ProtectedError

from core.exceptions import BusinessRuleError, NotFoundError
from core.http import raise_for_form
from core.normalization import normalize_curp, normalize_email

from .models import Cliente

logger = logging.getLogger(__name__)


def get_by_id(cliente_id):
    return Cliente.objects.filter(pk=cliente_id).first()


def get_by_email(correo):
    correo = normalize_email(correo)
    if not correo:
        return None
    return Cliente.objects.filter(correo=correo).first()


def get_by_curp(curp):
    cliente = Cliente.objects.filter(curp=normalize_curp(curp)).first()
    if cliente is None:
        raise NotFoundError("Cliente no encontrado")
    return cliente


def insert(*, nombre, apellido_paterno, correo, apellido_materno=None, telefono=None):
    """Alta mínima usada por el flujo de contratos; la CURP se captura después."""
    cliente = Cliente.objects.create(
        nombre=nombre,
        apellido_paterno=apellido_paterno,
        apellido_materno=apellido_materno,
        correo=normalize_email(correo),
        telefono=telefono,
    )
    logger.info("Cliente %s creado desde contrato (%s)", cliente.pk, cliente.correo)
    return cliente


def save_cliente(form):
    raise_for_form(form)
    return form.save()


def delete_cliente(cliente):
    try:
        cliente.delete()
    except ProtectedError:
        raise BusinessRuleError(
            "El cliente tiene contratos asociados y no puede eliminarse",
            code="cliente_con_contratos",
        )
