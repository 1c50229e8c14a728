from django.db import transaction
from django.db.models import ProtectedError

from core.exceptions import BusinessRuleError, NotFoundError
from core.http import raise_for_form
from locations.services import resolve_colonia

from .models import Lote


def get_lote(lote_id):
    lote = Lote.objects.select_related("colonia__ciudad__estado").filter(pk=lote_id).first()
    if lote is None:
        raise NotFoundError("Lote no encontrado")
    return lote


def get_for_update(lote_id):
    """Fila del lote con bloqueo exclusivo hasta el fin de la transacción."""
    lote = Lote.objects.select_for_update().filter(pk=lote_id).first()
    if lote is None:
        raise NotFoundError("Lote no encontrado")
    return lote


def set_state(lote, estado):
    lote.estado_propiedad = estado
    lote.save(update_fields=["estado_propiedad", "updated_at"])
    return lote


@transaction.atomic
def save_lote(form):
    """Guarda un LoteForm resolviendo (o creando) su colonia en la misma transacción."""
    cleaned = raise_for_form(form)
    lote = form.save(commit=False)
    colonia = resolve_colonia(
        id_colonia=cleaned.get("id_colonia"),
        nombre_colonia=cleaned.get("nombre_colonia_nueva"),
        id_ciudad=cleaned.get("id_ciudad"),
        codigo_postal=cleaned.get("codigo_postal"),
    )
    if colonia is not None:
        lote.colonia = colonia
    lote.save()
    return lote


def delete_lote(lote):
    try:
        lote.delete()
    except ProtectedError:
        raise BusinessRuleError(
            "El lote tiene contratos asociados y no puede eliminarse",
            code="lote_con_contratos",
        )
