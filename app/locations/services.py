from core.exceptions import NotFoundError, ValidationError
from core.normalization import name_search_key, normalize_person_name

from .models import Ciudad, Colonia


def resolve_colonia(*, id_colonia=None, nombre_colonia=None, id_ciudad=None, codigo_postal=""):
    """
    Colonia existente por id, o por nombre dentro de la ciudad; si no existe se
    crea. Debe llamarse dentro de la transacción del llamador.
    """
    if id_colonia:
        colonia = Colonia.objects.filter(pk=id_colonia).first()
        if colonia is None:
            raise NotFoundError("Colonia no encontrada")
        return colonia

    nombre = normalize_person_name(nombre_colonia)
    if not nombre:
        return None
    if not id_ciudad:
        raise ValidationError(
            "Se requiere la ciudad para registrar una colonia nueva",
            errors={"id_ciudad": ["Este campo es obligatorio con nombre_colonia_nueva."]},
        )
    ciudad = Ciudad.objects.filter(pk=id_ciudad).first()
    if ciudad is None:
        raise NotFoundError("Ciudad no encontrada")

    key = name_search_key(nombre)
    for colonia in Colonia.objects.filter(ciudad=ciudad):
        if name_search_key(colonia.nombre_colonia) == key:
            return colonia
    return Colonia.objects.create(
        ciudad=ciudad,
        nombre_colonia=nombre,
        codigo_postal=(codigo_postal or "").strip(),
    )
