from core.storages import file_url


def lote_to_dict(lote):
    colonia = lote.colonia
    ciudad = colonia.ciudad if colonia else None
    return {
        "id": lote.id,
        "tipo": lote.tipo,
        "num_lote": lote.num_lote,
        "manzana": lote.manzana,
        "direccion": lote.direccion,
        "id_colonia": colonia.id if colonia else None,
        "nombre_colonia": colonia.nombre_colonia if colonia else None,
        "id_ciudad": ciudad.id if ciudad else None,
        "nombre_ciudad": ciudad.nombre_ciudad if ciudad else None,
        "id_estado": ciudad.estado_id if ciudad else None,
        "superficie_m2": float(lote.superficie_m2),
        "precio": float(lote.precio),
        "estado_propiedad": lote.estado_propiedad,
        "imagen": file_url(lote.imagen),
    }
