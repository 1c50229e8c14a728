def _iso(value):
    return value.isoformat() if value else None


def contrato_to_dict(contrato):
    return {
        "id": contrato.id,
        "id_lote": contrato.lote_id,
        "id_cliente": contrato.cliente_id,
        "precio_total": float(contrato.precio_total),
        "enganche": float(contrato.enganche),
        "plazo_meses": contrato.plazo_meses,
        "estado_contrato": contrato.estado_contrato,
        "fecha_contrato": _iso(contrato.fecha_contrato),
    }


def contrato_list_row(contrato):
    """Contrato con los datos del cliente y del lote, como en el listado."""
    cliente = contrato.cliente
    lote = contrato.lote
    return {
        **contrato_to_dict(contrato),
        "cliente_nombre": cliente.nombre,
        "apellido_paterno": cliente.apellido_paterno,
        "apellido_materno": cliente.apellido_materno,
        "correo": cliente.correo,
        "telefono": cliente.telefono,
        "lote_tipo": lote.tipo,
        "num_lote": lote.num_lote,
        "direccion": lote.direccion,
    }


def pago_to_dict(pago):
    return {
        "id": pago.id,
        "id_contrato": pago.contrato_id,
        "numero_pago": pago.numero_pago,
        "monto": float(pago.monto),
        "fecha_pago": _iso(pago.fecha_pago),
        "metodo_pago": pago.metodo_pago,
        "estado_pago": pago.estado_pago,
        "fecha_pagado": _iso(pago.fecha_pagado),
    }


def summary_to_dict(summary):
    siguiente = summary["siguiente_pago"]
    return {
        **summary,
        "monto_pagado": float(summary["monto_pagado"]),
        "monto_pendiente": float(summary["monto_pendiente"]),
        "siguiente_pago": pago_to_dict(siguiente) if siguiente else None,
    }
