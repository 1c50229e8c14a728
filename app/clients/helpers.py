from core.storages import file_url


def cliente_to_dict(cliente):
    return {
        "id": cliente.id,
        "nombre": cliente.nombre,
        "apellido_paterno": cliente.apellido_paterno,
        "apellido_materno": cliente.apellido_materno,
        "correo": cliente.correo,
        "telefono": cliente.telefono,
        "curp": cliente.curp,
        "clave_elector": cliente.clave_elector,
        "doc_identificacion": file_url(cliente.doc_identificacion),
        "doc_curp": file_url(cliente.doc_curp),
    }
