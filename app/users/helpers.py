def user_to_dict(user):
    return {
        "id": user.id,
        "usuario": user.username,
        "correo": user.email,
        "telefono": user.phone,
        "rol": user.role,
        "nombre": user.first_name,
        "apellido": user.last_name,
        "is_active": user.is_active,
    }
