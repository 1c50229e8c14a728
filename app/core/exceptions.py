"""
Errores de dominio.

Los servicios lanzan estas excepciones y la capa HTTP (``core.http.api_errors``)
las traduce una sola vez a la respuesta JSON correspondiente.
"""


class DomainError(Exception):
    status_code = 400
    code = "error"
    default_message = "Error en la solicitud"

    def __init__(self, message=None, *, code=None, errors=None):
        self.message = message or self.default_message
        if code:
            self.code = code
        self.errors = errors or {}
        super().__init__(self.message)

    def as_payload(self):
        payload = {"message": self.message, "code": self.code}
        if self.errors:
            payload["errors"] = self.errors
        return payload


class ValidationError(DomainError):
    status_code = 400
    code = "validation_error"
    default_message = "Error de validación"


class BusinessRuleError(DomainError):
    status_code = 400
    code = "business_rule"
    default_message = "La operación viola una regla de negocio"


class NotFoundError(DomainError):
    status_code = 404
    code = "not_found"
    default_message = "Recurso no encontrado"


class PersistenceError(DomainError):
    status_code = 500
    code = "persistence_error"
    default_message = "Error de persistencia"

    def as_payload(self):
        payload = super().as_payload()
        cause = self.__cause__
        payload["error"] = str(cause) if cause else self.message
        return payload


class DeliveryError(DomainError):
    """Un colaborador externo (correo) rechazó o no recibió el envío."""
    status_code = 502
    code = "delivery_error"
    default_message = "No se pudo entregar la notificación"
