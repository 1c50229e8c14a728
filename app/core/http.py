import json
import logging
from functools import wraps

from django.http import JsonResponse

from .exceptions import DomainError, ValidationError

logger = logging.getLogger(__name__)


def json_error(message, status=400, code="bad_request", **extra):
    return JsonResponse({"message": message, "code": code, **extra}, status=status)


def parse_json_body(request):
    """Decodifica el cuerpo JSON; solo se aceptan objetos."""
    if request.content_type and request.content_type.startswith("multipart/"):
        return {key: request.POST.get(key) for key in request.POST}
    try:
        data = json.loads(request.body or b"{}")
    except ValueError:
        raise ValidationError("JSON inválido", code="invalid_json")
    if not isinstance(data, dict):
        raise ValidationError("El cuerpo debe ser un objeto JSON", code="invalid_json")
    return data


def form_errors(form):
    return {field: [str(message) for message in messages] for field, messages in form.errors.items()}


def raise_for_form(form, message="Error de validación"):
    if not form.is_valid():
        raise ValidationError(message, errors=form_errors(form))
    return form.cleaned_data


def api_errors(view):
    """Traduce los errores de dominio a JSON; los inesperados se registran con traceback."""

    @wraps(view)
    def wrapper(request, *args, **kwargs):
        try:
            return view(request, *args, **kwargs)
        except DomainError as exc:
            if exc.status_code >= 500:
                logger.error("%s %s -> %s", request.method, request.path, exc.message, exc_info=exc)
            return JsonResponse(exc.as_payload(), status=exc.status_code)
        except Exception as exc:
            logger.exception("Error inesperado en %s %s", request.method, request.path)
            return JsonResponse(
                {"message": "Error interno del servidor", "error": str(exc)},
                status=500,
            )

    return wrapper
