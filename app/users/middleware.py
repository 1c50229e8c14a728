from django.urls import Resolver404, resolve

from core.http import json_error

from .permissions import EXEMPT_NAMESPACES, EXEMPT_URL_NAMES, user_has_permission


class RolePermissionMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        try:
            match = resolve(request.path_info)
        except Resolver404:
            return self.get_response(request)

        view_name = match.view_name
        if not view_name or view_name in EXEMPT_URL_NAMES:
            return self.get_response(request)

        # ── Namespaces exentos (admin) ──
        ns = view_name.split(":")[0] if ":" in view_name else ""
        if ns in EXEMPT_NAMESPACES:
            return self.get_response(request)

        # ── Exigir autenticación en TODAS las vistas no exentas ──
        if not request.user.is_authenticated:
            return json_error("Autenticación requerida", status=401, code="not_authenticated")

        # ── Permisos por rol (fail-closed) ──
        if user_has_permission(request.user, view_name):
            return self.get_response(request)

        return json_error("No tiene permiso para esta operación", status=403, code="forbidden", permiso=view_name)
