from dataclasses import dataclass
from typing import Iterable, List, Optional

from django.urls import URLPattern, URLResolver, get_resolver

from .models import RolePermission


EXEMPT_URL_NAMES = {
    "users:login",
    "users:verify_otp",
    "users:logout",
    "users:password_reset_request",
    "users:password_reset_confirm",
}
EXEMPT_NAMESPACES = {"admin"}


@dataclass(frozen=True)
class PermissionCandidate:
    key: str
    label: str
    path: str
    app: str


def _view_label(pattern: URLPattern) -> str:
    callback = pattern.callback
    view_class = getattr(callback, "view_class", None)
    if view_class is not None:
        return view_class.__name__
    return getattr(callback, "__name__", "view")


def _iter_patterns(
    patterns: Iterable,
    namespace: Optional[str] = None,
    prefix: str = "",
    app: Optional[str] = None,
) -> Iterable[PermissionCandidate]:
    for p in patterns:
        if isinstance(p, URLResolver):
            ns = namespace
            if p.namespace:
                ns = f"{namespace}:{p.namespace}" if namespace else p.namespace
            next_prefix = prefix + str(p.pattern)
            next_app = p.app_name or app
            yield from _iter_patterns(p.url_patterns, ns, next_prefix, next_app)
            continue

        if not isinstance(p, URLPattern) or not p.name:
            continue

        key = f"{namespace}:{p.name}" if namespace else p.name
        if namespace in EXEMPT_NAMESPACES or key in EXEMPT_URL_NAMES:
            continue

        yield PermissionCandidate(key=key, label=_view_label(p), path=prefix + str(p.pattern), app=app or "")


def list_permission_candidates() -> List[PermissionCandidate]:
    resolver = get_resolver()
    items = list(_iter_patterns(resolver.url_patterns))
    return sorted(items, key=lambda x: (x.app, x.key))


def user_has_permission(user, permission_key: str) -> bool:
    if getattr(user, "is_superuser", False):
        return True
    if not user.is_authenticated or not getattr(user, "role", None):
        return False
    return RolePermission.objects.filter(
        permission_key=permission_key,
        role_code=user.role,
        allowed=True,
    ).exists()


PERMISSION_LABELS = {
    # ── Ubicaciones ──
    "locations:estado_list": "Ver estados",
    "locations:ciudad_list": "Ver ciudades de un estado",
    "locations:colonia_list": "Ver colonias de una ciudad",
    "locations:ciudad_por_codigo_postal": "Buscar ciudad por código postal",
    # ── Inventario ──
    "inventory:lote_list": "Ver y registrar lotes",
    "inventory:lote_detail": "Consultar, editar y eliminar lote",
    # ── Clientes ──
    "clients:cliente_list": "Ver y registrar clientes",
    "clients:cliente_detail": "Consultar, editar y eliminar cliente",
    # ── Ventas ──
    "sales:contrato_list": "Ver y crear contratos",
    "sales:contrato_create": "Crear contrato",
    "sales:contrato_detalle": "Ver detalle de contrato",
    "sales:pago_detalle": "Ver pagos de un contrato",
    "sales:pago_registrar": "Registrar pago",
    "sales:pago_resumen": "Ver resumen de cobranza",
    "sales:pago_notificar": "Enviar recordatorio de pago",
    # ── Usuarios ──
    "users:me": "Ver mi sesión",
    "users:user_list": "Ver y crear usuarios",
    "users:user_detail": "Consultar, editar y eliminar usuario",
}
