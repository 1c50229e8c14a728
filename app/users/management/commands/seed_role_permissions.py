from django.core.management.base import BaseCommand

from users.models import RoleCode, RolePermission
from users.permissions import PERMISSION_LABELS, list_permission_candidates

COMMON_KEYS = {
    "users:me",
    "locations:estado_list",
    "locations:ciudad_list",
    "locations:colonia_list",
    "locations:ciudad_por_codigo_postal",
}

VENDEDOR_KEYS = COMMON_KEYS | {
    "inventory:lote_list",
    "inventory:lote_detail",
    "sales:contrato_list",
    "sales:contrato_create",
    "sales:contrato_detalle",
    "sales:pago_detalle",
    "sales:pago_resumen",
}


def _grant(role_code, key, label, path):
    RolePermission.objects.update_or_create(
        role_code=role_code,
        permission_key=key,
        defaults={"allowed": True, "label": label, "path": path},
    )


def _secretaria_allowed(key: str) -> bool:
    return key in COMMON_KEYS or key.split(":", 1)[0] in {"inventory", "clients", "sales"}


class Command(BaseCommand):
    help = "Carga una matriz inicial de permisos por rol (fail-closed safe defaults)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Elimina permisos existentes antes de cargar la matriz.",
        )

    def handle(self, *args, **options):
        if options["reset"]:
            RolePermission.objects.all().delete()
            self.stdout.write(self.style.WARNING("Permisos existentes eliminados."))

        for candidate in list_permission_candidates():
            key = candidate.key
            label = PERMISSION_LABELS.get(key, candidate.label)
            path = candidate.path

            # ADMIN y ENCARGADO: acceso total funcional (no superuser)
            _grant(RoleCode.ADMIN, key, label, path)
            _grant(RoleCode.ENCARGADO, key, label, path)

            # SECRETARIA: clientes, lotes, contratos y pagos
            if _secretaria_allowed(key):
                _grant(RoleCode.SECRETARIA, key, label, path)

            # VENDEDOR: consulta de lotes y alta/consulta de contratos
            if key in VENDEDOR_KEYS:
                _grant(RoleCode.VENDEDOR, key, label, path)

        total = RolePermission.objects.filter(allowed=True).count()
        self.stdout.write(self.style.SUCCESS(f"Permisos cargados: {total}"))
