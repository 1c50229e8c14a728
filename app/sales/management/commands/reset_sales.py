"""
Management command para borrar contratos y pagos y liberar los lotes.

Uso:
    python manage.py reset_sales
    python manage.py reset_sales --lote <id>
"""

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from inventory.models import Lote
from sales.models import ContratoVenta, Pago


class Command(BaseCommand):
    help = (
        "Borra contratos (ContratoVenta) y sus pagos, y regresa los lotes "
        "involucrados al estado disponible."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--lote",
            type=int,
            default=None,
            help="Id del lote. Si se omite, borra los contratos de TODOS los lotes.",
        )
        parser.add_argument(
            "--no-input",
            action="store_true",
            help="Saltar confirmacion (para scripts automatizados).",
        )

    def handle(self, *args, **options):
        lote_id = options["lote"]
        no_input = options["no_input"]

        contratos_qs = ContratoVenta.objects.all()
        scope = "TODOS los lotes"
        if lote_id:
            contratos_qs = contratos_qs.filter(lote_id=lote_id)
            scope = f"lote {lote_id}"

        contrato_count = contratos_qs.count()
        if contrato_count == 0:
            self.stdout.write(self.style.WARNING("No hay contratos para borrar."))
            return

        contrato_ids = list(contratos_qs.values_list("id", flat=True))
        lote_ids = list(contratos_qs.values_list("lote_id", flat=True).distinct())
        pago_count = Pago.objects.filter(contrato_id__in=contrato_ids).count()

        self.stdout.write("")
        self.stdout.write(self.style.ERROR("=" * 60))
        self.stdout.write(self.style.ERROR("  ATENCION: OPERACION DESTRUCTIVA E IRREVERSIBLE"))
        self.stdout.write(self.style.ERROR("=" * 60))
        self.stdout.write("")
        self.stdout.write(f"  Alcance:              {scope}")
        self.stdout.write(f"  Contratos a borrar:   {contrato_count}")
        self.stdout.write(f"  Pagos a borrar:       {pago_count}")
        self.stdout.write(f"  Lotes a liberar:      {len(lote_ids)}")
        self.stdout.write("")

        if not no_input:
            confirm = input('  Escribe "BORRAR TODO" para confirmar: ')
            if confirm.strip() != "BORRAR TODO":
                raise CommandError("Operacion cancelada.")

        with transaction.atomic():
            # Pago cae en CASCADE con el contrato
            deleted, detail = ContratoVenta.objects.filter(id__in=contrato_ids).delete()
            liberados = Lote.objects.filter(id__in=lote_ids).update(
                estado_propiedad=Lote.Estado.DISPONIBLE
            )

        self.stdout.write("  Detalle de CASCADE:")
        for model_label, count in sorted(detail.items()):
            self.stdout.write(f"    {model_label}: {count}")
        self.stdout.write("")
        self.stdout.write(
            self.style.SUCCESS(f"Listo. {contrato_count} contratos eliminados, {liberados} lotes disponibles.")
        )
